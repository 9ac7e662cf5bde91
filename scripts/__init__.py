"""
Backend Scripts Module

Available scripts:
    - init_routing.py: Seeds or prints the routing configuration

Usage:
    python -m scripts.init_routing
    python -m scripts.init_routing --show
"""
