"""Civic Queue - routing and priority queue for civic complaints"""
