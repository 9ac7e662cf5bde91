"""Domain layer - enums, models, errors and built-in routing tables"""
