"""
Core infrastructure: configuration, logging, database and shared helpers.
"""
