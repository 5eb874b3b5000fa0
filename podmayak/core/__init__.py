"""
Core application infrastructure: settings, logging, database, auth
"""
