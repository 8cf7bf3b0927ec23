"""
Core - configuration, database access and errors
"""
