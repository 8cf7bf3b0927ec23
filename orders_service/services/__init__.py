"""
Service Layer - Business logic
"""
