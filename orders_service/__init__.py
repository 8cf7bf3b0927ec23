"""
Orders Service

Order placement for an e-commerce backend: validates customers and stock,
captures line prices, writes orders and decrements inventory.
"""
__version__ = "1.0.0"
