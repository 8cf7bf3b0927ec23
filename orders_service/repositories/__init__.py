"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.
"""
from orders_service.repositories.base import CustomerLookup, ProductLookup, OrderStore
from orders_service.repositories.customer_repository import CustomerRepository
from orders_service.repositories.product_repository import ProductRepository
from orders_service.repositories.order_repository import OrderRepository

__all__ = [
    'CustomerLookup',
    'ProductLookup',
    'OrderStore',
    'CustomerRepository',
    'ProductRepository',
    'OrderRepository',
]
