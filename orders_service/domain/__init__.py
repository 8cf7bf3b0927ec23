"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.
"""
from orders_service.domain.customer import Customer
from orders_service.domain.product import Product, QuantityUpdate
from orders_service.domain.order import Order, OrderCreate, OrderLineItem, OrderLineRequest

__all__ = [
    'Customer',
    'Product',
    'QuantityUpdate',
    'Order',
    'OrderCreate',
    'OrderLineItem',
    'OrderLineRequest',
]
