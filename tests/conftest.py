"""
Pytest fixtures and configuration for the Orders Service tests

This file provides shared fixtures that can be used across all test modules.
"""
import os
import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from dotenv import load_dotenv

from orders_service.domain.customer import Customer
from orders_service.domain.product import Product
from orders_service.services.order_service import CreateOrderService
from tests.fakes import (
    InMemoryCustomerRepository,
    InMemoryOrderRepository,
    InMemoryProductRepository,
)

# Load environment variables for tests
load_dotenv()


@pytest.fixture(scope="session")
def database_url():
    """
    Provides the database URL for integration tests

    Scope: session (created once per test session)
    """
    url = os.getenv("DATABASE_URL")
    if not url:
        pytest.skip("DATABASE_URL not configured")
    return url


@pytest.fixture
def customer():
    """A registered customer"""
    return Customer(
        id=uuid.uuid4(),
        name="Ada Lovelace",
        email="ada@example.com",
        created_at=datetime.now(timezone.utc)
    )


@pytest.fixture
def make_product():
    """Factory for products: make_product(price="10.00", quantity=5)"""
    def _make(price="10.00", quantity=5, name=None):
        product_id = uuid.uuid4()
        return Product(
            id=product_id,
            name=name or f"Product {product_id.hex[:6]}",
            price=Decimal(price),
            quantity=quantity,
            created_at=datetime.now(timezone.utc)
        )
    return _make


@pytest.fixture
def customers(customer):
    return InMemoryCustomerRepository([customer])


@pytest.fixture
def products():
    return InMemoryProductRepository()


@pytest.fixture
def orders():
    return InMemoryOrderRepository()


@pytest.fixture
def service(customers, products, orders):
    """CreateOrderService over in-memory repositories"""
    return CreateOrderService(customers=customers, products=products, orders=orders)


@pytest.fixture
def stock(products, make_product):
    """Add a product to the in-memory catalog and return it"""
    def _stock(price="10.00", quantity=5, name=None):
        product = make_product(price=price, quantity=quantity, name=name)
        products.products[product.id] = product
        return product
    return _stock
