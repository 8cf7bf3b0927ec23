"""
Tests for the order domain models
"""
import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from orders_service.domain.customer import Customer
from orders_service.domain.order import Order, OrderCreate, OrderLineItem, OrderLineRequest


@pytest.fixture
def order():
    now = datetime(2025, 10, 17, 12, 0, tzinfo=timezone.utc)
    p1, p2 = uuid.uuid4(), uuid.uuid4()
    return Order(
        id=uuid.uuid4(),
        customer=Customer(id=uuid.uuid4(), name='Ada Lovelace'),
        items=[
            OrderLineItem(product_id=p1, price=Decimal('10.00'), quantity=2),
            OrderLineItem(product_id=p2, price=Decimal('0.99'), quantity=3),
        ],
        created_at=now
    )


def test_order_computed_properties(order):
    assert order.item_count == 2
    assert order.total_quantity == 5
    assert order.total == Decimal('22.97')
    assert order.quantity_of(order.items[0].product_id) == 2
    assert order.quantity_of(uuid.uuid4()) == 0


def test_order_to_dict_is_json_friendly(order):
    data = order.to_dict()

    assert data['id'] == str(order.id)
    assert data['total'] == 22.97
    assert data['created_at'] == '2025-10-17T12:00:00+00:00'
    assert data['updated_at'] is None
    assert data['items'][1]['subtotal'] == 2.97
    assert data['items'][0]['product_id'] == str(order.items[0].product_id)


def test_order_is_immutable(order):
    with pytest.raises(ValidationError):
        order.customer = Customer(id=uuid.uuid4(), name='Someone Else')


def test_line_item_requires_positive_quantity():
    with pytest.raises(ValidationError):
        OrderLineItem(product_id=uuid.uuid4(), price=Decimal('1'), quantity=0)


def test_line_request_accepts_id_or_product_id():
    product_id = uuid.uuid4()

    assert OrderLineRequest(id=str(product_id), quantity=1).product_id == product_id
    assert OrderLineRequest(product_id=str(product_id), quantity=1).product_id == product_id


def test_line_request_allows_zero_for_the_service_to_reject():
    assert OrderLineRequest(id=str(uuid.uuid4()), quantity=0).quantity == 0


def test_order_create_parses_payload():
    customer_id, product_id = uuid.uuid4(), uuid.uuid4()

    payload = OrderCreate.model_validate({
        'customer_id': str(customer_id),
        'products': [{'id': str(product_id), 'quantity': 2}]
    })

    assert payload.customer_id == customer_id
    assert payload.products[0].product_id == product_id
