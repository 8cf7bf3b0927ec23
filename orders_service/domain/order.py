"""
Order Domain Models

An order links one customer to one or more line items. Each line item
locks in the product price at the moment the order is placed, so later
catalog price changes do not touch past orders.
"""
from pydantic import BaseModel, Field, ConfigDict, AliasChoices
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from orders_service.domain.customer import Customer


class OrderLineRequest(BaseModel):
    """
    One requested product and how many units of it

    Accepts either ``product_id`` or ``id`` for the product reference.
    Quantity is not range-checked here: the order workflow rejects zero and
    negative quantities with its own error kind.
    """
    product_id: UUID = Field(
        ...,
        validation_alias=AliasChoices('product_id', 'id'),
        description="Requested product ID"
    )
    quantity: int = Field(..., description="Units requested")

    model_config = ConfigDict(populate_by_name=True)


class OrderLineItem(BaseModel):
    """
    Order line item - one (product, price, quantity) tuple within an order

    Fields:
        id: Line item ID (set once persisted)
        order_id: Parent order ID (set once persisted)
        product_id: Ordered product
        price: Unit price captured at order time
        quantity: Units ordered
    """

    id: Optional[UUID] = Field(None, description="Line item ID")
    order_id: Optional[UUID] = Field(None, description="Parent order ID")
    product_id: Optional[UUID] = Field(..., description="Product ID (None once the product is deleted)")
    price: Decimal = Field(..., description="Unit price at order time", ge=0)
    quantity: int = Field(..., description="Quantity ordered", ge=1)
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @property
    def subtotal(self) -> Decimal:
        """Price times quantity"""
        return self.price * self.quantity

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump()
        for field in ['id', 'order_id', 'product_id']:
            if data.get(field) is not None:
                data[field] = str(data[field])
        data['price'] = float(self.price)
        data['subtotal'] = float(self.subtotal)
        for field in ['created_at', 'updated_at']:
            if data.get(field) is not None:
                data[field] = data[field].isoformat()
        return data


class Order(BaseModel):
    """
    Order domain model - aggregate root

    Items keep the order in which they were requested.
    """

    id: UUID = Field(..., description="Order ID")
    customer: Customer = Field(..., description="Customer who placed the order")
    items: List[OrderLineItem] = Field(default_factory=list, description="Order line items")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True, frozen=True)

    # Computed properties
    @property
    def item_count(self) -> int:
        """Number of line items"""
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        """Total quantity of all items"""
        return sum(item.quantity for item in self.items)

    @property
    def total(self) -> Decimal:
        """Sum of line subtotals"""
        return sum((item.subtotal for item in self.items), Decimal('0'))

    def quantity_of(self, product_id: UUID) -> int:
        """Units ordered of ``product_id`` across all lines"""
        return sum(item.quantity for item in self.items if item.product_id == product_id)

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Returns dict with all fields plus computed properties, ready for JSON
        """
        data = {
            'id': str(self.id),
            'customer': self.customer.to_dict(),
            'items': [item.to_dict() for item in self.items],
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

        data['item_count'] = self.item_count
        data['total_quantity'] = self.total_quantity
        data['total'] = float(self.total)

        return data


class OrderCreate(BaseModel):
    """Schema for creating a new order"""
    customer_id: UUID
    products: List[OrderLineRequest] = Field(default_factory=list)
