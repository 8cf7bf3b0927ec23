"""
Product Domain Model

Represents a sellable product and its stock on hand.
The catalog owns products; the order workflow only reads price and
quantity and decrements quantity after an order is written.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID


class Product(BaseModel):
    """
    Product domain model

    Fields:
        id: Product ID (primary key)
        name: Product name
        price: Current unit price
        quantity: Units currently in stock
        created_at: When product was created
        updated_at: When product was last updated
    """

    id: UUID = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    price: Decimal = Field(..., description="Unit price", ge=0)
    quantity: int = Field(0, description="Units in stock", ge=0)
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_out_of_stock(self) -> bool:
        """Check if product has no units left"""
        return self.quantity <= 0

    def has_stock_for(self, quantity: int) -> bool:
        """Check if ``quantity`` units can be taken from stock"""
        return self.quantity - quantity >= 0

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump()
        data['id'] = str(self.id)
        data['price'] = float(self.price)
        data['is_out_of_stock'] = self.is_out_of_stock
        for field in ['created_at', 'updated_at']:
            if data.get(field) is not None:
                data[field] = data[field].isoformat()
        return data


class QuantityUpdate(BaseModel):
    """
    New stock level for one product

    ``expected_quantity`` is the stock level read when the order was
    validated; stores use it to refuse the write when stock moved in between.
    """
    product_id: UUID
    quantity: int = Field(..., ge=0)
    expected_quantity: int = Field(..., ge=0)
