"""
Customer Domain Model

The order workflow only needs to know that a customer exists; the
remaining fields travel with the order when it is returned to clients.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from uuid import UUID


class Customer(BaseModel):
    """Customer domain model"""

    id: UUID = Field(..., description="Customer ID")
    name: str = Field(..., description="Customer name")
    email: Optional[str] = Field(None, description="Customer email")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        """Convert to a JSON friendly dictionary"""
        data = self.model_dump()
        data['id'] = str(self.id)
        for field in ['created_at', 'updated_at']:
            if data.get(field) is not None:
                data[field] = data[field].isoformat()
        return data
