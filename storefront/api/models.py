"""
Pydantic models used for request/response validation and API data contracts.

Each class defines the structure of data expected in API endpoints, ensuring
validation and automatic OpenAPI schema generation. Response models read ORM
objects directly (`from_attributes=True`).
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """
    Represents the details needed to register a user.
    """
    username: str = Field(..., min_length=1, max_length=64, examples=["ada"])
    """Unique login name."""
    email: str = Field(..., min_length=3, max_length=255, examples=["ada@example.com"])
    """Unique email address."""
    full_name: Optional[str] = Field(None, examples=["Ada Lovelace"])
    """Optional display name."""


class EmailUpdate(BaseModel):
    """New email address for an existing user."""
    email: str = Field(..., min_length=3, max_length=255)


class UserOut(BaseModel):
    """A registered user as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_name: str
    email: str
    full_name: Optional[str] = None
    created_on: datetime


class OrderCreate(BaseModel):
    """
    Represents a new order for a user. Quantity and price are checked by the
    service layer (positive quantity, non-negative price).
    """
    product_name: str = Field(..., examples=["Fountain pen"])
    quantity: int = Field(..., examples=[2])
    unit_price: Decimal = Field(..., examples=["12.50"])


class StatusUpdate(BaseModel):
    """Target status for an order (`pending`, `paid`, `shipped`, `cancelled`)."""
    status: str


class OrderOut(BaseModel):
    """An order as returned by the API, including its derived total."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    product_name: str
    quantity: int
    unit_price: Decimal
    status: str
    created_on: datetime
    total: Decimal


class UserTotal(BaseModel):
    """Amount spent by a user on orders that are not cancelled."""
    username: str
    total: Decimal
