from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class OrderStatus(StrEnum):
    pending = "pending"
    sent = "sent"
    cancelled = "cancelled"


class OrderItem(BaseModel):
    """A single order line as returned by the ``order_items`` relation."""

    id: str | None = None
    quantity: int = Field(..., ge=1)
    food_name: str | None = None  # None when the ``foods`` reference is missing


class Order(BaseModel):
    """Domain model representing a placed order."""

    id: str
    order_time: datetime  # UTC, as stored
    status: OrderStatus | str
    company_name: str | None = None
    items: list[OrderItem] = Field(default_factory=list)
