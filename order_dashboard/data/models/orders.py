from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .customers import Address
from .order_items import LineItem
from .status import OrderStatus


class Order(BaseModel):
    """Order as returned by the store API.

    `status` is kept as the raw string the store sent so that a value outside
    OrderStatus survives ingestion and renders as "Unknown".
    """
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: int = Field(description="Unique order identifier assigned by the store")
    number: str = Field(description="Display number, not necessarily numeric")
    status: str = Field(description="Order status (normally an OrderStatus value)")
    date_created: datetime = Field(description="Order creation timestamp")
    currency: str = Field(default="", description="ISO currency code")
    total: str = Field(default="0", description="Order total as a decimal string")
    customer_note: str = Field(default="", description="Note left by the customer")
    billing: Address = Field(default_factory=Address, description="Billing address")
    shipping: Address = Field(default_factory=Address, description="Shipping address")
    line_items: List[LineItem] = Field(default_factory=list, description="Ordered product lines")

    @property
    def known_status(self) -> Optional[OrderStatus]:
        return OrderStatus.parse(self.status)

    @property
    def customer_name(self) -> str:
        return self.billing.full_name

    @property
    def created_at(self) -> datetime:
        """Creation time as an aware instant; naive store timestamps are read as UTC."""
        if self.date_created.tzinfo is None:
            return self.date_created.replace(tzinfo=timezone.utc)
        return self.date_created

    def with_status(self, status: OrderStatus) -> "Order":
        return self.model_copy(update={"status": status.value})
