from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    """Closed set of order statuses the dashboard may set."""
    PROCESSING = "processing"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    PENDING = "pending"
    FAILED = "failed"

    @classmethod
    def parse(cls, value: object) -> Optional["OrderStatus"]:
        """Return the matching status, or None for a value outside the enum."""
        try:
            return cls(value)
        except ValueError:
            return None


class StatusDisplay(BaseModel):
    """Label and colour hint used to render a status badge."""
    label: str = Field(description="Human readable label")
    color: str = Field(description="Badge colour name")
    known: bool = Field(default=True, description="False for statuses outside OrderStatus")


STATUS_MAP = {
    OrderStatus.PROCESSING: StatusDisplay(label="Processing", color="blue"),
    OrderStatus.COMPLETED: StatusDisplay(label="Completed", color="green"),
    OrderStatus.ON_HOLD: StatusDisplay(label="On Hold", color="orange"),
    OrderStatus.CANCELLED: StatusDisplay(label="Cancelled", color="red"),
    OrderStatus.REFUNDED: StatusDisplay(label="Refunded", color="gray"),
    OrderStatus.PENDING: StatusDisplay(label="Pending", color="violet"),
    OrderStatus.FAILED: StatusDisplay(label="Failed", color="red"),
}

UNKNOWN_STATUS = StatusDisplay(label="Unknown", color="gray", known=False)


def describe_status(value: object) -> StatusDisplay:
    """Map any status value (including unrecognised ones) to its display variant."""
    status = OrderStatus.parse(value)
    if status is None:
        return UNKNOWN_STATUS
    return STATUS_MAP[status]
