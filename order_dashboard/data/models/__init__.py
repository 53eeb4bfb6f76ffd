from .data_filters import OrderViewFilters

from .connection import ConnectionConfig
from .customers import Address
from .order_items import LineItem
from .orders import Order
from .status import (
    OrderStatus,
    StatusDisplay,
    STATUS_MAP,
    UNKNOWN_STATUS,
    describe_status,
)

__all__ = [
    # Filter classes
    "OrderViewFilters",
    # Order models
    "Order",
    "LineItem",
    "Address",
    "OrderStatus",
    # Connection
    "ConnectionConfig",
    # Display helpers
    "StatusDisplay",
    "STATUS_MAP",
    "UNKNOWN_STATUS",
    "describe_status",
]
