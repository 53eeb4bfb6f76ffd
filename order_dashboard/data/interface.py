# order_dashboard/data/interface.py
from __future__ import annotations

from typing import List, Optional, Protocol

from .models import ConnectionConfig, Order, OrderStatus


# ---- Remote store protocol ----

class OrderGateway(Protocol):
    """
    Stateless contract for talking to the remote store.

    IMPORTANT:
    - Implementations MUST NOT cache. Each call goes to the store.
    - Implementations MUST NOT retry; retry policy belongs to the caller.
    - The config is passed on every call; no implementation keeps one around.
    """

    async def fetch_all_orders(self, cfg: ConnectionConfig) -> List[Order]:
        """Fetch every order, page by page, until a short or empty page."""
        ...

    async def update_order_status(
        self,
        cfg: ConnectionConfig,
        order_id: int,
        new_status: OrderStatus,
    ) -> Order:
        """Replace the status of one order and return the store's copy of it."""
        ...


# ---- Durable key-value storage protocol ----

class KeyValueStorage(Protocol):
    """Durable string key-value storage (the local-storage of the dashboard)."""

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string, or None when the key is absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a string under key, replacing any previous value."""
        ...

    def remove_item(self, key: str) -> None:
        """Delete key; deleting an absent key is not an error."""
        ...
