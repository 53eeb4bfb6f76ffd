from __future__ import annotations

from typing import Callable, List, Optional

from .connection_store import ConnectionStore
from .order_cache import OrderCacheEngine
from .projection import get_visible_orders
from ..data.interface import OrderGateway
from ..data.models import ConnectionConfig, Order, OrderStatus, OrderViewFilters
from ..data.util import get_order_gateway, get_storage
from ..errors import ConfigError, OrderDashboardError, OrderUpdateError
from ..logger import get_logger


class OrderDashboard:
    """Entry point for the presentation layer.

    Wires the connection store, the gateway and the order cache together and
    keeps the user-facing state: current connection, loading flag and the
    dismissible error banner.
    """

    def __init__(
        self,
        store: ConnectionStore,
        gateway: OrderGateway,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.engine = OrderCacheEngine(gateway, on_error=self._on_update_error)
        self.logger = get_logger(__name__)

        self.connection: Optional[ConnectionConfig] = None
        self.error: Optional[str] = None
        self.is_loading: bool = False

    # ---------- observation ----------

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        return self.engine.subscribe(listener)

    def get_visible_orders(self, filters: Optional[OrderViewFilters] = None) -> List[Order]:
        return get_visible_orders(self.engine.orders, filters)

    def is_updating(self, order_id: int) -> bool:
        return self.engine.is_updating(order_id)

    def dismiss_error(self) -> None:
        self.error = None
        self.engine.notify_listeners()

    def _set_error(self, message: str) -> None:
        self.error = message
        self.engine.notify_listeners()

    def _on_update_error(self, error: OrderUpdateError) -> None:
        self._set_error(str(error))

    # ---------- connection lifecycle ----------

    async def restore(self) -> Optional[ConnectionConfig]:
        """Load the persisted connection (if any) and fetch its orders."""
        try:
            cfg = self.store.load()
        except OrderDashboardError as e:
            self.logger.error(f"Could not restore connection: {e}")
            self._set_error(str(e))
            return None
        if cfg is None:
            return None
        self.connection = cfg
        await self.refresh()
        return cfg

    async def connect(self, cfg: ConnectionConfig) -> None:
        """Persist cfg and load its orders.

        Raises:
            InvalidConfig: If cfg is malformed; nothing is persisted then.
        """
        self.store.save(cfg)
        self.connection = cfg
        await self.refresh()

    def disconnect(self) -> None:
        self.store.clear()
        self.connection = None
        self.engine.clear()

    async def refresh(self) -> bool:
        """Re-fetch every order; on failure the list is emptied and the error shown."""
        if self.connection is None:
            self._set_error("Not connected to a store.")
            return False

        self.error = None
        self.is_loading = True
        self.engine.notify_listeners()
        try:
            orders = await self.gateway.fetch_all_orders(self.connection)
        except OrderDashboardError as e:
            self.logger.error(f"Fetching orders failed: {e}")
            self.error = str(e) or "An error occurred while fetching orders. Check your connection details."
            self.engine.replace_all([])
            return False
        finally:
            self.is_loading = False
            self.engine.notify_listeners()

        self.engine.replace_all(orders)
        return True

    # ---------- edits ----------

    async def change_order_status(self, order_id: int, new_status: OrderStatus) -> None:
        if self.connection is None:
            raise ConfigError("Not connected to a store.")
        await self.engine.change_order_status(self.connection, order_id, new_status)


def get_dashboard() -> OrderDashboard:
    """Build a dashboard over the configured storage and the REST gateway."""
    return OrderDashboard(store=ConnectionStore(get_storage()), gateway=get_order_gateway())
