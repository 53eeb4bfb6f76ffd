"""
Order cache and optimistic status updates.

The engine owns the authoritative in-memory copy of the store's orders and
the set of order ids with a status change in flight.

Per order id a status change moves Idle -> Pending -> Idle:
- Pending: the cache already shows the requested status (optimistic write)
  and exactly one gateway call is outstanding for the id.
- Success: the store's returned order replaces the optimistic one.
- Failure: the pre-change snapshot is restored and an OrderUpdateError is surfaced.

A change requested while the id is Pending is queued (latest request wins)
and runs right after the outstanding call resolves, if it still differs from
the cached status. The id stays in the in-flight set across that hand-over.
"""
from __future__ import annotations

from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Set

from ..data.interface import OrderGateway
from ..data.models import ConnectionConfig, Order, OrderStatus
from ..errors import OrderDashboardError, OrderUpdateError
from ..logger import get_logger

Listener = Callable[[], None]


class OrderCacheEngine:
    """Authoritative order cache with optimistic, rollback-able status changes."""

    def __init__(
        self,
        gateway: OrderGateway,
        on_error: Optional[Callable[[OrderUpdateError], None]] = None,
    ) -> None:
        self.gateway = gateway
        self.on_error = on_error
        self.logger = get_logger(__name__)

        self._orders: Dict[int, Order] = {}
        self._in_flight: Set[int] = set()
        self._targets: Dict[int, OrderStatus] = {}
        self._queued: Dict[int, OrderStatus] = {}
        self._listeners: List[Listener] = []
        self.errors: List[OrderUpdateError] = []

    # ---------- observation ----------

    @property
    def orders(self) -> List[Order]:
        """Current cache contents, in ingestion order."""
        return list(self._orders.values())

    @property
    def in_flight(self) -> FrozenSet[int]:
        return frozenset(self._in_flight)

    def get(self, order_id: int) -> Optional[Order]:
        return self._orders.get(order_id)

    def is_updating(self, order_id: int) -> bool:
        return order_id in self._in_flight

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every observable change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify_listeners(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                # A broken view must not leave an order stuck in flight
                self.logger.exception("Order cache listener failed")

    # ---------- ingestion ----------

    def replace_all(self, orders: Iterable[Order]) -> None:
        """Swap the whole cache for orders in one assignment."""
        fresh = {order.id: order for order in orders}
        self._orders = fresh
        self.logger.debug(f"Order cache replaced: {len(fresh)} orders")
        self.notify_listeners()

    def clear(self) -> None:
        self._queued.clear()
        self.replace_all([])

    # ---------- status changes ----------

    async def change_order_status(
        self,
        cfg: ConnectionConfig,
        order_id: int,
        new_status: OrderStatus,
    ) -> None:
        """Apply new_status optimistically and persist it through the gateway.

        Returns once this call's work is done: immediately for a no-op or a
        queued request, otherwise after the outstanding (and any queued
        follow-up) gateway calls for the id have resolved. Failures are
        surfaced via `errors` / `on_error`, never raised.
        """
        new_status = OrderStatus(new_status)
        current = self._orders.get(order_id)
        if current is None:
            self.logger.warning(f"Ignoring status change for unknown order id {order_id}")
            return

        # Membership check and insert happen without an await in between, so
        # no other coroutine can claim the id in the meantime.
        if order_id in self._in_flight:
            if self._targets.get(order_id) == new_status:
                self._queued.pop(order_id, None)
            else:
                self._queued[order_id] = new_status
                self.logger.info(f"Order #{current.number} busy; queued status {new_status.value}")
            return

        if current.status == new_status.value:
            return

        self._in_flight.add(order_id)
        try:
            desired: Optional[OrderStatus] = new_status
            while desired is not None:
                await self._apply(cfg, order_id, desired)
                desired = self._next_queued(order_id)
        finally:
            self._in_flight.discard(order_id)
            self._targets.pop(order_id, None)
            self._queued.pop(order_id, None)
            self.notify_listeners()

    def _next_queued(self, order_id: int) -> Optional[OrderStatus]:
        desired = self._queued.pop(order_id, None)
        if desired is None:
            return None
        current = self._orders.get(order_id)
        if current is None or current.status == desired.value:
            return None
        return desired

    async def _apply(self, cfg: ConnectionConfig, order_id: int, new_status: OrderStatus) -> None:
        snapshot = self._orders[order_id]
        optimistic = snapshot.with_status(new_status)
        self._orders[order_id] = optimistic
        self._targets[order_id] = new_status
        self.logger.info(f"Order #{snapshot.number}: {snapshot.status} -> {new_status.value} (pending)")
        self.notify_listeners()

        try:
            confirmed = await self.gateway.update_order_status(cfg, order_id, new_status)
        except Exception as e:
            self._rollback(order_id, snapshot, optimistic)
            if not isinstance(e, OrderDashboardError):
                raise
            self._surface(OrderUpdateError(order_id, snapshot.number, e))
            return

        self._commit(order_id, confirmed)

    def _commit(self, order_id: int, confirmed: Order) -> None:
        # The cache may have been replaced or cleared while the call was out
        if order_id in self._orders:
            self._orders[order_id] = confirmed
        self.logger.info(f"Order #{confirmed.number}: status {confirmed.status} confirmed")
        self.notify_listeners()

    def _rollback(self, order_id: int, snapshot: Order, optimistic: Order) -> None:
        # Only undo our own write; a fresher fetched copy wins
        if self._orders.get(order_id) is optimistic:
            self._orders[order_id] = snapshot
        self.logger.warning(f"Order #{snapshot.number}: status change rolled back to {snapshot.status}")
        self.notify_listeners()

    def _surface(self, error: OrderUpdateError) -> None:
        self.errors.append(error)
        self.logger.error(str(error))
        if self.on_error is not None:
            self.on_error(error)
