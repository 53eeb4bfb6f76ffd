from __future__ import annotations

from typing import Iterable, List, Optional

from ..data.models import Order, OrderViewFilters


def _matches_status(order: Order, filters: OrderViewFilters) -> bool:
    if filters.status == "all":
        return True
    return order.status == filters.status.value


def _matches_search(order: Order, query: str) -> bool:
    if not query:
        return True
    return query in order.number.lower() or query in order.customer_name.lower()


def get_visible_orders(orders: Iterable[Order], filters: Optional[OrderViewFilters] = None) -> List[Order]:
    """Filter, search and sort orders for display.

    Pure: the input is never modified and equal inputs give equal output.
    Orders created at the same instant keep their input order.
    """
    filters = filters or OrderViewFilters()
    query = filters.search.strip().lower()

    visible = [o for o in orders if _matches_status(o, filters) and _matches_search(o, query)]
    # sorted() is stable, including with reverse=True
    return sorted(visible, key=lambda o: o.created_at, reverse=(filters.sort_order == "newest"))
