import asyncio
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

import pytest

from order_dashboard.config import set_config_for_test
from order_dashboard.data.models import ConnectionConfig, Order, OrderStatus
from order_dashboard.errors import RemoteError


def order_payload(order_id: int, number: str = None, status: str = "processing",
                  date_created: str = "2024-01-01T10:00:00", first_name: str = "Jane",
                  last_name: str = "Doe", **extra) -> dict:
    """JSON-shaped order as the store API returns it."""
    payload = {
        "id": order_id,
        "number": number or str(order_id),
        "status": status,
        "date_created": date_created,
        "currency": "USD",
        "total": "42.50",
        "customer_note": "",
        "billing": {
            "first_name": first_name,
            "last_name": last_name,
            "address_1": "1 Main St",
            "address_2": "",
            "city": "Springfield",
            "state": "IL",
            "postcode": "62701",
            "country": "US",
            "email": f"{first_name.lower()}@example.com",
            "phone": "555-0100",
        },
        "shipping": {
            "first_name": first_name,
            "last_name": last_name,
            "address_1": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "postcode": "62701",
            "country": "US",
        },
        "line_items": [
            {"id": order_id * 10, "name": "Mug", "product_id": 7, "quantity": 2, "price": "21.25", "total": "42.50"},
        ],
    }
    payload.update(extra)
    return payload


def make_order(order_id: int, **kwargs) -> Order:
    return Order.model_validate(order_payload(order_id, **kwargs))


class FakeGateway:
    """
    Gateway double for the order cache.
    - Every update call blocks on `gate` until the test opens it.
    - Ids in `fail_ids` are rejected with RemoteError.
    - Tracks outstanding calls per id so tests can assert exclusivity.
    """

    def __init__(self, orders: Optional[List[Order]] = None) -> None:
        self.orders = list(orders or [])
        self.fetch_error: Optional[Exception] = None
        self.fail_ids: set = set()
        self.gate = asyncio.Event()
        self.gate.set()
        self.calls: List[Tuple[int, OrderStatus]] = []
        self.active: Dict[int, int] = defaultdict(int)
        self.max_active: Dict[int, int] = defaultdict(int)
        self.fetch_calls = 0

    async def fetch_all_orders(self, cfg: ConnectionConfig) -> List[Order]:
        self.fetch_calls += 1
        if self.fetch_error is not None:
            raise self.fetch_error
        return list(self.orders)

    async def update_order_status(self, cfg: ConnectionConfig, order_id: int, new_status: OrderStatus) -> Order:
        self.calls.append((order_id, new_status))
        self.active[order_id] += 1
        self.max_active[order_id] = max(self.max_active[order_id], self.active[order_id])
        try:
            await self.gate.wait()
        finally:
            self.active[order_id] -= 1
        if order_id in self.fail_ids:
            raise RemoteError("Sorry, you are not allowed to edit this order.", status_code=403)
        # The store normalises the total on every save
        return make_order(order_id, status=new_status.value, total="42.50", customer_note="saved by store")


@pytest.fixture(autouse=True)
def test_config():
    set_config_for_test(log_level="WARNING", storage_kind="memory")
    yield


@pytest.fixture
def connection() -> ConnectionConfig:
    return ConnectionConfig(url="https://shop.example.com/", token="secret-token-1234")


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture(name="make_order")
def make_order_fixture():
    return make_order


@pytest.fixture(name="order_payload")
def order_payload_fixture():
    return order_payload
