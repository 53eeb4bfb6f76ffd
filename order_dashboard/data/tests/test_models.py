from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from order_dashboard.data.models import (
    Order,
    OrderStatus,
    OrderViewFilters,
    UNKNOWN_STATUS,
    describe_status,
)


def test_unknown_status_is_kept_verbatim(order_payload):
    """A status the dashboard does not know survives parsing untouched."""
    order = Order.model_validate(order_payload(1, status="wc-awaiting-shipment"))
    assert order.status == "wc-awaiting-shipment"
    assert order.known_status is None
    assert describe_status(order.status) == UNKNOWN_STATUS


@pytest.mark.parametrize("value,label", [
    ("processing", "Processing"),
    ("completed", "Completed"),
    ("on-hold", "On Hold"),
    ("cancelled", "Cancelled"),
    ("refunded", "Refunded"),
    ("pending", "Pending"),
    ("failed", "Failed"),
])
def test_describe_known_status(value, label):
    display = describe_status(value)
    assert display.label == label
    assert display.known


def test_naive_timestamp_is_read_as_utc(make_order):
    order = make_order(1, date_created="2024-03-01T08:30:00")
    assert order.created_at == datetime(2024, 3, 1, 8, 30, tzinfo=timezone.utc)


def test_with_status_leaves_original_untouched(make_order):
    order = make_order(1, status="processing")
    changed = order.with_status(OrderStatus.COMPLETED)
    assert changed.status == "completed"
    assert order.status == "processing"
    assert changed.billing == order.billing


def test_orders_are_frozen(make_order):
    order = make_order(1)
    with pytest.raises(ValidationError):
        order.status = "completed"


def test_customer_name(make_order):
    assert make_order(1, first_name="Jane", last_name="Doe").customer_name == "Jane Doe"


def test_negative_quantity_rejected(order_payload):
    payload = order_payload(1)
    payload["line_items"][0]["quantity"] = -1
    with pytest.raises(ValidationError):
        Order.model_validate(payload)


def test_view_filters_accept_all_or_status():
    assert OrderViewFilters().status == "all"
    assert OrderViewFilters(status="on-hold").status is OrderStatus.ON_HOLD
    with pytest.raises(ValidationError):
        OrderViewFilters(status="shipped")
