import asyncio

import pandas as pd
import streamlit as st

# Configuration
from order_dashboard.config import get_config

# Dashboard facade + models
from order_dashboard.backend.dashboard import OrderDashboard, get_dashboard
from order_dashboard.data.models import (
    ConnectionConfig,
    Order,
    OrderStatus,
    OrderViewFilters,
    STATUS_MAP,
    describe_status,
)
from order_dashboard.errors import OrderDashboardError

st.set_page_config(page_title="Order Dashboard", layout="wide")

config = get_config()


def format_currency(amount: str, currency: str) -> str:
    try:
        return f"{float(amount):,.2f} {currency}"
    except ValueError:
        return f"{amount} {currency}"


# -----------------------------------------------------------------------------
# Dashboard state lives in the session; the first run restores the saved connection
# -----------------------------------------------------------------------------
if "dashboard" not in st.session_state:
    dashboard = get_dashboard()
    asyncio.run(dashboard.restore())
    st.session_state["dashboard"] = dashboard
dashboard: OrderDashboard = st.session_state["dashboard"]

st.title("WordPress Order Dashboard")

# -----------------------------------------------------------------------------
# Connection settings
# -----------------------------------------------------------------------------
with st.sidebar.form("connection"):
    st.header("Connection")
    current = dashboard.connection or ConnectionConfig()
    url = st.text_input("Store URL", value=current.url, placeholder="https://example.com")
    token = st.text_input("Connection token", value=current.token, type="password")
    save = st.form_submit_button("Save & connect")
if save:
    try:
        asyncio.run(dashboard.connect(ConnectionConfig(url=url, token=token)))
    except OrderDashboardError as e:
        # Bad input or unwritable storage; the previous connection stays in place
        st.sidebar.error(str(e))
if dashboard.connection and st.sidebar.button("Disconnect"):
    try:
        dashboard.disconnect()
    except OrderDashboardError as e:
        st.sidebar.error(str(e))
    else:
        st.rerun()
if dashboard.connection and st.sidebar.button("Reload orders"):
    asyncio.run(dashboard.refresh())

# -----------------------------------------------------------------------------
# Error banner
# -----------------------------------------------------------------------------
if dashboard.error:
    st.error(dashboard.error)
    if st.button("Dismiss"):
        dashboard.dismiss_error()
        st.rerun()

if not dashboard.connection:
    st.subheader("Not Connected")
    st.write("Please connect to your WooCommerce store to view orders.")
    st.stop()

# -----------------------------------------------------------------------------
# Filters
# -----------------------------------------------------------------------------
c1, c2, c3 = st.columns([3, 1, 1])
search = c1.text_input("Search", placeholder="Search by order number or customer name...")
status_options = ["all"] + [s.value for s in STATUS_MAP]
status_sel = c2.selectbox(
    "Status",
    status_options,
    format_func=lambda v: "All" if v == "all" else describe_status(v).label,
)
sort_labels = {"newest": "Newest First", "oldest": "Oldest First"}
sort_sel = c3.selectbox(
    "Sort",
    list(sort_labels),
    index=list(sort_labels).index(config.default_sort_order),
    format_func=sort_labels.get,
)

filters = OrderViewFilters(status=status_sel, search=search, sort_order=sort_sel)
visible = dashboard.get_visible_orders(filters)

# -----------------------------------------------------------------------------
# Orders table
# -----------------------------------------------------------------------------
st.markdown(f"### Orders ({len(visible)})")
if not visible:
    st.info("No orders found.")
    st.stop()

rows = pd.DataFrame(
    [
        {
            "Order": f"#{o.number}",
            "Customer": o.customer_name,
            "Email": o.billing.email or "",
            "Date": o.created_at.strftime("%B %d, %Y"),
            "Status": describe_status(o.status).label,
            "Total": format_currency(o.total, o.currency),
        }
        for o in visible
    ]
)
st.dataframe(rows, use_container_width=True, hide_index=True)

# -----------------------------------------------------------------------------
# Order details + status changer
# -----------------------------------------------------------------------------
def render_order(order: Order) -> None:
    display = describe_status(order.status)
    with st.expander(f"Order #{order.number} · {order.customer_name} · {display.label}"):
        a1, a2, a3 = st.columns(3)
        a1.metric("Customer", order.customer_name)
        a2.metric("Total Amount", format_currency(order.total, order.currency))
        a3.markdown(f"**Status:** :{display.color}[{display.label}]")

        statuses = list(STATUS_MAP)
        known = order.known_status
        new_status = st.selectbox(
            "Change status",
            statuses,
            index=statuses.index(known) if known else 0,
            format_func=lambda s: STATUS_MAP[s].label,
            key=f"status-{order.id}",
            disabled=dashboard.is_updating(order.id),
        )
        if st.button("Update status", key=f"update-{order.id}", disabled=dashboard.is_updating(order.id)):
            asyncio.run(dashboard.change_order_status(order.id, OrderStatus(new_status)))
            st.rerun()

        b1, b2 = st.columns(2)
        for col, title, address in ((b1, "Billing Address", order.billing), (b2, "Shipping Address", order.shipping)):
            lines = [address.full_name, address.address_1, address.address_2 or "",
                     f"{address.city}, {address.postcode}", f"{address.state}, {address.country}"]
            if address.phone:
                lines.append(f"Phone: {address.phone}")
            if address.email:
                lines.append(f"Email: {address.email}")
            col.markdown(f"**{title}**  \n" + "  \n".join(line for line in lines if line))

        st.dataframe(
            pd.DataFrame(
                [{"Product": i.name, "Quantity": i.quantity, "Price": i.price, "Total": i.total} for i in order.line_items]
            ),
            use_container_width=True,
            hide_index=True,
        )
        if order.customer_note:
            st.markdown(f"**Customer note:** {order.customer_note}")


for order in visible:
    render_order(order)
