from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from ..interface import OrderGateway
from ..models import ConnectionConfig, Order, OrderStatus
from ...config import get_config
from ...errors import ConfigError, RemoteError, TransportError
from ...logger import get_logger, mask_secret

_ORDER_LIST = TypeAdapter(List[Order])


class RestOrderGateway(OrderGateway):
    """
    Order gateway backed by the store's order-dashboard REST namespace.
    - Opens a fresh httpx.AsyncClient per operation, so it can be used from any event loop.
    - Pages are requested strictly one after another; the size of each page
      decides whether the next one is requested.
    - `transport` lets tests swap in an httpx.MockTransport.
    """

    def __init__(
        self,
        page_size: Optional[int] = None,
        max_pages: Optional[int] = None,
        timeout_sec: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        config = get_config()
        self.page_size = config.page_size if page_size is None else page_size
        self.max_pages = config.max_pages if max_pages is None else max_pages
        self.timeout_sec = config.request_timeout_sec if timeout_sec is None else timeout_sec
        if self.page_size < 1 or self.max_pages < 1:
            raise ValueError(f"page_size and max_pages must be positive, got {self.page_size} and {self.max_pages}")
        if self.timeout_sec <= 0:
            raise ValueError(f"timeout_sec must be positive, got {self.timeout_sec}")
        self.api_namespace = config.api_namespace
        self.token_header = config.token_header
        self._transport = transport
        self.logger = get_logger(__name__)

    # ---------- request helpers ----------

    def _base_url(self, cfg: ConnectionConfig) -> str:
        if not cfg.url:
            raise ConfigError("Store URL is missing.")
        return f"{cfg.url.rstrip('/')}{self.api_namespace}"

    def _headers(self, cfg: ConnectionConfig) -> Dict[str, str]:
        if not cfg.token:
            raise ConfigError("Connection token is missing.")
        return {
            self.token_header: cfg.token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout_sec,
            transport=self._transport,
            follow_redirects=True,
        )

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"Network response was not ok: {response.reason_phrase}"

    async def _send(self, client: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            self.logger.error(f"{method} {url} failed: {e!r}")
            raise TransportError(f"Could not reach the store: {e}") from e
        except httpx.HTTPError as e:
            # TooManyRedirects, DecodingError
            self.logger.error(f"{method} {url} failed: {e!r}")
            raise RemoteError(f"Unusable response from the store: {e}") from e
        except httpx.InvalidURL as e:
            raise ConfigError(f"Store URL is invalid: {e}") from e

        if not response.is_success:
            message = self._error_message(response)
            self.logger.warning(f"{method} {url} returned {response.status_code}: {message}")
            raise RemoteError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(f"Store returned a response that is not JSON ({method} {url})") from e

    # ---------- interface implementation ----------

    async def fetch_all_orders(self, cfg: ConnectionConfig) -> List[Order]:
        headers = self._headers(cfg)
        url = f"{self._base_url(cfg)}/orders"
        self.logger.info(f"Fetching orders from {url} (token {mask_secret(cfg.token)})")

        orders: List[Order] = []
        async with self._client() as client:
            for page in range(1, self.max_pages + 1):
                payload = await self._send(
                    client,
                    "GET",
                    url,
                    params={"per_page": self.page_size, "page": page},
                    headers=headers,
                )
                try:
                    batch = _ORDER_LIST.validate_python(payload)
                except ValidationError as e:
                    raise RemoteError(f"Unexpected order list on page {page}: {e.error_count()} invalid field(s)") from e

                orders.extend(batch)
                self.logger.debug(f"Page {page}: {len(batch)} orders")
                # A short (or empty) page is the last one.
                if len(batch) < self.page_size:
                    self.logger.info(f"Fetched {len(orders)} orders in {page} page(s)")
                    return orders

        raise RemoteError(f"Store kept returning full pages after {self.max_pages} pages; giving up")

    async def update_order_status(
        self,
        cfg: ConnectionConfig,
        order_id: int,
        new_status: OrderStatus,
    ) -> Order:
        headers = self._headers(cfg)
        url = f"{self._base_url(cfg)}/orders/{order_id}"
        status = OrderStatus(new_status)

        async with self._client() as client:
            payload = await self._send(client, "PUT", url, json={"status": status.value}, headers=headers)

        try:
            order = Order.model_validate(payload)
        except ValidationError as e:
            raise RemoteError(f"Unexpected order payload for order {order_id}: {e.error_count()} invalid field(s)") from e
        self.logger.info(f"Order {order_id} status set to {order.status}")
        return order


async def fetch_all_orders(cfg: ConnectionConfig) -> List[Order]:
    """Fetch every order from the store using the configured gateway settings."""
    return await RestOrderGateway().fetch_all_orders(cfg)


async def update_order_status(cfg: ConnectionConfig, order_id: int, new_status: OrderStatus) -> Order:
    """Set one order's status on the store and return the store's copy."""
    return await RestOrderGateway().update_order_status(cfg, order_id, new_status)
