from __future__ import annotations

from typing import Literal, Optional

from .backends.rest_backend import RestOrderGateway
from .backends.storage import InMemoryStorage, JsonFileStorage
from .interface import KeyValueStorage, OrderGateway
from ..config import get_config


def get_order_gateway(kind: Literal["rest"] = "rest") -> OrderGateway:
    if kind == "rest":
        # Talks to the store's order-dashboard REST namespace
        return RestOrderGateway()
    raise ValueError(f"Unknown order gateway kind: {kind}")


def get_storage(kind: Optional[Literal["file", "memory"]] = None) -> KeyValueStorage:
    config = get_config()
    kind = kind or config.storage_kind
    if kind == "file":
        # Reads from configured storage file
        return JsonFileStorage(config.storage_path)
    if kind == "memory":
        return InMemoryStorage()
    raise ValueError(f"Unknown storage kind: {kind}")
