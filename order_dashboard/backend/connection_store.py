from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from ..config import get_config
from ..data.interface import KeyValueStorage
from ..data.models import ConnectionConfig
from ..errors import ConfigError, InvalidConfig
from ..logger import get_logger, mask_secret


def validate_connection(cfg: ConnectionConfig) -> ConnectionConfig:
    """Check the invariants of a usable connection.

    Raises:
        InvalidConfig: If the URL lacks an http(s) scheme or the token is empty.
    """
    if not cfg.url or not cfg.url.startswith(("http://", "https://")):
        raise InvalidConfig("Please enter a valid URL starting with http:// or https://")
    if not cfg.token:
        raise InvalidConfig("Please enter the connection token.")
    return cfg


class ConnectionStore:
    """Owns the single persisted connection record (load/save/clear)."""

    def __init__(self, storage: KeyValueStorage, key: Optional[str] = None) -> None:
        self.storage = storage
        self.key = key or get_config().connection_key
        self.logger = get_logger(__name__)

    def load(self) -> Optional[ConnectionConfig]:
        """Return the stored config, or None when nothing is stored.

        Raises:
            ConfigError: If a record exists but is not a valid JSON-encoded config.
            StorageError: If the storage itself cannot be read.
        """
        raw = self.storage.get_item(self.key)
        if raw is None:
            return None
        try:
            cfg = ConnectionConfig.model_validate_json(raw)
        except ValidationError as e:
            self.logger.error(f"Stored connection under {self.key!r} is unreadable: {e.error_count()} error(s)")
            raise ConfigError("Stored connection settings are corrupt; please reconnect.") from e
        return validate_connection(cfg)

    def save(self, cfg: ConnectionConfig) -> ConnectionConfig:
        """Validate and persist cfg, replacing any previous record."""
        validate_connection(cfg)
        self.storage.set_item(self.key, cfg.model_dump_json())
        self.logger.info(f"Saved connection to {cfg.url} (token {mask_secret(cfg.token)})")
        return cfg

    def clear(self) -> None:
        self.storage.remove_item(self.key)
        self.logger.info("Cleared stored connection")
