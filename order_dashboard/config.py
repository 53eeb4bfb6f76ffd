from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: str = "local"
    log_level: str = "DEBUG"

    # Remote store API
    api_namespace: str = "/wp-json/order-dashboard/v1"
    token_header: str = "X-Order-Dashboard-Token"
    page_size: int = 100
    max_pages: int = 1000
    request_timeout_sec: float = 30.0

    # Durable local storage
    storage_kind: Literal["file", "memory"] = "file"
    storage_path: str = ".order_dashboard/storage.json"
    connection_key: str = "wooCommerceConfig"

    # UI settings
    default_sort_order: Literal["newest", "oldest"] = "newest"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
