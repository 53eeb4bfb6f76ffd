"""Loguru setup shared by every dashboard module.

One stderr sink is installed lazily by the first `get_logger` call and is
re-installed whenever the configured `log_level` changes. An explicit
`configure_logging(level)` holds until then.
"""
import sys
from typing import Optional

from loguru import logger

from order_dashboard.config import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

# Config level the current sink was installed under
_configured_from: Optional[str] = None


def configure_logging(level: Optional[str] = None) -> str:
    """Replace all loguru sinks with the dashboard's stderr sink.

    Args:
        level (str, optional): Minimum level. Defaults to get_config().log_level.
    Returns:
        str: The level now in effect.
    """
    global _configured_from
    _configured_from = get_config().log_level.upper()
    level = (level or _configured_from).upper()
    logger.remove()
    logger.configure(extra={"component": "order_dashboard"})
    # diagnose=False: tracebacks must not print local values such as tokens
    logger.add(lambda msg: sys.stderr.write(msg), level=level, format=LOG_FORMAT, diagnose=False)
    return level


def get_logger(name: Optional[str] = None):
    """Return the shared logger, bound to `name` when given."""
    if _configured_from != get_config().log_level.upper():
        configure_logging()
    return logger.bind(component=name) if name else logger


def mask_secret(value: Optional[str] = None) -> str:
    """Mask a credential for log output, keeping only the first and last 4 characters."""
    if not value:
        return ""
    if len(value) <= 8:
        return "*" * len(value)
    return value[:4] + "*" * (len(value) - 8) + value[-4:]
