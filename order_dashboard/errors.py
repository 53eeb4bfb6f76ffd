from typing import Optional


class OrderDashboardError(Exception):
    """Base dashboard error."""
    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message or self.__class__.__name__


class ConfigError(OrderDashboardError):
    """Missing or invalid connection credential; raised before any network call."""


class InvalidConfig(ConfigError):
    """A connection config failed validation and was not persisted."""


class StorageError(OrderDashboardError):
    """Durable local storage could not be read, written or cleared."""


class RemoteError(OrderDashboardError):
    """The store API answered with a non-success response."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(OrderDashboardError):
    """The store API could not be reached (DNS, refused connection, timeout)."""


class OrderUpdateError(OrderDashboardError):
    """A status change was rolled back because the store rejected it."""
    def __init__(self, order_id: int, order_number: str, cause: Exception):
        super().__init__(f"Failed to update status for order #{order_number}. {cause}")
        self.order_id = order_id
        self.order_number = order_number
        self.cause = cause
