"""
Custom exceptions for delegation orders

Notification failures and registry lookups each get their own branch of the
hierarchy so callers can decide what aborts an operation and what doesn't.
"""


class OrdersError(Exception):
    """Base exception for all delegation order errors"""

    pass


# Notification errors


class NotificationError(OrdersError):
    """Base class for notification sink failures"""

    pass


class SinkUnconfigured(NotificationError):
    """
    Raised when no notification sink is available

    An absent sink is a valid configuration, but every attempt to notify
    through it is reported rather than silently dropped.
    """

    def __init__(self, reason: str = "no notifier set to notify of order") -> None:
        self.reason = reason
        super().__init__(reason)


class SinkTransportError(NotificationError):
    """Raised when the notification could not be delivered over the network"""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        self.url = url
        self.reason = reason
        self.status_code = status_code
        detail = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"Could not post notification{detail}: {reason}")


class SinkEncodingError(NotificationError):
    """Raised when a notification message cannot be serialized"""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Could not encode notification: {reason}")


# Registry errors


class RegistryError(OrdersError):
    """Base class for order registry errors"""

    pass


class OrderNotFound(RegistryError):
    """Raised when order does not exist in the registry"""

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class DuplicateOrder(RegistryError):
    """Raised when inserting an order whose id is already registered"""

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id} is already registered")
