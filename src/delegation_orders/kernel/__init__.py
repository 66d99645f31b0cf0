"""
Kernel - Shared infrastructure for delegation orders

Identifier generation, an injectable clock, the error hierarchy, structured
logging and Prometheus metrics. Nothing in here knows what an order is.
"""

from delegation_orders.kernel.errors import (
    DuplicateOrder,
    NotificationError,
    OrderNotFound,
    OrdersError,
    RegistryError,
    SinkEncodingError,
    SinkTransportError,
    SinkUnconfigured,
)
from delegation_orders.kernel.ids import DefaultIdFactory, IdFactory, generate_order_id
from delegation_orders.kernel.time import RealTimeProvider, TestTimeProvider, TimeProvider

__all__ = [
    # IDs
    "IdFactory",
    "DefaultIdFactory",
    "generate_order_id",
    # Time
    "TimeProvider",
    "RealTimeProvider",
    "TestTimeProvider",
    # Errors
    "OrdersError",
    "NotificationError",
    "SinkUnconfigured",
    "SinkTransportError",
    "SinkEncodingError",
    "RegistryError",
    "OrderNotFound",
    "DuplicateOrder",
]
