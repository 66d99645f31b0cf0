"""
Order Module - pending delegation requests

- Order records and their listing summary
- Notification message templates and order links
- The registry that stores orders and announces their lifecycle
"""

from delegation_orders.order.models import Order, OrderIndex
from delegation_orders.order.registry import OrderRegistry

__all__ = [
    "Order",
    "OrderIndex",
    "OrderRegistry",
]
