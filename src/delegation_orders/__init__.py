"""
Delegation Orders - bookkeeping for delegated access requests

An order is a request by a creator that a set of users receive delegated
access to a set of labels. Owners of those labels are notified with a link
they can follow to delegate, and the order is retired once fulfilled.

Fun fact: the two-person rule this supports dates back to nuclear launch
procedures - no single key holder can act alone!
"""

from delegation_orders.order.models import Order, OrderIndex
from delegation_orders.order.registry import OrderRegistry

__version__ = "0.1.0"
__all__ = ["Order", "OrderIndex", "OrderRegistry", "__version__"]
