"""
Notification sink capability

A sink accepts a message and a color hint and either delivers it or raises
a NotificationError. The color hint classifies the message for display; it
never changes control flow.
"""

from enum import Enum
from typing import Protocol

from delegation_orders.kernel.errors import SinkUnconfigured


class Color(str, Enum):
    """Display hint attached to every notification"""

    RED = "red"  # new orders, needs attention
    YELLOW = "yellow"  # delegation granted
    GREEN = "green"  # approve/delegate links
    GRAY = "gray"
    PURPLE = "purple"  # order fulfilled
    RANDOM = "random"


class NotificationSink(Protocol):
    """Protocol for notification channels"""

    def notify(self, message: str, color: Color) -> None:
        """
        Deliver one message

        Raises:
            NotificationError: If the message could not be delivered
        """
        ...


class AbsentSink:
    """
    Sink used when no notification channel is configured

    Every call fails with SinkUnconfigured so that callers always learn the
    message went nowhere.
    """

    def notify(self, message: str, color: Color) -> None:
        raise SinkUnconfigured()
