"""
Test Helper Functions - Builders and Fakes

Builders keep order construction readable; the fake sinks let tests count
exactly which notifications went out and make any one of them fail.
"""

from datetime import datetime, timedelta, timezone

from delegation_orders.kernel.errors import SinkTransportError
from delegation_orders.notifier.base import Color
from delegation_orders.order.models import Order


class RecordingSink:
    """
    Sink that records delivered messages

    Args:
        fail_on_call: 1-based call number that raises SinkTransportError
            (None never fails)
    """

    def __init__(self, fail_on_call: int | None = None) -> None:
        self.fail_on_call = fail_on_call
        self.calls = 0
        self.delivered: list[tuple[str, Color]] = []

    def notify(self, message: str, color: Color) -> None:
        self.calls += 1
        if self.calls == self.fail_on_call:
            raise SinkTransportError("http://chat.invalid/hook", "connection refused")
        self.delivered.append((message, color))

    @property
    def messages(self) -> list[str]:
        return [message for message, _ in self.delivered]


class SequentialIdFactory:
    """Deterministic order ids: order-0001, order-0002, ..."""

    def __init__(self) -> None:
        self.counter = 0

    def generate(self) -> str:
        self.counter += 1
        return f"order-{self.counter:04d}"


def make_order(
    order_id: str = "abcd1234",
    creator: str = "alice",
    users: list[str] | None = None,
    labels: list[str] | None = None,
    owners: list[str] | None = None,
    delegated_count: int = 0,
) -> Order:
    """
    Builder for test orders

    Example:
        >>> order = make_order(users=["bob"], labels=["prod-db", "billing"])
    """
    return Order(
        creator=creator,
        users=users if users is not None else ["bob", "carol"],
        order_id=order_id,
        requested_at=datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc),
        requested_duration=timedelta(hours=24),
        delegated_count=delegated_count,
        delegating_owners=[],
        owners=owners if owners is not None else ["dave"],
        labels=labels if labels is not None else ["prod-db"],
    )
