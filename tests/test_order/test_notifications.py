"""
Tests for order notifications

Notification delivery is fail-fast: the first failure is raised and no
later message is attempted.
"""

from datetime import timedelta

import pytest

from delegation_orders.kernel.errors import (
    NotificationError,
    OrderNotFound,
    SinkTransportError,
    SinkUnconfigured,
)
from delegation_orders.notifier import Color
from delegation_orders.order.registry import OrderRegistry
from tests.helpers import RecordingSink


def notify_new(registry, owners, labels=("prod-db",), names=("bob", "carol"), creator="alice"):
    registry.notify_new_order(
        duration="24h",
        order_num="abcd1234",
        names=list(names),
        labels=list(labels),
        uses=2,
        owners=owners,
        creator=creator,
    )


# =============================================================================
# notify_new_order
# =============================================================================


def test_new_order_end_to_end(registry, sink):
    """Test the broadcast and per-owner link for a single owner"""
    notify_new(registry, {"dave": "Dave D"})

    assert sink.delivered[0] == (
        "alice has created an order for the label prod-db. requesting 2 delegations for 24h",
        Color.RED,
    )
    link, color = sink.delivered[1]
    assert color == Color.GREEN
    assert link.startswith("@Dave D - https://ro.example.com?")
    assert "delegatee=bob%2Ccarol" in link
    assert "ordernum=abcd1234" in link
    assert "delegator=dave" in link
    assert "uses=2" in link
    assert "duration=24h" in link


def test_new_order_sends_broadcast_plus_one_link_per_owner(registry, sink):
    notify_new(registry, {"A": "dispA", "B": "dispB"})

    assert len(sink.delivered) == 3
    assert sink.messages[1].startswith("@dispA - ")
    assert sink.messages[2].startswith("@dispB - ")


def test_new_order_joins_labels_with_plain_comma(registry, sink):
    notify_new(registry, {}, labels=["prod-db", "billing"])

    assert "for the label prod-db,billing." in sink.messages[0]


def test_new_order_without_owners_only_broadcasts(registry, sink):
    notify_new(registry, {})

    assert len(sink.delivered) == 1


def test_new_order_creator_defaults_to_user_names(registry, sink):
    notify_new(registry, {}, creator=None)

    assert sink.messages[0].startswith("bob,carol has created an order")


def test_new_order_stops_at_first_failure(test_time):
    """Test a failure on the 2nd call leaves one delivery and no 3rd attempt"""
    sink = RecordingSink(fail_on_call=2)
    registry = OrderRegistry(host="ro.example.com", sink=sink, time_provider=test_time)

    with pytest.raises(SinkTransportError):
        notify_new(registry, {"A": "dispA", "B": "dispB"})

    assert len(sink.delivered) == 1
    assert sink.calls == 2


def test_new_order_broadcast_failure_skips_owner_links():
    sink = RecordingSink(fail_on_call=1)
    registry = OrderRegistry(host="ro.example.com", sink=sink)

    with pytest.raises(NotificationError):
        notify_new(registry, {"A": "dispA"})

    assert sink.delivered == []
    assert sink.calls == 1


def test_new_order_with_absent_sink_raises():
    registry = OrderRegistry(host="ro.example.com")

    with pytest.raises(SinkUnconfigured):
        notify_new(registry, {"A": "dispA"})


# =============================================================================
# notify_delegation / notify_order_fulfilled
# =============================================================================


def test_delegation_joins_labels_with_comma_space(registry, sink):
    registry.notify_delegation("dave", "bob", "abcd1234", "24h", ["prod-db", "billing"])

    assert sink.delivered == [
        (
            "dave has delegated the label prod-db, billing to bob (per order abcd1234) for 24h",
            Color.YELLOW,
        )
    ]


def test_fulfilled_message(registry, sink):
    registry.notify_order_fulfilled("alice", "abcd1234")

    assert sink.delivered == [("alice has had order abcd1234 fulfilled.", Color.PURPLE)]


def test_delegation_with_absent_sink_raises():
    with pytest.raises(SinkUnconfigured):
        OrderRegistry(host="h").notify_delegation("dave", "bob", "n", "1h", ["x"])


def test_fulfilled_with_absent_sink_raises():
    with pytest.raises(SinkUnconfigured):
        OrderRegistry(host="h").notify_order_fulfilled("alice", "n")


# =============================================================================
# fulfill_order
# =============================================================================


def test_fulfill_order_removes_then_announces(registry, sink):
    order = registry.create_order(
        creator="alice",
        users=["bob"],
        labels=["prod-db"],
        owners=["dave"],
        duration=timedelta(hours=1),
    )

    removed = registry.fulfill_order(order.order_id, "alice")

    assert removed.order_id == order.order_id
    assert order.order_id not in registry
    assert sink.messages == [f"alice has had order {order.order_id} fulfilled."]


def test_fulfill_order_retires_even_when_notification_fails():
    registry = OrderRegistry(host="h")
    order = registry.create_order(
        creator="alice",
        users=["bob"],
        labels=["prod-db"],
        owners=["dave"],
        duration=timedelta(hours=1),
    )

    with pytest.raises(SinkUnconfigured):
        registry.fulfill_order(order.order_id, "alice")

    assert order.order_id not in registry


def test_fulfill_missing_order_does_not_notify(registry, sink):
    with pytest.raises(OrderNotFound):
        registry.fulfill_order("nope", "alice")

    assert sink.delivered == []
