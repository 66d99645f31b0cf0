"""
Order Registry Example - one order from creation to fulfillment

This example demonstrates:
- Creating an order and announcing it to its owners
- Owners delegating toward the order
- Finding the order when a user presents their labels
- Fulfilling (and retiring) the order

Notifications are printed instead of posted; set ORDERS_WEBHOOK_URL and use
OrderRegistry.from_config(OrdersConfig.from_env()) to post them for real.
"""

from datetime import timedelta

from delegation_orders.notifier import Color
from delegation_orders.order.registry import OrderRegistry


class PrintSink:
    """Sink that prints notifications to stdout"""

    def notify(self, message: str, color: Color) -> None:
        print(f"  [{color.value}] {message}")


def main() -> None:
    print("\n=== Order lifecycle ===\n")

    registry = OrderRegistry(host="ro.example.com", sink=PrintSink())
    owners = {"dave": "Dave D", "erin": "erin.k"}

    order = registry.create_order(
        creator="alice",
        users=["bob", "carol"],
        labels=["prod-db"],
        owners=list(owners),
        duration=timedelta(hours=24),
    )
    print(f"Created order {order.order_id}")

    registry.notify_new_order(
        duration="24h",
        order_num=order.order_id,
        names=order.users,
        labels=order.labels,
        uses=2,
        owners=owners,
        creator=order.creator,
    )

    for owner in owners:
        registry.record_delegation(order.order_id, owner)
        registry.notify_delegation(owner, "bob", order.order_id, "24h", order.labels)

    # bob shows up with more labels than the order needs - still a match
    order_id, found = registry.find_order("bob", ["prod-db", "billing"])
    print(f"\nbob has a pending order: {found} ({order_id})")

    pending = registry.get_order(order_id)
    if pending.remaining_delegations(required=2) == 0:
        registry.fulfill_order(order_id, pending.creator)

    print(f"Pending orders left: {len(registry)}")


if __name__ == "__main__":
    main()
