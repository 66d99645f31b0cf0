"""
Order Registry - in-memory bookkeeping for pending orders

The registry owns every Order it stores. Callers receive copies, never the
stored record, and all map access happens under a single lock. Notification
I/O always runs after the lock is released so a slow webhook cannot stall
lookups.

Lifecycle of an order:
    create_order -> record_delegation (zero or more) -> fulfill_order

There is no expiry here: the stored duration is informational and enforcing
it belongs to whoever grants the delegations.
"""

import threading
import time
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta

from delegation_orders.config import OrdersConfig
from delegation_orders.kernel.errors import DuplicateOrder, NotificationError, OrderNotFound
from delegation_orders.kernel.ids import IdFactory, default_id_factory
from delegation_orders.kernel.logging import LogOperation, correlation_scope, get_logger
from delegation_orders.kernel.metrics import (
    delegations_recorded_total,
    notification_duration_seconds,
    notifications_sent_total,
    orders_created_total,
    orders_pending,
    orders_removed_total,
)
from delegation_orders.kernel.time import TimeProvider, default_time_provider
from delegation_orders.notifier import AbsentSink, Color, NotificationSink, build_sink
from delegation_orders.order.messages import (
    build_order_query,
    format_delegation,
    format_fulfilled,
    format_new_order,
    format_order_link,
    join_list,
)
from delegation_orders.order.models import Order, OrderIndex

logger = get_logger(__name__)


class OrderRegistry:
    """
    Mapping of order ids to orders, plus the notifications around them

    Lookups iterate in insertion order, so when several orders match the
    oldest one wins.

    Args:
        host: Host that order links point at (no scheme)
        sink: Notification channel; defaults to an AbsentSink
        alternate_name: Owner attribute holding chat display names. Not read
            here; kept for callers that resolve the owners mapping passed
            to notify_new_order
        id_factory: Source of order identifiers
        time_provider: Clock used to stamp requested_at
    """

    def __init__(
        self,
        host: str,
        sink: NotificationSink | None = None,
        alternate_name: str = "HipchatName",
        id_factory: IdFactory | None = None,
        time_provider: TimeProvider | None = None,
    ) -> None:
        self.host = host
        self.sink: NotificationSink = sink if sink is not None else AbsentSink()
        self.alternate_name = alternate_name
        self.id_factory = id_factory or default_id_factory
        self.time_provider = time_provider or default_time_provider
        self._orders: dict[str, Order] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: OrdersConfig, **kwargs: object) -> "OrderRegistry":
        """Build a registry whose sink is chosen from config"""
        return cls(
            host=config.ro_host,
            sink=build_sink(config),
            alternate_name=config.alternate_name,
            **kwargs,  # type: ignore[arg-type]
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @staticmethod
    def create_record(
        creator: str,
        order_id: str,
        requested_at: datetime,
        duration: timedelta,
        delegating_owners: list[str],
        owners: list[str],
        users: list[str],
        labels: list[str],
        delegated_count: int,
    ) -> Order:
        """Build an Order from exactly the supplied fields without storing it"""
        return Order(
            creator=creator,
            users=users,
            order_id=order_id,
            requested_at=requested_at,
            requested_duration=duration,
            delegated_count=delegated_count,
            delegating_owners=delegating_owners,
            owners=owners,
            labels=labels,
        )

    def generate_identifier(self) -> str:
        return self.id_factory.generate()

    def add_order(self, order: Order) -> None:
        """
        Store an order

        Raises:
            DuplicateOrder: If an order with the same id is already stored
        """
        with self._lock:
            if order.order_id in self._orders:
                raise DuplicateOrder(order.order_id)
            self._orders[order.order_id] = order.model_copy(deep=True)
            orders_pending.set(len(self._orders))
        orders_created_total.inc()
        logger.info("Order stored", order_id=order.order_id, labels=order.labels)

    def create_order(
        self,
        creator: str,
        users: list[str],
        labels: list[str],
        owners: list[str],
        duration: timedelta,
        delegated_count: int = 0,
        delegating_owners: list[str] | None = None,
    ) -> Order:
        """
        Generate an id, stamp the request time and store a new order

        Nobody is notified; call notify_new_order once the caller knows the
        owners' display names.
        """
        with correlation_scope():
            order = self.create_record(
                creator=creator,
                order_id=self.generate_identifier(),
                requested_at=self.time_provider.now(),
                duration=duration,
                delegating_owners=list(delegating_owners or []),
                owners=list(owners),
                users=list(users),
                labels=list(labels),
                delegated_count=delegated_count,
            )
            self.add_order(order)
        return order.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_order(self, user: str, labels: Iterable[str]) -> tuple[str, bool]:
        """
        Find a pending order for user that labels fully cover

        An order matches when user is one of its users and every one of its
        labels appears in labels. Extra labels do not disqualify a match.

        Returns:
            (order_id, True) for the first match, ("", False) otherwise
        """
        presented = frozenset(labels)
        with self._lock:
            for order_id, order in self._orders.items():
                if order.matches(user, presented):
                    return order_id, True
        return "", False

    def get_order(self, order_id: str) -> Order:
        """
        Return a copy of a stored order

        Raises:
            OrderNotFound: If no order has this id
        """
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                raise OrderNotFound(order_id)
            return order.model_copy(deep=True)

    def index(self) -> list[OrderIndex]:
        with self._lock:
            return [OrderIndex.from_order(order) for order in self._orders.values()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)

    def __contains__(self, order_id: object) -> bool:
        with self._lock:
            return order_id in self._orders

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def record_delegation(self, order_id: str, owner: str, count: int = 1) -> Order:
        """
        Count a delegation toward an order

        delegated_count is not checked against the number of owners;
        callers decide when an order is complete.

        Raises:
            OrderNotFound: If no order has this id
        """
        with correlation_scope():
            with self._lock:
                order = self._orders.get(order_id)
                if order is None:
                    raise OrderNotFound(order_id)
                order.delegated_count += count
                order.delegating_owners.append(owner)
                snapshot = order.model_copy(deep=True)
            delegations_recorded_total.inc(count)
            logger.info(
                "Delegation recorded",
                order_id=order_id,
                delegated_count=snapshot.delegated_count,
            )
        return snapshot

    def remove_order(self, order_id: str) -> Order:
        """
        Remove an order and return it

        Raises:
            OrderNotFound: If no order has this id
        """
        return self._remove(order_id, reason="removed")

    def claim_order(self, user: str, labels: Iterable[str]) -> Order | None:
        """
        Find and remove a matching order in one step

        The lookup and the removal share one lock hold, so two callers
        presenting the same labels can never both claim the same order.

        Returns:
            The removed order, or None when nothing matches
        """
        with correlation_scope(), self._lock:
            order_id, found = self.find_order(user, labels)
            if not found:
                return None
            return self._remove(order_id, reason="claimed")

    def fulfill_order(self, order_id: str, name: str) -> Order:
        """
        Retire an order and announce its fulfillment

        The order is removed before notifying, so a notification failure
        still leaves it retired; the error is raised to the caller.

        Raises:
            OrderNotFound: If no order has this id
            NotificationError: If the fulfillment notice could not be sent
        """
        with correlation_scope():
            order = self._remove(order_id, reason="fulfilled")
            self.notify_order_fulfilled(name, order_id)
        return order

    def _remove(self, order_id: str, reason: str) -> Order:
        with self._lock:
            order = self._orders.pop(order_id, None)
            if order is None:
                raise OrderNotFound(order_id)
            orders_pending.set(len(self._orders))
        orders_removed_total.labels(reason=reason).inc()
        logger.info("Order removed", order_id=order_id, reason=reason)
        return order

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def notify_new_order(
        self,
        duration: str,
        order_num: str,
        names: list[str],
        labels: list[str],
        uses: int,
        owners: Mapping[str, str],
        creator: str | None = None,
    ) -> None:
        """
        Announce a new order, then send each owner a link to delegate

        One broadcast goes out first, followed by one link per entry of
        owners (owner principal -> display name), in mapping order.

        Args:
            duration: Requested duration as shown to people (e.g. "24h")
            order_num: Order id placed in the links
            names: Users who will receive access
            labels: Labels requested
            uses: Number of delegations requested
            owners: Owner principal -> chat display name
            creator: Who created the order; defaults to the joined names

        Raises:
            NotificationError: The first delivery failure. Later messages
                are not attempted.
        """
        label_list = join_list(labels)
        name_list = join_list(names)

        messages = [(format_new_order(creator or name_list, label_list, uses, duration), Color.RED)]
        for owner, display_name in owners.items():
            query = build_order_query(owner, label_list, duration, uses, order_num, name_list)
            messages.append((format_order_link(display_name, self.host, query), Color.GREEN))

        with correlation_scope(), LogOperation(
            logger,
            "notify_new_order",
            order_id=order_num,
            owner_count=len(owners),
            creator=creator,
        ):
            self._dispatch_fail_fast("new_order", messages)

    def notify_delegation(
        self,
        delegator: str,
        delegatee: str,
        order_num: str,
        duration: str,
        labels: list[str],
    ) -> None:
        message = format_delegation(delegator, labels, delegatee, order_num, duration)
        with correlation_scope(), LogOperation(
            logger,
            "notify_delegation",
            order_id=order_num,
            delegator=delegator,
            delegatee=delegatee,
        ):
            self._dispatch_fail_fast("delegation", [(message, Color.YELLOW)])

    def notify_order_fulfilled(self, name: str, order_num: str) -> None:
        message = format_fulfilled(name, order_num)
        with correlation_scope(), LogOperation(
            logger, "notify_order_fulfilled", order_id=order_num
        ):
            self._dispatch_fail_fast("fulfilled", [(message, Color.PURPLE)])

    def _dispatch_fail_fast(self, kind: str, messages: list[tuple[str, Color]]) -> None:
        """
        Send messages in order, stopping at the first failure

        The failing error propagates unchanged and no later message is
        attempted. Nothing is retried.
        """
        for message, color in messages:
            start = time.perf_counter()
            try:
                self.sink.notify(message, color)
            except NotificationError:
                notifications_sent_total.labels(kind=kind, status="failure").inc()
                raise
            finally:
                notification_duration_seconds.labels(kind=kind).observe(
                    time.perf_counter() - start
                )
            notifications_sent_total.labels(kind=kind, status="success").inc()
