"""
Order Domain Models

An Order records who asked for access, who should receive it, which labels
it covers and how far delegation has progressed. Only the delegation
progress fields may change after creation; everything else is frozen.

Fun fact: labels are stored in the order they were requested but compared as
a set - asking for "prod-db,billing" and "billing,prod-db" is the same order!
"""

from datetime import datetime, timedelta
from collections.abc import Iterable, Set

from pydantic import BaseModel, Field


class Order(BaseModel):
    """
    Outstanding request for delegated access

    Attributes:
        creator: Principal who requested the order
        users: Principals to receive access (order kept, duplicates kept)
        order_id: Registry key, generated once
        requested_at: When the order was created
        requested_duration: How long delegated access should last
        delegated_count: Delegations granted so far
        delegating_owners: Owners who have already delegated
        owners: Owners eligible to delegate
        labels: Resources being requested
    """

    creator: str = Field(frozen=True)
    users: list[str] = Field(frozen=True)
    order_id: str = Field(frozen=True)
    requested_at: datetime = Field(frozen=True)
    requested_duration: timedelta = Field(frozen=True)
    delegated_count: int = 0
    delegating_owners: list[str] = Field(default_factory=list)
    owners: list[str] = Field(frozen=True)
    labels: list[str] = Field(frozen=True)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "creator": "alice",
                    "users": ["bob", "carol"],
                    "order_id": "9f86d081884c7d659a2feaa0",
                    "requested_at": "2025-01-15T12:00:00Z",
                    "requested_duration": "PT24H",
                    "delegated_count": 0,
                    "delegating_owners": [],
                    "owners": ["dave"],
                    "labels": ["prod-db"],
                }
            ]
        }
    }

    def label_set(self) -> frozenset[str]:
        return frozenset(self.labels)

    def includes_user(self, user: str) -> bool:
        return user in self.users

    def is_satisfied_by(self, labels: Iterable[str]) -> bool:
        """
        True when every label this order requires appears in labels

        Extra labels are ignored. An order without labels is never satisfied.
        A ready-made set is used as is.
        """
        if not self.labels:
            return False
        presented = labels if isinstance(labels, Set) else frozenset(labels)
        return all(label in presented for label in self.labels)

    def matches(self, user: str, labels: Iterable[str]) -> bool:
        return self.includes_user(user) and self.is_satisfied_by(labels)

    def remaining_delegations(self, required: int) -> int:
        """Delegations still needed to reach required (never negative)"""
        return max(required - self.delegated_count, 0)


class OrderIndex(BaseModel):
    """
    Summary of a pending order for listings

    Attributes:
        order_for: Creator of the order
        order_id: Registry key
        order_owners: Owners eligible to delegate
    """

    order_for: str
    order_id: str
    order_owners: list[str] = Field(default_factory=list)

    @classmethod
    def from_order(cls, order: Order) -> "OrderIndex":
        return cls(
            order_for=order.creator,
            order_id=order.order_id,
            order_owners=list(order.owners),
        )
