"""
Notification message templates

The template wording and parameter order are consumed by people and by chat
bots that parse them, so they must not drift.
"""

from typing import Iterable
from urllib.parse import urlencode

NEW_ORDER = (
    "{creator} has created an order for the label {labels}. "
    "requesting {uses} delegations for {duration}"
)
NEW_ORDER_LINK = "@{display_name} - https://{host}?{query}"
ORDER_FULFILLED = "{name} has had order {order_num} fulfilled."
NEW_DELEGATION = (
    "{delegator} has delegated the label {labels} to {delegatee} "
    "(per order {order_num}) for {duration}"
)

# Lists that end up inside a query string must not contain spaces,
# urlencode would turn them into "+"
LINK_SEPARATOR = ","
DISPLAY_SEPARATOR = ", "


def join_list(items: Iterable[str], separator: str = LINK_SEPARATOR) -> str:
    return separator.join(items)


def format_new_order(creator: str, labels: str, uses: int, duration: str) -> str:
    return NEW_ORDER.format(creator=creator, labels=labels, uses=uses, duration=duration)


def format_delegation(
    delegator: str, labels: Iterable[str], delegatee: str, order_num: str, duration: str
) -> str:
    return NEW_DELEGATION.format(
        delegator=delegator,
        labels=join_list(labels, DISPLAY_SEPARATOR),
        delegatee=delegatee,
        order_num=order_num,
        duration=duration,
    )


def format_fulfilled(name: str, order_num: str) -> str:
    return ORDER_FULFILLED.format(name=name, order_num=order_num)


def build_order_query(
    delegator: str,
    label_list: str,
    duration: str,
    uses: int,
    order_num: str,
    delegatee_list: str,
) -> str:
    """
    Encode the query string of an order link

    Keys are sorted and every value is percent-encoded as one opaque value,
    so the pre-joined lists keep their commas as %2C.

    Example:
        >>> build_order_query("dave", "prod-db", "24h", 2, "abcd1234", "bob,carol")
        'delegatee=bob%2Ccarol&delegator=dave&duration=24h&label=prod-db&ordernum=abcd1234&uses=2'
    """
    params = {
        "delegator": delegator,
        "label": label_list,
        "duration": duration,
        "uses": str(uses),
        "ordernum": order_num,
        "delegatee": delegatee_list,
    }
    return urlencode(sorted(params.items()))


def format_order_link(display_name: str, host: str, query: str) -> str:
    return NEW_ORDER_LINK.format(display_name=display_name, host=host, query=query)
