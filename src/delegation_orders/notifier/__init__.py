"""
Notifier - channels for announcing order lifecycle events

build_sink picks the sink for a configuration once, at construction time;
the registry never looks a sink up on its own.
"""

from delegation_orders.config import OrdersConfig
from delegation_orders.notifier.base import AbsentSink, Color, NotificationSink
from delegation_orders.notifier.webhook import WebhookSink


def build_sink(config: OrdersConfig) -> NotificationSink:
    """Return a WebhookSink when a webhook url is configured, else an AbsentSink"""
    if config.webhook_url:
        return WebhookSink(config.webhook_url, timeout=config.notification_timeout_seconds)
    return AbsentSink()


__all__ = [
    "AbsentSink",
    "Color",
    "NotificationSink",
    "WebhookSink",
    "build_sink",
]
