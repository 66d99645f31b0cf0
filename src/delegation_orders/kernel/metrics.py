"""
Prometheus metrics for delegation orders.

Tracks how many orders are pending and how notification delivery is going.
"""

from prometheus_client import Counter, Gauge, Histogram, start_http_server

# ============================================================================
# Order Registry Metrics
# ============================================================================

orders_created_total = Counter(
    "orders_created_total",
    "Total number of orders inserted into the registry",
)

orders_removed_total = Counter(
    "orders_removed_total",
    "Total number of orders removed from the registry",
    ["reason"],  # reason: removed, claimed, fulfilled
)

orders_pending = Gauge(
    "orders_pending",
    "Number of orders currently held by the registry",
)

delegations_recorded_total = Counter(
    "orders_delegations_recorded_total",
    "Total number of delegations recorded against pending orders",
)

# ============================================================================
# Notification Metrics
# ============================================================================

notifications_sent_total = Counter(
    "orders_notifications_sent_total",
    "Total number of notification attempts",
    ["kind", "status"],  # status: success, failure
)

notification_duration_seconds = Histogram(
    "orders_notification_duration_seconds",
    "Duration of a single notification delivery in seconds",
    ["kind"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)


def start_metrics_server(port: int = 9090) -> None:
    """
    Start Prometheus metrics HTTP server.

    Args:
        port: Port to listen on (default: 9090)
    """
    start_http_server(port)
