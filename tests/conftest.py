"""
Pytest configuration and shared fixtures

Fun fact: The name "conftest" comes from pytest's configuration testing
framework. Files named conftest.py are automatically discovered and their
fixtures are available to all tests in the same directory and subdirectories!
"""

from datetime import datetime, timezone

import pytest

from delegation_orders.kernel.time import TestTimeProvider
from delegation_orders.order.registry import OrderRegistry
from tests.helpers import RecordingSink, SequentialIdFactory


@pytest.fixture
def test_time() -> TestTimeProvider:
    """
    Provide a controllable time provider for deterministic tests

    Default time: 2025-01-15 12:00:00 UTC
    """
    return TestTimeProvider(datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def sink() -> RecordingSink:
    """Sink that records every message and always succeeds"""
    return RecordingSink()


@pytest.fixture
def registry(sink: RecordingSink, test_time: TestTimeProvider) -> OrderRegistry:
    """Registry with a recording sink, sequential ids and a frozen clock"""
    return OrderRegistry(
        host="ro.example.com",
        sink=sink,
        id_factory=SequentialIdFactory(),
        time_provider=test_time,
    )


@pytest.fixture(autouse=True)
def clean_orders_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's ORDERS_* settings out of tests"""
    for name in (
        "ORDERS_RO_HOST",
        "ORDERS_WEBHOOK_URL",
        "ORDERS_NOTIFICATION_TIMEOUT",
        "ORDERS_LOG_LEVEL",
        "ENVIRONMENT",
    ):
        monkeypatch.delenv(name, raising=False)
