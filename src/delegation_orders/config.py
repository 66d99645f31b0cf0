"""
Runtime configuration for delegation orders

Everything the registry needs from its environment: the host that order
links point at, where notifications go, and how chatty the logs are.
"""

import os

from pydantic import BaseModel, Field


class OrdersConfig(BaseModel):
    """
    Order registry settings

    A missing webhook_url is a valid configuration. The registry then runs
    with an absent sink and every notification attempt is reported as
    unconfigured rather than dropped.
    """

    ro_host: str = Field(
        default="localhost:8080",
        description="Host (and optional path) order links point at, without scheme",
    )

    webhook_url: str | None = Field(
        default=None,
        description="JSON webhook endpoint for order notifications",
    )

    notification_timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        le=120.0,
        description="Upper bound on a single outbound notification request",
    )

    alternate_name: str = Field(
        default="HipchatName",
        description=(
            "Owner attribute holding the chat handle; read by callers that build"
            " the owners mapping for notify_new_order, not by the registry"
        ),
    )

    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )

    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "OrdersConfig":
        """
        Build configuration from ORDERS_* environment variables

        ENVIRONMENT=production switches logs to JSON.
        """
        values: dict[str, object] = {}
        if host := os.getenv("ORDERS_RO_HOST"):
            values["ro_host"] = host
        if url := os.getenv("ORDERS_WEBHOOK_URL"):
            values["webhook_url"] = url
        if timeout := os.getenv("ORDERS_NOTIFICATION_TIMEOUT"):
            values["notification_timeout_seconds"] = timeout
        if level := os.getenv("ORDERS_LOG_LEVEL"):
            values["log_level"] = level.upper()
        values["json_logs"] = os.getenv("ENVIRONMENT", "development").lower() == "production"
        return cls.model_validate(values)
