"""
JSON webhook sink

Posts {"text": message} to a chat webhook (Slack incoming webhooks accept
this shape). The color hint is accepted but not transmitted.
"""

import json

import requests

from delegation_orders.kernel.errors import (
    SinkEncodingError,
    SinkTransportError,
    SinkUnconfigured,
)
from delegation_orders.kernel.logging import get_logger
from delegation_orders.notifier.base import Color

logger = get_logger(__name__)


class WebhookSink:
    """
    Notification sink backed by an HTTP JSON webhook

    Args:
        url: Webhook endpoint. An empty url fails every notify call.
        timeout: Seconds before an outbound request is abandoned
    """

    def __init__(self, url: str, timeout: float = 5.0) -> None:
        self.url = url
        self.timeout = timeout

    def notify(self, message: str, color: Color) -> None:
        if not self.url:
            raise SinkUnconfigured("URL unset")

        try:
            body = json.dumps({"text": message})
        except (TypeError, ValueError) as e:
            raise SinkEncodingError(str(e)) from e

        try:
            response = requests.post(
                self.url,
                data=body.encode("utf-8"),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            # Drain the body so a truncated response counts as a failure
            _ = response.content
        except requests.RequestException as e:
            logger.warning("Could not post notification", reason=str(e))
            raise SinkTransportError(self.url, str(e)) from e

        if not response.ok:
            logger.warning(
                "Could not post notification",
                reason=response.reason,
                status_code=response.status_code,
            )
            raise SinkTransportError(
                self.url, response.reason or "unexpected response", response.status_code
            )
