"""Slack webhook delivery for elkalert."""

import enum
import logging
from typing import Any, Optional

import httpx

from elkalert import __version__
from elkalert.config import AlertConfig
from elkalert.display import print_error, print_no_data, print_report, print_success
from elkalert.errors import DeliveryError
from elkalert.report import Report, is_no_data

logger = logging.getLogger(__name__)


class DispatchOutcome(enum.Enum):
    """What happened to a report."""

    NO_DATA = "no_data"
    LOCAL_ONLY = "local_only"
    DELIVERED = "delivered"
    DELIVERY_FAILED = "delivery_failed"


class WebhookSender:
    """HTTP client for sending webhook messages."""

    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        """Get HTTP client (lazy init)."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout, transport=self._transport)
        return self._client

    def send(self, payload: dict[str, Any]) -> None:
        """Send payload to webhook endpoint.

        One attempt only.

        Args:
            payload: JSON payload to send

        Raises:
            DeliveryError: Request failed or status was not 200
        """
        try:
            response = self.client.post(
                self.endpoint,
                json=payload,
                headers={
                    "Content-Type": "application/json",
                    "User-Agent": f"elkalert/{__version__}",
                }
            )
        except httpx.RequestError as e:
            raise DeliveryError(f"Request error: {e}") from e

        if response.status_code != 200:
            raise DeliveryError(
                f"{response.status_code} received instead of 200",
                status_code=response.status_code
            )

        logger.info(f"Webhook sent successfully to {self.endpoint}")

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None


def build_message(report: str) -> dict[str, str]:
    """Build Slack message payload."""
    return {
        "type": "mrkdwn",
        "text": report,
    }


def dispatch(
    report: Report,
    config: AlertConfig,
    sender: Optional[WebhookSender] = None,
    deliver: bool = True
) -> DispatchOutcome:
    """Show a report and deliver it to the webhook if one is configured.

    Delivery errors are logged and reported, never raised.

    Args:
        report: Formatted report or NO_DATA
        config: Alert configuration
        sender: Optional sender, built from config when omitted
        deliver: Set False to skip the webhook

    Returns:
        DispatchOutcome
    """
    if is_no_data(report):
        print_no_data()
        return DispatchOutcome.NO_DATA

    print_report(report)

    if not deliver or not config.has_webhook:
        return DispatchOutcome.LOCAL_ONLY

    own_sender = sender is None
    if own_sender:
        sender = WebhookSender(config.slack_webhook, timeout=config.request_timeout)

    try:
        sender.send(build_message(report))
    except DeliveryError as e:
        logger.error(f"Webhook delivery failed: {e}")
        print_error(f"Webhook delivery failed: {e}")
        return DispatchOutcome.DELIVERY_FAILED
    finally:
        if own_sender:
            sender.close()

    print_success("Report sent to webhook")
    return DispatchOutcome.DELIVERED
