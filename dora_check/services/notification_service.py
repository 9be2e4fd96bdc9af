from __future__ import annotations

"""Delivery of rendered reports to the notification webhook.

:class:`NotificationClient` POSTs a
:class:`~dora_check.schemas.report.NotificationMessage` as JSON to the
configured ``NOTIFY_WEBHOOK_URL``.  When no webhook is configured the message
is only logged, which is useful for local development.

Delivery failures raise :class:`NotificationError` so that callers can report
them instead of pretending the report was sent.
"""

import logging

import httpx

from dora_check.config import settings
from dora_check.schemas.report import NotificationMessage

logger = logging.getLogger(__name__)


class NotificationError(RuntimeError):
    """Raised when the notification webhook is unreachable or rejects a message."""


class NotificationClient:
    """Async sender for report notifications.

    Args:
        webhook_url: Endpoint that accepts the message JSON.  An empty string
            switches the client to log-only mode.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport, used by tests to stub the
            webhook.

    Example::

        client = NotificationClient(webhook_url="https://mail.internal/send")
        await client.send(message)
    """

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._webhook_url = webhook_url
        self._timeout = timeout
        self._transport = transport
        if not webhook_url:
            logger.warning(
                "NotificationClient: NOTIFY_WEBHOOK_URL is not configured — "
                "reports will be logged instead of delivered."
            )

    @property
    def is_configured(self) -> bool:
        return bool(self._webhook_url)

    async def send(self, message: NotificationMessage) -> None:
        """Deliver *message* to the webhook (or log it in log-only mode).

        Raises:
            NotificationError: On connection errors, timeouts, or a non-2xx
                response from the webhook.
        """
        payload = message.model_dump(by_alias=True)
        if not self.is_configured:
            logger.info("Email data to be sent: %s", payload)
            return

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(self._webhook_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error(
                "Notification delivery to %s failed: %s", self._webhook_url, exc
            )
            raise NotificationError(f"Notification delivery failed: {exc}") from exc

        logger.info(
            "Notification delivered to %s (status=%d subject=%r)",
            self._webhook_url,
            response.status_code,
            message.subject,
        )


# Module-level singleton — imported by other modules.
notification_client = NotificationClient(
    settings.NOTIFY_WEBHOOK_URL, timeout=settings.NOTIFY_TIMEOUT_SECONDS
)


def get_notification_client() -> NotificationClient:
    """FastAPI dependency returning the shared :class:`NotificationClient`."""
    return notification_client
