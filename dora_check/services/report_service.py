from __future__ import annotations

import logging
from datetime import datetime

from dora_check.config import settings
from dora_check.reports.generator import report_generator
from dora_check.schemas.report import NotificationMessage, ReportRequest
from dora_check.services.notification_service import NotificationClient

logger = logging.getLogger(__name__)


def build_message(request: ReportRequest, *, now: datetime | None = None) -> NotificationMessage:
    """Render the report for *request* and address it to the configured recipients."""
    report = report_generator.generate_report(
        email=request.email,
        inputs=request.results.to_raw_inputs(),
        metrics=request.metrics,
        now=now,
    )
    return NotificationMessage(
        to=settings.REPORT_TO,
        cc=settings.REPORT_CC or None,
        from_=settings.REPORT_FROM,
        subject=report.subject,
        text=report.text,
        html=report.html,
    )


async def send_report(
    request: ReportRequest,
    client: NotificationClient,
    *,
    now: datetime | None = None,
) -> NotificationMessage:
    """Render and deliver a quick-check report.

    Args:
        request: Validated export payload.
        client: Notification channel to deliver through.
        now: Timestamp shown in the report; defaults to the current time.

    Returns:
        The message that was handed to *client*.

    Raises:
        NotificationError: If *client* could not deliver the message.
    """
    message = build_message(request, now=now)
    await client.send(message)
    logger.info("Report for %s captured and queued", request.email)
    return message
