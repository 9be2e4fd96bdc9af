from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from dora_check.schemas.report import ReportRequest, ReportSendResponse
from dora_check.services.notification_service import (
    NotificationClient,
    NotificationError,
    get_notification_client,
)
from dora_check.services.report_service import send_report

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reports"])


@router.post(
    "/send-results",
    response_model=ReportSendResponse,
    summary="Export quick-check results as a report",
)
async def send_results(
    payload: ReportRequest,
    client: NotificationClient = Depends(get_notification_client),
) -> ReportSendResponse:
    """Render the results as text and HTML and hand them to the notifier.

    Args:
        payload: Email address, raw answers and (optionally) client metrics.
        client: Injected notification channel.

    Raises:
        HTTPException: 502 if the notification channel could not be reached.
    """
    try:
        await send_report(payload, client)
    except NotificationError as exc:
        logger.error("Error sending email for %s: %s", payload.email, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to send email",
        ) from exc
    return ReportSendResponse(
        success=True, message="Results captured and email queued"
    )
