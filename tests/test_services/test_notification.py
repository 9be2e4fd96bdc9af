from __future__ import annotations

import json
import logging

import httpx
import pytest

from dora_check.schemas.report import NotificationMessage
from dora_check.services.notification_service import (
    NotificationClient,
    NotificationError,
)

_WEBHOOK = "http://notify.test/send"


@pytest.fixture()
def message() -> NotificationMessage:
    return NotificationMessage(
        to="ops@example.com",
        cc="cto@example.com",
        from_="noreply@example.com",
        subject="DORA Metrics Report - a@b.io",
        text="plain",
        html="<p>html</p>",
    )


def test_message_serialises_sender_as_from(message: NotificationMessage) -> None:
    payload = message.model_dump(by_alias=True)
    assert payload["from"] == "noreply@example.com"
    assert "from_" not in payload


@pytest.mark.asyncio
async def test_send_posts_json_to_webhook(message: NotificationMessage) -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(202, json={"queued": True})

    client = NotificationClient(_WEBHOOK, transport=httpx.MockTransport(handler))
    await client.send(message)

    assert len(captured) == 1
    request = captured[0]
    assert request.method == "POST"
    assert str(request.url) == _WEBHOOK
    body = json.loads(request.content)
    assert body["to"] == "ops@example.com"
    assert body["from"] == "noreply@example.com"
    assert body["subject"] == "DORA Metrics Report - a@b.io"


@pytest.mark.asyncio
async def test_error_status_raises(message: NotificationMessage) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    client = NotificationClient(_WEBHOOK, transport=transport)

    with pytest.raises(NotificationError):
        await client.send(message)


@pytest.mark.asyncio
async def test_unreachable_webhook_raises(message: NotificationMessage) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = NotificationClient(_WEBHOOK, transport=httpx.MockTransport(handler))

    with pytest.raises(NotificationError, match="connection refused"):
        await client.send(message)


@pytest.mark.asyncio
async def test_log_only_mode_without_webhook(
    message: NotificationMessage, caplog: pytest.LogCaptureFixture
) -> None:
    client = NotificationClient("")
    assert client.is_configured is False

    with caplog.at_level(logging.INFO, logger="dora_check.services.notification_service"):
        await client.send(message)

    assert "Email data to be sent" in caplog.text
    assert "DORA Metrics Report - a@b.io" in caplog.text
