from __future__ import annotations

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Force log-only delivery before any dora_check module is imported so that
# dora_check.config.settings never points at a real webhook during tests.
os.environ["NOTIFY_WEBHOOK_URL"] = ""

from dora_check.main import app  # noqa: E402
from dora_check.schemas.report import NotificationMessage  # noqa: E402
from dora_check.services.notification_service import (  # noqa: E402
    NotificationClient,
    NotificationError,
    get_notification_client,
)

# ---------------------------------------------------------------------------
# Notification stubs
# ---------------------------------------------------------------------------


class RecordingNotificationClient(NotificationClient):
    """Notification client that records messages instead of sending them."""

    def __init__(self, fail: bool = False) -> None:
        super().__init__(webhook_url="http://notify.test/send")
        self.sent: list[NotificationMessage] = []
        self._fail = fail

    async def send(self, message: NotificationMessage) -> None:
        if self._fail:
            raise NotificationError("webhook unreachable")
        self.sent.append(message)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def example_payload() -> dict:
    """The quick-check form's default answers, keyed as the form sends them."""
    return {
        "deploys": 12,
        "team": 20,
        "squads": 4,
        "errors": 2,
        "leadDays": 3,
        "mttrHours": 8,
    }


@pytest.fixture()
def notifier() -> RecordingNotificationClient:
    return RecordingNotificationClient()


@pytest.fixture()
def failing_notifier() -> RecordingNotificationClient:
    return RecordingNotificationClient(fail=True)


@pytest_asyncio.fixture(scope="function")
async def client(
    notifier: RecordingNotificationClient,
) -> AsyncGenerator[AsyncClient, None]:
    """Return an httpx.AsyncClient wired to the FastAPI app.

    The ``get_notification_client`` dependency is overridden with the
    recording stub so that no test ever reaches a real webhook.
    """
    app.dependency_overrides[get_notification_client] = lambda: notifier

    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.pop(get_notification_client, None)
