"""Shared test fixtures for graph-messenger."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from graph_messenger.messenger import Messenger
from graph_messenger.models import ClientConfig
from graph_messenger.webhook.events import EventRegistry, WebhookEventKind

_ENV_VARS = ("TOKEN", "VERIFY_TOKEN", "WEBHOOK_SECRET", "WEBHOOK_REQ_NAMESPACE")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell credentials out of the tests."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(token="test-token", verify_token="test-verify")


@pytest.fixture
def messenger(config: ClientConfig) -> Messenger:
    return Messenger(config)


# --- Factory functions for test data ---


def make_webhook_body(
    sender_id: str = "U1",
    mid: str = "M1",
    text: str | None = "hi",
    timestamp: str | int = "1609459200000",
) -> dict[str, Any]:
    """Factory for a single-message webhook delivery body."""
    message: dict[str, Any] = {"mid": mid, "timestamp": timestamp}
    if text is not None:
        message["text"] = text
    return {
        "object": "page",
        "entry": [
            {
                "id": "PAGE_ID",
                "time": 1609459200000,
                "messaging": [
                    {
                        "sender": {"id": sender_id},
                        "recipient": {"id": "PAGE_ID"},
                        "message": message,
                    }
                ],
            }
        ],
    }


def make_mock_response(
    status_code: int = 200, body: Any = None, headers: Any = None,
) -> MagicMock:
    """Factory for an httpx-like response returned by a mocked AsyncClient."""
    response = MagicMock(status_code=status_code)
    response.headers = {"content-type": "application/json"} if headers is None else headers
    response.json.return_value = {} if body is None else body
    return response


def mock_async_client(mock_client_cls: MagicMock, response: Any = None) -> AsyncMock:
    """Wire a patched httpx.AsyncClient class to return ``response``."""
    mock_client = AsyncMock()
    mock_client.request.return_value = response
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_client_cls.return_value = mock_client
    return mock_client


class Recorder:
    """Subscribes to every notification kind and records calls in order."""

    def __init__(self, registry: EventRegistry) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        for kind in WebhookEventKind:
            registry.on(kind, self._make_callback(kind))

    def _make_callback(self, kind: WebhookEventKind):
        def callback(*args: Any) -> None:
            self.calls.append((kind.value, args))
        return callback

    @property
    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.calls]
