"""Data models for the webhook dispatch pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict

# Upstream payloads carry many more fields than we read; keep them all.
_LENIENT = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class WebhookSender(BaseModel):
    model_config = _LENIENT

    id: str


class WebhookMessage(BaseModel):
    model_config = _LENIENT

    mid: str | None = None
    text: str | None = None
    timestamp: int | str | None = None


class MessagingEvent(BaseModel):
    """One messaging event inside a webhook entry."""

    model_config = _LENIENT

    sender: WebhookSender | None = None
    timestamp: int | str | None = None
    message: WebhookMessage | None = None


class WebhookEntry(BaseModel):
    """One entry of a delivery. Events are validated one by one."""

    model_config = _LENIENT

    messaging: list[Any] | None = None


class WebhookEnvelope(BaseModel):
    """Body of a webhook delivery: ``{"entry": [{"messaging": [...]}]}``."""

    model_config = _LENIENT

    entry: list[Any] | None = None


@dataclass
class InboundRequest:
    """Inbound HTTP request as handed over by the hosting web server."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None


@dataclass
class WebhookResponse:
    """Response sink that buffers what the dispatcher answers."""

    text: str | None = None
    status_code: int | None = None

    def __call__(self, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.text = text

    @property
    def sent(self) -> bool:
        return self.status_code is not None
