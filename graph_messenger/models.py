"""Shared Pydantic data models for graph-messenger."""

from __future__ import annotations

import os
from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_API_URL = "https://graph.facebook.com/v2.6/"

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Environment variables override constructor options.
_ENV_OVERRIDES = {
    "token": "TOKEN",
    "verify_token": "VERIFY_TOKEN",
    "webhook_secret": "WEBHOOK_SECRET",
    "webhook_req_namespace": "WEBHOOK_REQ_NAMESPACE",
}


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def epoch_ms_to_iso(value: int | str | None) -> str:
    """Render an epoch-milliseconds timestamp as ISO 8601 (UTC).

    ``None`` renders the current time.
    """
    if value is None:
        return _now_iso()
    return (_EPOCH + timedelta(milliseconds=int(value))).isoformat()


# --- Configuration ---


class ClientConfig(BaseModel):
    """Credentials and webhook settings for a Messenger client.

    Frozen: token rotation goes through ``with_token`` which returns a new
    config object.
    """

    model_config = ConfigDict(frozen=True)

    token: str | None = None
    verify_token: str | None = None
    webhook_secret: str | None = None
    webhook_req_namespace: str = "body"
    api_url: str = DEFAULT_API_URL

    @classmethod
    def from_env(cls, **options: Any) -> ClientConfig:
        """Build a config from options, letting environment variables win."""
        values = dict(options)
        for field_name, env_var in _ENV_OVERRIDES.items():
            env_value = os.environ.get(env_var)
            if env_value:
                values[field_name] = env_value
        return cls(**values)

    def with_token(self, token: str) -> ClientConfig:
        return self.model_copy(update={"token": token})

    @property
    def has_credentials(self) -> bool:
        return bool(self.token) and bool(self.verify_token)


# --- Resource Models ---


class MessageSend(BaseModel):
    """Outbound text message addressed to a person."""

    person_id: str
    text: str


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    person_id: str
    created: str  # ISO8601


class Person(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    first_name: str
    last_name: str
    avatar: str | None = None


class RequestDescriptor(BaseModel):
    """One outbound Graph API call: method, target path, id and payload."""

    model_config = ConfigDict(frozen=True)

    method: str
    resource: str | None = None
    id: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
