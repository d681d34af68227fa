"""Messenger client facade."""

from __future__ import annotations

from typing import Any

import httpx

from graph_messenger.client.http import GraphClient
from graph_messenger.errors import ConfigError
from graph_messenger.models import ClientConfig, Message, MessageSend, Person
from graph_messenger.resources.messages import send_message
from graph_messenger.resources.people import get_person
from graph_messenger.webhook.dispatcher import ResponseSink, WebhookDispatcher
from graph_messenger.webhook.events import EventRegistry, Subscriber, WebhookEventKind
from graph_messenger.webhook.signature import authenticate


class Messenger:
    """Send messages, look up people and dispatch webhook deliveries.

    Example::

        messenger = Messenger(token="<page token>", verify_token="<verify token>")

        @messenger.on("messages")
        async def on_message(action, message, request):
            person = await messenger.get_person(message.person_id)
            print(f"{person.display_name} said {message.text}")
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        **options: Any,
    ) -> None:
        self._config = config if config is not None else ClientConfig.from_env(**options)
        self._client = GraphClient(self._config, transport=transport)
        self._registry = EventRegistry()
        self._dispatcher = WebhookDispatcher(self._config, self._registry)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def registry(self) -> EventRegistry:
        return self._registry

    def set_token(self, token: str) -> str:
        """Rotate the access token. In-flight requests keep the old config."""
        if not isinstance(token, str) or not token:
            raise ConfigError("invalid or missing token")
        config = self._config.with_token(token)
        self._config = config
        self._client.config = config
        self._dispatcher.config = config
        return token

    # --- Resource operations ---

    async def send_message(self, message: MessageSend) -> Message:
        return await send_message(self._client, message)

    async def get_person(self, person_id: str) -> Person:
        return await get_person(self._client, person_id)

    # --- Webhooks ---

    @staticmethod
    def webhook_auth(secret: str, signature: str, payload: Any) -> Any:
        return authenticate(secret, signature, payload)

    def on(self, kind: WebhookEventKind | str, callback: Subscriber | None = None) -> Any:
        """Register a subscriber; usable directly or as a decorator."""
        if callback is None:
            def decorator(func: Subscriber) -> Subscriber:
                return self._registry.on(kind, func)
            return decorator
        return self._registry.on(kind, callback)

    def off(self, kind: WebhookEventKind | str, callback: Subscriber) -> None:
        self._registry.off(kind, callback)

    async def handle_webhook(self, request: Any, respond: ResponseSink | None = None) -> None:
        await self._dispatcher.handle(request, respond)
