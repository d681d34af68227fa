"""Subscriber registry for webhook notifications."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

Subscriber = Callable[..., Any]


class WebhookEventKind(str, Enum):
    REQUEST = "request"  # (request)
    ENTRY = "entry"  # (entry)
    EVENT = "event"  # (messaging_event)
    MESSAGES = "messages"  # (action, message, request)


class EventRegistry:
    """Per-kind subscriber lists.

    Subscribers may be plain callables or coroutine functions. They are
    called in registration order; a failing subscriber is logged and does not
    stop delivery to the others.
    """

    def __init__(self) -> None:
        self._subscribers: dict[WebhookEventKind, list[Subscriber]] = {
            kind: [] for kind in WebhookEventKind
        }

    def on(self, kind: WebhookEventKind | str, callback: Subscriber) -> Subscriber:
        self._subscribers[WebhookEventKind(kind)].append(callback)
        return callback

    def off(self, kind: WebhookEventKind | str, callback: Subscriber) -> None:
        subscribers = self._subscribers[WebhookEventKind(kind)]
        if callback in subscribers:
            subscribers.remove(callback)

    def subscribers(self, kind: WebhookEventKind | str) -> list[Subscriber]:
        return list(self._subscribers[WebhookEventKind(kind)])

    async def emit(self, kind: WebhookEventKind, *args: Any) -> None:
        for callback in self.subscribers(kind):
            try:
                result = callback(*args)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Subscriber %r failed on %s notification", callback, kind.value)
