"""Webhook dispatcher: verification handshake, delivery auth, event fan-out.

Per inbound request:
1. Precondition check (request shape + configured tokens)
2. GET with a response sink: verification handshake
3. POST: acknowledge first, then parse, authenticate and process
4. Anything else: acknowledge and drop

Deliveries are always acknowledged with 200 before any processing starts so
the upstream sender never retries because of local failures. Errors on this
path are logged, never raised.
"""

from __future__ import annotations

import hmac
import inspect
import json
import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from graph_messenger.errors import AuthError
from graph_messenger.models import ClientConfig, Message, epoch_ms_to_iso
from graph_messenger.webhook.events import EventRegistry, WebhookEventKind
from graph_messenger.webhook.models import MessagingEvent, WebhookEntry, WebhookEnvelope
from graph_messenger.webhook.signature import SIGNATURE_HEADER, authenticate

logger = logging.getLogger(__name__)

ResponseSink = Callable[[int, str], Any]

ACK_BODY = "OK"
INVALID_TOKEN_BODY = "invalid validation token"


class WebhookDispatcher:
    """Turns inbound webhook requests into registry notifications."""

    def __init__(self, config: ClientConfig, registry: EventRegistry) -> None:
        self.config = config
        self._registry = registry

    async def handle(self, request: Any, respond: ResponseSink | None = None) -> None:
        try:
            await self._handle(request, respond)
        except Exception:
            logger.exception("Unexpected error while handling webhook request")

    async def _handle(self, request: Any, respond: ResponseSink | None) -> None:
        config = self.config

        if not self._is_valid_request(request, config):
            await _send(respond, 200, ACK_BODY)
            logger.warning("Received invalid webhook request")
            return

        method = str(request.method).upper()

        if method == "GET" and respond is not None:
            await self._verify(request, respond, config)
            return

        if method == "POST":
            await _send(respond, 200, ACK_BODY)
            await self._deliver(request, config)
            return

        await _send(respond, 200, ACK_BODY)
        logger.warning("Received invalid webhook request: method %s", method)

    @staticmethod
    def _is_valid_request(request: Any, config: ClientConfig) -> bool:
        return (
            request is not None
            and hasattr(request, "method")
            and hasattr(request, "headers")
            and hasattr(request, config.webhook_req_namespace)
            and config.has_credentials
        )

    async def _verify(
        self, request: Any, respond: ResponseSink, config: ClientConfig,
    ) -> None:
        params = httpx.URL(str(getattr(request, "url", ""))).params
        token = params.get("hub.verify_token", "")
        if hmac.compare_digest(token.encode(), str(config.verify_token).encode()):
            await _send(respond, 200, params.get("hub.challenge", ""))
        else:
            logger.warning("Webhook verification failed: verify token mismatch")
            await _send(respond, 200, INVALID_TOKEN_BODY)

    async def _deliver(self, request: Any, config: ClientConfig) -> None:
        raw = getattr(request, config.webhook_req_namespace)
        headers = httpx.Headers(request.headers or {})
        signature = headers.get(SIGNATURE_HEADER)
        secret = config.webhook_secret

        try:
            body, signed_payload = _parse_body(raw)
        except ValueError as exc:
            logger.warning("Could not parse webhook body: %s", exc)
            return

        if signature and secret:
            try:
                authenticate(secret, signature, signed_payload)
            except AuthError as exc:
                logger.warning("Rejected webhook delivery: %s", exc)
                return
        elif signature or secret:
            if signature:
                logger.warning('Received "%s" header but no webhook secret defined', SIGNATURE_HEADER)
            if secret:
                logger.warning('Webhook secret defined but "%s" header not found', SIGNATURE_HEADER)
            return

        await self._process(body, request)

    async def _process(self, body: Any, request: Any) -> None:
        await self._registry.emit(WebhookEventKind.REQUEST, request)

        try:
            envelope = WebhookEnvelope.model_validate(body)
        except ValidationError as exc:
            logger.warning("Malformed webhook body: %s", exc)
            return

        # A malformed entry or event only drops itself, not its siblings.
        for raw_entry in envelope.entry or []:
            try:
                entry = WebhookEntry.model_validate(raw_entry)
            except ValidationError as exc:
                logger.warning("Skipping malformed webhook entry: %s", exc)
                continue
            await self._registry.emit(WebhookEventKind.ENTRY, entry)

            for raw_event in entry.messaging or []:
                try:
                    event = MessagingEvent.model_validate(raw_event)
                except ValidationError as exc:
                    logger.warning("Skipping malformed messaging event: %s", exc)
                    continue
                await self._registry.emit(WebhookEventKind.EVENT, event)
                message = _to_message(event)
                if message is not None:
                    await self._registry.emit(
                        WebhookEventKind.MESSAGES, "created", message, request,
                    )


def _parse_body(raw: Any) -> tuple[Any, Any]:
    """Return (decoded body, payload the signature was computed over)."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        return json.loads(raw), raw
    if isinstance(raw, (dict, list)):
        return raw, raw
    return {}, {}


def _to_message(event: MessagingEvent) -> Message | None:
    msg = event.message
    if msg is None or not msg.text:
        return None
    if event.sender is None or not msg.mid:
        logger.warning("Skipping text message without sender or mid")
        return None

    timestamp = msg.timestamp if msg.timestamp is not None else event.timestamp
    try:
        created = epoch_ms_to_iso(timestamp)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.warning("Skipping message %s with invalid timestamp %r", msg.mid, timestamp)
        return None

    return Message(
        id=msg.mid,
        text=msg.text,
        person_id=event.sender.id,
        created=created,
    )


async def _send(respond: ResponseSink | None, status_code: int, text: str) -> None:
    if respond is None:
        return
    result = respond(status_code, text)
    if inspect.isawaitable(result):
        await result
