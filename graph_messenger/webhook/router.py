"""FastAPI adapter mounting the webhook dispatcher on a route."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from starlette.background import BackgroundTask

from graph_messenger.webhook.dispatcher import ACK_BODY
from graph_messenger.webhook.models import InboundRequest, WebhookResponse

if TYPE_CHECKING:
    from graph_messenger.messenger import Messenger


def _to_inbound(request: Request, namespace: str, body: Any) -> InboundRequest:
    inbound = InboundRequest(
        method=request.method,
        url=str(request.url),
        headers=dict(request.headers),
    )
    setattr(inbound, namespace, body)
    return inbound


def create_webhook_router(messenger: Messenger, path: str = "/webhook") -> APIRouter:
    """Create a router serving the verification handshake and deliveries."""
    router = APIRouter(tags=["webhook"])

    @router.get(path)
    async def verify_webhook(request: Request) -> PlainTextResponse:
        inbound = _to_inbound(request, messenger.config.webhook_req_namespace, "")
        sink = WebhookResponse()
        await messenger.handle_webhook(inbound, sink)
        if not sink.sent:
            return PlainTextResponse(ACK_BODY, status_code=200)
        return PlainTextResponse(sink.text or "", status_code=sink.status_code or 200)

    @router.post(path)
    async def receive_webhook(request: Request) -> PlainTextResponse:
        # Raw bytes keep the signature check exact; processing runs after the ack.
        body = await request.body()
        inbound = _to_inbound(request, messenger.config.webhook_req_namespace, body)
        return PlainTextResponse(
            ACK_BODY,
            status_code=200,
            background=BackgroundTask(messenger.handle_webhook, inbound),
        )

    return router
