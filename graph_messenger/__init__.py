"""Messenger Graph API client.

This package provides:
- Outbound message sending and profile lookup
- Webhook verification handshake and delivery dispatch
- X-Hub-Signature (HMAC-SHA1) authentication
- A FastAPI router and a click CLI
"""

from graph_messenger.client.http import GraphClient
from graph_messenger.errors import (
    ApiError,
    AuthError,
    ConfigError,
    GraphMessengerError,
    InvalidResponseError,
    RequestError,
    TransportError,
)
from graph_messenger.messenger import Messenger
from graph_messenger.models import (
    ClientConfig,
    Message,
    MessageSend,
    Person,
    RequestDescriptor,
)
from graph_messenger.webhook.dispatcher import WebhookDispatcher
from graph_messenger.webhook.events import EventRegistry, WebhookEventKind
from graph_messenger.webhook.models import InboundRequest, WebhookEnvelope, WebhookResponse
from graph_messenger.webhook.signature import authenticate, sign

__all__ = [
    # Exceptions
    "ApiError",
    "AuthError",
    "ConfigError",
    "GraphMessengerError",
    "InvalidResponseError",
    "RequestError",
    "TransportError",
    # Components
    "EventRegistry",
    "GraphClient",
    "Messenger",
    "WebhookDispatcher",
    # Functions
    "authenticate",
    "sign",
    # Models
    "ClientConfig",
    "InboundRequest",
    "Message",
    "MessageSend",
    "Person",
    "RequestDescriptor",
    "WebhookEnvelope",
    "WebhookEventKind",
    "WebhookResponse",
]
