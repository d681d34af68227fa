"""Send API: outbound text messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graph_messenger.errors import InvalidResponseError
from graph_messenger.models import Message, MessageSend, RequestDescriptor, _now_iso

if TYPE_CHECKING:
    from graph_messenger.client.http import GraphClient

MESSAGES_RESOURCE = "me/messages"


def build_send_request(message: MessageSend) -> RequestDescriptor:
    return RequestDescriptor(
        method="post",
        resource=MESSAGES_RESOURCE,
        data={
            "recipient": {"id": message.person_id},
            "message": {"text": message.text},
        },
    )


async def send_message(client: GraphClient, message: MessageSend) -> Message:
    """Send a text message to a person and return the created Message."""
    res = await client.call(build_send_request(message))
    message_id = res.get("message_id")
    if not message_id:
        raise InvalidResponseError("response is missing message_id")
    return Message(
        id=str(message_id),
        text=message.text,
        person_id=message.person_id,
        created=_now_iso(),
    )
