"""User Profile API: person lookup by page-scoped id."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graph_messenger.errors import InvalidResponseError, RequestError
from graph_messenger.models import Person, RequestDescriptor

if TYPE_CHECKING:
    from graph_messenger.client.http import GraphClient

PROFILE_FIELDS = "first_name,last_name,profile_pic,locale,timezone,gender"


def build_person_request(person_id: str) -> RequestDescriptor:
    return RequestDescriptor(
        method="get",
        id=person_id,
        data={"fields": PROFILE_FIELDS},
    )


async def get_person(client: GraphClient, person_id: str) -> Person:
    """Fetch a profile. Not cached; every call hits the API."""
    if not isinstance(person_id, str) or not person_id:
        raise RequestError("person_id must be a non-empty string")

    res = await client.call(build_person_request(person_id))
    first_name = res.get("first_name")
    last_name = res.get("last_name")
    if not isinstance(first_name, str) or not isinstance(last_name, str):
        raise InvalidResponseError("profile response is missing first_name/last_name")
    return Person(
        id=person_id,
        display_name=f"{first_name} {last_name}",
        first_name=first_name,
        last_name=last_name,
        avatar=res.get("profile_pic"),
    )
