"""X-Hub-Signature authentication for webhook deliveries.

The Graph API signs each delivery with HMAC-SHA1 over the raw body, keyed
with the app secret, and sends it as ``x-hub-signature: sha1=<hex>``.
"""

from __future__ import annotations

import hashlib
import hmac
import json
from typing import Any

from graph_messenger.errors import AuthError

SIGNATURE_HEADER = "x-hub-signature"
_PREFIX = "sha1="


def canonical_payload(payload: Any) -> str:
    """Serialize a payload the way the upstream sender does (compact JSON)."""
    if isinstance(payload, str):
        return payload
    if isinstance(payload, (dict, list)):
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    raise AuthError(f"invalid payload type: {type(payload).__name__}")


def sign(secret: str, payload: Any) -> str:
    """Compute the ``sha1=<hex>`` header value for a payload."""
    digest = hmac.new(
        secret.encode("utf-8"),
        canonical_payload(payload).encode("utf-8"),
        hashlib.sha1,
    ).hexdigest()
    return f"{_PREFIX}{digest}"


def authenticate(secret: str | None, signature: str | None, payload: Any) -> Any:
    """Verify a payload against its signature header value.

    Returns the payload unchanged on success; raises AuthError otherwise.
    """
    if not isinstance(secret, str) or not secret:
        raise AuthError("missing or invalid webhook secret")
    if not isinstance(signature, str) or not signature:
        raise AuthError("missing or invalid signature")

    expected = sign(secret, payload)
    if not hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8")):
        raise AuthError("received an invalid payload")
    return payload
