"""Graph API request formatter.

Builds the outbound HTTP call for a RequestDescriptor, injects the access
token, and normalizes the response into a JSON object or a typed error.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from graph_messenger.errors import (
    ApiError,
    ConfigError,
    InvalidResponseError,
    RequestError,
    TransportError,
)
from graph_messenger.models import ClientConfig, RequestDescriptor

logger = logging.getLogger(__name__)

_BODY_METHODS = frozenset({"post", "put"})
_QUERY_METHODS = frozenset({"get", "delete"})
_HEADERS = {"Content-Type": "application/json"}
_DEFAULT_TIMEOUT_SECONDS = 30.0


class GraphClient:
    """Sends RequestDescriptors to the Graph API."""

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = _DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.config = config
        self._transport = transport
        self._timeout = timeout

    def build_url(self, descriptor: RequestDescriptor) -> str:
        url = self.config.api_url
        if descriptor.resource:
            url += f"{descriptor.resource}/"
        if descriptor.id:
            url += descriptor.id
        return url

    async def call(self, descriptor: RequestDescriptor) -> dict[str, Any]:
        """Send one call and return the decoded JSON object body.

        Raises ConfigError before any network access when credentials are
        missing.
        """
        config = self.config
        if not isinstance(config.token, str) or not config.token:
            raise ConfigError("token not defined")
        if not isinstance(config.verify_token, str) or not config.verify_token:
            raise ConfigError("verify_token not defined")

        method = descriptor.method.lower()
        body: dict[str, Any] | None = None
        if method in _BODY_METHODS:
            params: dict[str, Any] = {}
            body = descriptor.data
        elif method in _QUERY_METHODS:
            params = dict(descriptor.data)
        else:
            raise RequestError(f"unsupported method: {descriptor.method!r}")
        params["access_token"] = config.token

        url = self.build_url(descriptor)
        logger.debug("Graph API %s %s", method.upper(), url)
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._timeout,
            ) as client:
                response = await client.request(
                    method.upper(), url, params=params, json=body, headers=_HEADERS,
                )
        except httpx.HTTPError as exc:
            raise TransportError(f"{method.upper()} {url} failed: {exc}") from exc

        return self._process_response(response, method, url)

    @staticmethod
    def _process_response(
        response: httpx.Response | None, method: str, url: str,
    ) -> dict[str, Any]:
        if response is None:
            raise InvalidResponseError("response not received")
        if getattr(response, "headers", None) is None:
            raise InvalidResponseError("invalid response headers")

        status = response.status_code if isinstance(response.status_code, int) else 500
        if status != 200:
            error = ApiError(status, method, url)
            logger.warning("%s", error)
            raise error

        try:
            body = response.json()
        except ValueError as exc:
            raise InvalidResponseError("invalid response body") from exc
        if not isinstance(body, dict):
            raise InvalidResponseError("invalid response body")
        return body
