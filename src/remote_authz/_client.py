"""HTTP client for the remote authorization service."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from typing import Any

import httpx

from remote_authz.exceptions import AuthorizationBodyError, TransportFailure

__all__ = ["AuthorizationClient", "AuthorizationReply"]

logger = logging.getLogger("remote_authz.client")


@dataclass(frozen=True, slots=True)
class AuthorizationReply:
    """Status and decoded body returned by the authorization service.

    Attributes:
        status_code: HTTP status of the reply.
        body: Decoded JSON, raw text when the reply is not JSON, or
            ``None`` when the reply is empty.
    """

    status_code: int
    body: Any = None

    @property
    def authorized(self) -> bool:
        return self.status_code == 200


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _encode(body: Any) -> tuple[bytes | None, dict[str, str] | None]:
    """Encode *body* as JSON content, turning values JSON lacks into strings."""
    if body is None:
        return None, None
    try:
        content = json.dumps(body, default=str, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise AuthorizationBodyError(f"Authorization body could not be encoded: {exc}") from exc
    return content.encode("utf-8"), {"Content-Type": "application/json"}


class AuthorizationClient:
    """Sends authorization bodies to the remote service.

    One sync ``httpx.Client`` and one ``httpx.AsyncClient`` are created
    lazily, at most once each even under concurrent first use, and reused
    across requests. Transport errors of any kind (connection, DNS,
    timeout) surface as
    :class:`~remote_authz.exceptions.TransportFailure`. There are no
    retries.

    Args:
        transport: Optional sync transport, e.g. ``httpx.MockTransport``
            in tests.
        async_transport: Optional async transport.
        timeout: Passed to the ``httpx`` clients. Defaults to the
            ``httpx`` default.

    Example::

        with AuthorizationClient() as client:
            reply = client.send_request(body, "POST", config.endpoint_url)
            if reply.authorized:
                ...
    """

    def __init__(
        self,
        *,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
        timeout: httpx.Timeout | float | None = None,
    ) -> None:
        self._transport = transport
        self._async_transport = async_transport
        self._options: dict[str, Any] = {} if timeout is None else {"timeout": timeout}
        self._client: httpx.Client | None = None
        self._async_client: httpx.AsyncClient | None = None
        self._lock = threading.Lock()

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = httpx.Client(transport=self._transport, **self._options)
        return self._client

    @property
    def async_client(self) -> httpx.AsyncClient:
        if self._async_client is None:
            with self._lock:
                if self._async_client is None:
                    self._async_client = httpx.AsyncClient(
                        transport=self._async_transport, **self._options
                    )
        return self._async_client

    def send_request(self, body: Any, method: str, endpoint: str) -> AuthorizationReply:
        """Send *body* as JSON to *endpoint* and return the reply.

        The JSON payload is attached only when *body* is not ``None``.
        Values JSON has no form for, such as ``uuid.UUID``, are sent as
        strings.

        Raises:
            AuthorizationBodyError: *body* cannot be encoded as JSON.
            TransportFailure: The service could not be reached.
        """
        content, headers = _encode(body)
        logger.debug("%s %s", method, endpoint)
        try:
            response = self.client.request(method, endpoint, content=content, headers=headers)
        except httpx.HTTPError as exc:
            raise TransportFailure(endpoint=endpoint) from exc
        return AuthorizationReply(status_code=response.status_code, body=_decode(response))

    async def send_request_async(
        self, body: Any, method: str, endpoint: str
    ) -> AuthorizationReply:
        """Async counterpart of :meth:`send_request`."""
        content, headers = _encode(body)
        logger.debug("%s %s", method, endpoint)
        try:
            response = await self.async_client.request(
                method, endpoint, content=content, headers=headers
            )
        except httpx.HTTPError as exc:
            raise TransportFailure(endpoint=endpoint) from exc
        return AuthorizationReply(status_code=response.status_code, body=_decode(response))

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    async def aclose(self) -> None:
        if self._async_client is not None:
            await self._async_client.aclose()
            self._async_client = None

    def __enter__(self) -> AuthorizationClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> AuthorizationClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
