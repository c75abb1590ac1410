"""Shared protocols and type aliases for remote-authz."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol, Union, runtime_checkable

__all__ = [
    "AccessObjectGetter",
    "Continuation",
    "RequestLike",
    "ResponseLike",
    "TokenGetter",
]


@runtime_checkable
class RequestLike(Protocol):
    """Structural type for the inbound request handed over by the host framework.

    Only read access is required. ``headers`` must support ``get(name)``;
    lookups are expected to be case-insensitive, as they are in Flask and
    Starlette.

    Example::

        request = RequestView(
            headers={"Authorization": "Bearer abc123"},
            query={"_id": "r1"},
        )
        assert isinstance(request, RequestLike)
    """

    @property
    def headers(self) -> Mapping[str, str]: ...

    @property
    def query(self) -> Mapping[str, Any]: ...

    @property
    def params(self) -> Mapping[str, Any]: ...

    @property
    def method(self) -> str: ...

    @property
    def path(self) -> str: ...

    @property
    def url(self) -> str: ...

    @property
    def ip(self) -> str | None: ...

    @property
    def secure(self) -> bool: ...

    @property
    def xhr(self) -> bool: ...

    @property
    def body(self) -> Any: ...


@runtime_checkable
class ResponseLike(Protocol):
    """Structural type for the outgoing response.

    The middleware only ever sets a status code and writes a JSON payload.
    """

    def status(self, code: int) -> Any: ...

    def json(self, payload: Any) -> Any: ...


# Derives the resource identifier forwarded as ``objectId``.
AccessObjectGetter = Callable[[Any], Any]

# Pulls the token out of a request; may write a 401 onto the response.
TokenGetter = Callable[[Any, Any], Any]

# Invoked with no arguments once a request is authorized.
Continuation = Callable[[], Union[Any, Awaitable[Any]]]
