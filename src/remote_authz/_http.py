"""Framework-neutral request snapshot and response recorder."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

__all__ = ["RequestView", "ResponseWriter"]


@dataclass(frozen=True, slots=True)
class RequestView:
    """Read-only snapshot of an inbound request.

    Framework integrations build one of these from their native request
    object; tests build them directly. ``headers`` is normalized to a
    case-insensitive ``httpx.Headers``; an ``httpx.Headers`` is kept as
    given.

    Example::

        view = RequestView(
            headers={"Authorization": "Bearer abc123"},
            query={"_id": "r1"},
            method="GET",
            path="/documents",
        )
        view.headers.get("authorization")  # "Bearer abc123"
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    params: Mapping[str, Any] = field(default_factory=dict)
    method: str = "GET"
    path: str = "/"
    url: str = ""
    ip: str | None = None
    secure: bool = False
    xhr: bool = False
    body: Any = None

    def __post_init__(self) -> None:
        # Use object.__setattr__ because the dataclass is frozen
        if not isinstance(self.headers, httpx.Headers):
            object.__setattr__(self, "headers", httpx.Headers(dict(self.headers)))
        object.__setattr__(self, "query", dict(self.query))
        object.__setattr__(self, "params", dict(self.params))
        if not self.url:
            object.__setattr__(self, "url", self.path)

    def get(self, header: str) -> str | None:
        """Return the value of *header*, or ``None`` when absent."""
        return self.headers.get(header)


class ResponseWriter:
    """Records the status code and JSON payload written by the middleware.

    Integrations hand one of these to the middleware and turn it into a
    native response afterwards when :attr:`written` is set.

    Example::

        writer = ResponseWriter()
        middleware.authorize(view, writer, continuation)
        if writer.written:
            return jsonify(writer.payload), writer.status_code
    """

    __slots__ = ("status_code", "payload", "written")

    def __init__(self) -> None:
        self.status_code: int = 200
        self.payload: Any = None
        self.written: bool = False

    def status(self, code: int) -> ResponseWriter:
        self.status_code = code
        return self

    def json(self, payload: Any) -> ResponseWriter:
        self.payload = payload
        self.written = True
        return self

    def __repr__(self) -> str:
        return (
            f"ResponseWriter(status_code={self.status_code!r}, "
            f"written={self.written!r}, payload={self.payload!r})"
        )
