"""FastAPI dependency that authorizes requests against a remote service."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from fastapi import Depends, Request

from remote_authz._http import RequestView, ResponseWriter
from remote_authz._middleware import AuthorizationMiddleware
from remote_authz.exceptions import RequestRejected
from remote_authz.integrations._common import XHR_HEADER, rejection

__all__ = ["AuthzDep", "request_view"]


async def request_view(request: Request) -> RequestView:
    """Snapshot a Starlette request into a ``RequestView``.

    Path parameters are only populated once routing has happened, so this
    is meant to run inside a dependency, not in an ASGI middleware.
    """
    raw = await request.body()
    try:
        body = json.loads(raw) if raw else None
    except ValueError:
        body = None

    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"

    return RequestView(
        headers=dict(request.headers),
        query=dict(request.query_params),
        params=dict(request.path_params),
        method=request.method,
        path=request.url.path,
        url=url,
        ip=request.client.host if request.client else None,
        secure=request.url.scheme == "https",
        xhr=request.headers.get(XHR_HEADER) == "XMLHttpRequest",
        body=body,
    )


def _make_dependency(middleware: AuthorizationMiddleware) -> Callable[..., Any]:
    """Build the async dependency function for *middleware*."""

    async def _resolve(request: Request) -> None:
        writer = ResponseWriter()
        allowed: list[bool] = []
        await middleware.authorize_async(
            await request_view(request), writer, lambda: allowed.append(True)
        )
        if allowed:
            return

        status_code, payload = rejection(writer)
        raise RequestRejected(status_code=status_code, payload=payload)

    return _resolve


def AuthzDep(middleware: AuthorizationMiddleware) -> Any:  # noqa: N802
    """FastAPI dependency that lets only authorized requests through.

    Rejected requests raise :class:`~remote_authz.exceptions.RequestRejected`;
    call :func:`install_error_handlers` so it is turned into the JSON
    response written by the middleware.

    Use as a default parameter value, or in ``dependencies=[...]`` on a
    route or router.

    Args:
        middleware: The configured ``AuthorizationMiddleware``.

    Returns:
        A FastAPI ``Depends`` instance.

    Example::

        authz = AuthzDep(AuthorizationMiddleware(port=8080))

        @app.get("/documents/{_id}", dependencies=[authz])
        async def get_document(_id: str) -> dict:
            return {"_id": _id}
    """
    return Depends(_make_dependency(middleware))
