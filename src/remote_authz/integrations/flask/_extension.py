"""Flask extension that runs the authorization middleware before views."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from flask import Flask, Response, current_app, jsonify, request

from remote_authz._http import RequestView, ResponseWriter
from remote_authz._middleware import AuthorizationMiddleware
from remote_authz.integrations._common import XHR_HEADER, rejection

__all__ = ["AuthzExtension", "request_view"]

_EXTENSION_KEY = "remote_authz"


def request_view() -> RequestView:
    """Snapshot the current Flask request into a ``RequestView``.

    Must be called within a request context.
    """
    return RequestView(
        headers=dict(request.headers),
        query=request.args.to_dict(),
        params=dict(request.view_args or {}),
        method=request.method,
        path=request.path,
        url=request.full_path.rstrip("?"),
        ip=request.remote_addr,
        secure=request.is_secure,
        xhr=request.headers.get(XHR_HEADER) == "XMLHttpRequest",
        body=request.get_json(silent=True),
    )


class AuthzExtension:
    """Flask extension that delegates request authorization to a remote service.

    Supports the Flask app-factory pattern via ``init_app()``. With
    ``protect_all=True`` every request goes through the middleware in a
    ``before_request`` hook; otherwise decorate the views to guard with
    :meth:`protect`.

    Args:
        app: Optional Flask application. If provided, calls ``init_app()``
            immediately.
        middleware: The configured ``AuthorizationMiddleware``.
        protect_all: Guard every request of the application.

    Example::

        from flask import Flask
        from remote_authz import AuthorizationMiddleware
        from remote_authz.integrations.flask import AuthzExtension

        app = Flask(__name__)
        authz = AuthzExtension(app, middleware=AuthorizationMiddleware(port=8080))

        @app.get("/documents/<_id>")
        @authz.protect
        def get_document(_id):
            ...
    """

    def __init__(
        self,
        app: Flask | None = None,
        *,
        middleware: AuthorizationMiddleware,
        protect_all: bool = False,
    ) -> None:
        self._middleware = middleware
        self._protect_all = protect_all

        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Initialize the extension with a Flask application.

        Stores the middleware on ``app.extensions["remote_authz"]`` and,
        when ``protect_all`` is set, registers the ``before_request`` hook.

        Args:
            app: The Flask application instance.
        """
        app.extensions[_EXTENSION_KEY] = {
            "middleware": self._middleware,
            "protect_all": self._protect_all,
        }

        if self._protect_all:
            app.before_request(self.check_request)

    def check_request(self) -> tuple[Response, int] | None:
        """Authorize the current request.

        Returns ``None`` when the request may proceed, or the JSON
        response to send instead.
        """
        ext_state: dict[str, Any] = current_app.extensions[_EXTENSION_KEY]
        middleware: AuthorizationMiddleware = ext_state["middleware"]

        writer = ResponseWriter()
        allowed: list[bool] = []
        middleware.authorize(request_view(), writer, lambda: allowed.append(True))
        if allowed:
            return None

        status_code, payload = rejection(writer)
        return jsonify(payload), status_code

    def protect(self, view: Callable[..., Any]) -> Callable[..., Any]:
        """Decorate a view so it only runs for authorized requests."""

        @functools.wraps(view)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            rejected = self.check_request()
            if rejected is not None:
                return rejected
            return view(*args, **kwargs)

        return wrapper
