"""Exception handlers for FastAPI integration."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from remote_authz.exceptions import RequestRejected

__all__ = ["install_error_handlers"]


def install_error_handlers(app: FastAPI) -> None:
    """Install the handler turning rejected requests into JSON responses.

    ``RequestRejected`` -> its own status code and payload.

    Args:
        app: The FastAPI application instance.

    Example::

        from fastapi import FastAPI
        from remote_authz.integrations.fastapi import install_error_handlers

        app = FastAPI()
        install_error_handlers(app)
    """

    @app.exception_handler(RequestRejected)
    async def request_rejected_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: RequestRejected
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload,
        )
