"""Helpers shared by the framework integrations."""

from __future__ import annotations

from typing import Any

from remote_authz._http import ResponseWriter
from remote_authz.errors import AUT

__all__ = ["XHR_HEADER", "rejection"]

XHR_HEADER = "X-Requested-With"


def rejection(writer: ResponseWriter) -> tuple[int, Any]:
    """Return the status and payload to send for a request that was not let through.

    A custom ``get_token`` may return a falsy token without writing
    anything; such requests are still rejected, with 401.
    """
    if writer.written:
        return writer.status_code, writer.payload
    return 401, AUT["AUTHENTICATION_NOT_SET"].to_dict()
