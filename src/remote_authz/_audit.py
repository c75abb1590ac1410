"""Audit logging for authorization decisions."""

from __future__ import annotations

import logging
from typing import Any

from remote_authz.errors import ErrorDescriptor

__all__ = [
    "log_authentication_failure",
    "log_authorization_decision",
    "log_encoding_failure",
    "log_transport_failure",
]

logger = logging.getLogger("remote_authz")


def log_authentication_failure(descriptor: ErrorDescriptor) -> None:
    """Log a rejected bearer token under ``remote_authz.authentication``.

    The token itself is never logged.
    """
    logging.getLogger("remote_authz.authentication").warning(
        "Authentication failed: %s (%s)",
        descriptor.error_code,
        descriptor.detail,
    )


def log_authorization_decision(
    *,
    method: str,
    path: str,
    object_id: Any,
    status_code: int,
) -> None:
    """Log the outcome reported by the authorization service.

    Logging levels:
    - INFO: Granted (status 200)
    - WARNING: Denied (any other status)

    Example::

        log_authorization_decision(
            method="GET", path="/documents", object_id="r1", status_code=403
        )
    """
    if status_code == 200:
        logger.info("Authorization granted: %s %s (objectId=%r)", method, path, object_id)
        return
    logger.warning(
        "Authorization denied: %s %s (objectId=%r) with status %d",
        method,
        path,
        object_id,
        status_code,
    )


def log_transport_failure(*, endpoint: str, error: BaseException) -> None:
    """Log a failed call to the authorization service.

    Always emitted at ERROR, the request is rejected with 502.
    """
    logger.error("Authorization service unreachable at %s: %s", endpoint, error)


def log_encoding_failure(*, path: str, error: BaseException) -> None:
    """Log an authorization body that could not be encoded."""
    logger.error("Authorization body for %s could not be encoded: %s", path, error)
