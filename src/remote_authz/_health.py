"""Optional reachability probe for the authorization server.

Meant to be called by the hosting process at startup. The middleware
never calls it.
"""

from __future__ import annotations

import logging

import httpx

from remote_authz.config._config import AuthzConfig

__all__ = ["check_authorization_server"]

logger = logging.getLogger("remote_authz.health")


def check_authorization_server(
    config: AuthzConfig,
    *,
    client: httpx.Client | None = None,
) -> bool:
    """Return whether the authorization server answers HTTP at all.

    Any HTTP response, whatever its status, counts as reachable. Only
    transport errors count as unreachable.

    Args:
        config: Configuration naming the server.
        client: Optional ``httpx.Client``; a short-lived one is used
            otherwise.

    Example::

        app = create_app()
        check_authorization_server(middleware.config)
    """
    endpoint = httpx.URL(config.endpoint_url)
    base_url = httpx.URL(
        scheme=endpoint.scheme, host=endpoint.host, port=endpoint.port, path="/"
    )
    owned = client is None
    http = client if client is not None else httpx.Client()
    try:
        response = http.get(base_url)
    except httpx.HTTPError as exc:
        logger.warning(
            "Your authorization server may not be up at %s: %s", base_url.host, exc
        )
        return False
    finally:
        if owned:
            http.close()
    logger.debug("Authorization server at %s answered %d", base_url, response.status_code)
    return True
