"""Pytest fixtures for testing code protected by remote-authz."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from remote_authz._middleware import AuthorizationMiddleware
from remote_authz.config._config import AuthzConfig
from remote_authz.testing._requests import make_middleware
from remote_authz.testing._server import FakeAuthorizationServer

__all__ = ["authz_middleware", "authz_server", "isolated_authz_config"]


@pytest.fixture()
def authz_server() -> FakeAuthorizationServer:
    """Provide a fresh ``FakeAuthorizationServer`` that grants every request.

    Example::

        def test_denied(authz_server, authz_middleware):
            authz_server.respond(403, {})
            ...
    """
    return FakeAuthorizationServer()


@pytest.fixture()
def authz_middleware(
    authz_server: FakeAuthorizationServer,
) -> Generator[AuthorizationMiddleware, None, None]:
    """Provide an ``AuthorizationMiddleware`` wired to ``authz_server``."""
    middleware = make_middleware(authz_server)
    yield middleware
    middleware.close()


@pytest.fixture()
def isolated_authz_config() -> Generator[AuthzConfig, None, None]:
    """Isolate the global configuration for the duration of a test.

    Example::

        def test_something(isolated_authz_config):
            configure(port=8080)  # reverted after the test
    """
    from remote_authz.testing._isolation import isolated_config

    with isolated_config() as cfg:
        yield cfg
