"""remote-authz testing utilities: fake authorization server, request factories, fixtures.

Provides test helpers for code guarded by the middleware:

- **FakeAuthorizationServer**: recording ``httpx.MockTransport`` that
  grants, denies, or fails.
- **Factories**: ``make_request``, ``make_middleware``.
- **Fixtures**: ``authz_server``, ``authz_middleware``,
  ``isolated_authz_config``.

Example::

    from remote_authz.testing import FakeAuthorizationServer, make_middleware, make_request

    def test_denied():
        server = FakeAuthorizationServer(status_code=403, body={})
        response = ResponseWriter()
        make_middleware(server).authorize(make_request(), response, lambda: None)
        assert response.status_code == 403
"""

from remote_authz.testing._fixtures import (
    authz_middleware,
    authz_server,
    isolated_authz_config,
)
from remote_authz.testing._isolation import isolated_config
from remote_authz.testing._requests import make_middleware, make_request
from remote_authz.testing._server import FakeAuthorizationServer

__all__ = [
    "FakeAuthorizationServer",
    "authz_middleware",
    "authz_server",
    "isolated_authz_config",
    "isolated_config",
    "make_middleware",
    "make_request",
]
