"""Tests for the optional authorization server reachability probe."""

from __future__ import annotations

import logging

import httpx
import pytest

from remote_authz._health import check_authorization_server
from remote_authz.config._config import AuthzConfig


class TestCheckAuthorizationServer:
    def test_reachable(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(404)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        config = AuthzConfig(host="authz", port=8080)

        assert check_authorization_server(config, client=client) is True
        assert str(seen[0].url) == "http://authz:8080/"

    def test_unreachable(self, caplog: pytest.LogCaptureFixture) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))

        with caplog.at_level(logging.WARNING, logger="remote_authz.health"):
            reachable = check_authorization_server(AuthzConfig(host="authz"), client=client)

        assert reachable is False
        assert "may not be up at authz" in caplog.text

    def test_uses_combined_endpoint(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        config = AuthzConfig(auth_endpoint="https://authz.example/v1/check?x=1")

        check_authorization_server(config, client=client)
        assert str(seen[0].url) == "https://authz.example/"

    def test_caller_client_not_closed(self) -> None:
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        check_authorization_server(AuthzConfig(), client=client)
        assert not client.is_closed
