"""Async integration tests: the pipeline over httpx.AsyncClient."""

from __future__ import annotations

import asyncio
import json

import pytest

from remote_authz._http import ResponseWriter
from remote_authz.testing import FakeAuthorizationServer, make_middleware, make_request


@pytest.fixture()
def server() -> FakeAuthorizationServer:
    return FakeAuthorizationServer()


class TestAuthorizeAsync:
    @pytest.mark.asyncio
    async def test_sync_continuation(self, server: FakeAuthorizationServer) -> None:
        calls: list[str] = []
        writer = ResponseWriter()
        middleware = make_middleware(server)

        await middleware.authorize_async(
            make_request("abc123", query={"_id": "r1"}), writer, lambda: calls.append("next")
        )

        assert calls == ["next"]
        assert not writer.written
        assert server.last_json["objectId"] == "r1"
        await middleware.aclose()

    @pytest.mark.asyncio
    async def test_coroutine_continuation(self, server: FakeAuthorizationServer) -> None:
        calls: list[str] = []

        async def proceed() -> None:
            await asyncio.sleep(0)
            calls.append("next")

        middleware = make_middleware(server)
        await middleware.authorize_async(make_request(), ResponseWriter(), proceed)

        assert calls == ["next"]

    @pytest.mark.asyncio
    async def test_denied(self, server: FakeAuthorizationServer) -> None:
        server.respond(403, {})
        writer = ResponseWriter()
        calls: list[str] = []

        await make_middleware(server).authorize_async(
            make_request(), writer, lambda: calls.append("next")
        )

        assert calls == []
        assert writer.status_code == 403
        assert writer.payload == {"detail": "Access Denied"}

    @pytest.mark.asyncio
    async def test_missing_token(self, server: FakeAuthorizationServer) -> None:
        writer = ResponseWriter()
        await make_middleware(server).authorize_async(make_request(None), writer, lambda: None)

        assert writer.status_code == 401
        assert server.call_count == 0

    @pytest.mark.asyncio
    async def test_transport_failure(self, server: FakeAuthorizationServer) -> None:
        server.fail()
        writer = ResponseWriter()
        calls: list[str] = []

        await make_middleware(server).authorize_async(
            make_request(), writer, lambda: calls.append("next")
        )

        assert calls == []
        assert writer.status_code == 502

    @pytest.mark.asyncio
    async def test_unencodable_body(self, server: FakeAuthorizationServer) -> None:
        writer = ResponseWriter()
        calls: list[str] = []

        await make_middleware(server).authorize_async(
            make_request(body={(1, 2): "tuple key"}), writer, lambda: calls.append("next")
        )

        assert calls == []
        assert server.call_count == 0
        assert writer.status_code == 500
        assert writer.payload["errorCode"] == "AUT_005"

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_middleware(
        self, server: FakeAuthorizationServer
    ) -> None:
        middleware = make_middleware(server)
        writers = [ResponseWriter() for _ in range(10)]
        calls: list[int] = []

        await asyncio.gather(
            *(
                middleware.authorize_async(
                    make_request(f"token-{i}", query={"_id": str(i)}),
                    writers[i],
                    lambda i=i: calls.append(i),
                )
                for i in range(10)
            )
        )

        assert sorted(calls) == list(range(10))
        tokens = sorted(
            json.loads(request.content)["token"] for request in server.requests
        )
        assert tokens == sorted(f"token-{i}" for i in range(10))
