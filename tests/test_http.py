"""Tests for RequestView and ResponseWriter."""

from __future__ import annotations

import dataclasses

import pytest

from remote_authz._http import RequestView, ResponseWriter
from remote_authz._types import RequestLike, ResponseLike


class TestRequestView:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(RequestView(), RequestLike)

    def test_headers_case_insensitive(self) -> None:
        view = RequestView(headers={"Authorization": "Bearer abc"})
        assert view.headers.get("AUTHORIZATION") == "Bearer abc"
        assert view.get("authorization") == "Bearer abc"
        assert view.get("X-Missing") is None

    def test_url_defaults_to_path(self) -> None:
        assert RequestView(path="/docs").url == "/docs"
        assert RequestView(path="/docs", url="/docs?a=1").url == "/docs?a=1"

    def test_inputs_are_copied(self) -> None:
        query = {"_id": "r1"}
        view = RequestView(query=query)
        query["_id"] = "changed"
        assert view.query == {"_id": "r1"}

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            RequestView().method = "POST"  # type: ignore[misc]


class TestResponseWriter:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(ResponseWriter(), ResponseLike)

    def test_defaults(self) -> None:
        writer = ResponseWriter()
        assert writer.status_code == 200
        assert writer.payload is None
        assert not writer.written

    def test_records_status_and_payload(self) -> None:
        writer = ResponseWriter()
        writer.status(403).json({"detail": "Access Denied"})
        assert writer.status_code == 403
        assert writer.payload == {"detail": "Access Denied"}
        assert writer.written
        assert "403" in repr(writer)
