"""Hypothesis property tests for token parsing and config merging."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from remote_authz._http import RequestView, ResponseWriter
from remote_authz.config._config import AuthzConfig
from remote_authz.exceptions import AuthenticationError
from remote_authz.extractors import BearerTokenExtractor, parse_bearer
from remote_authz.extractors._access import get_access_object
from remote_authz.testing import FakeAuthorizationServer, make_middleware

# Printable header values without line breaks.
header_text = st.text(
    alphabet=st.characters(min_codepoint=0x20, max_codepoint=0x7E), max_size=40
)
token_text = st.text(
    alphabet=st.characters(min_codepoint=0x21, max_codepoint=0x7E), min_size=1, max_size=40
)


class TestTokenParsing:
    @given(token=token_text)
    def test_well_formed_tokens_round_trip(self, token: str) -> None:
        assert parse_bearer(f"Bearer {token}") == token

    @given(value=header_text)
    @settings(max_examples=200)
    def test_accepts_only_bearer_space_value(self, value: str) -> None:
        parts = value.split(" ")
        well_formed = len(parts) == 2 and parts[0] == "Bearer" and parts[1] != ""
        try:
            token = parse_bearer(value)
        except AuthenticationError:
            assert not well_formed
        else:
            assert well_formed
            assert token == parts[1]

    @given(value=header_text)
    def test_at_most_one_write(self, value: str) -> None:
        writes: list[object] = []

        class Recorder(ResponseWriter):
            __slots__ = ()

            def json(self, payload):
                writes.append(payload)
                return super().json(payload)

        recorder = Recorder()
        token = BearerTokenExtractor()(RequestView(headers={"Authorization": value}), recorder)
        if token is None:
            assert len(writes) == 1
            assert recorder.status_code == 401
        else:
            assert writes == []


class TestNoAuthorizationHeader:
    @given(
        headers=st.dictionaries(
            st.sampled_from(["Accept", "X-Request-Id", "Cookie", "X-Auth"]), header_text
        )
    )
    @settings(max_examples=30, deadline=None)
    def test_never_continues(self, headers: dict[str, str]) -> None:
        server = FakeAuthorizationServer()
        middleware = make_middleware(server)
        writer = ResponseWriter()
        calls: list[int] = []

        middleware.authorize(RequestView(headers=headers), writer, lambda: calls.append(1))

        assert calls == []
        assert writer.status_code == 401
        assert server.call_count == 0


class TestAccessObjectPrecedence:
    @given(
        query_id=st.one_of(st.none(), st.text(max_size=10)),
        param_id=st.one_of(st.none(), st.text(max_size=10)),
    )
    def test_query_then_params_then_none(
        self, query_id: str | None, param_id: str | None
    ) -> None:
        query = {} if query_id is None else {"_id": query_id}
        params = {} if param_id is None else {"_id": param_id}
        expected = query_id if query_id is not None else param_id
        assert get_access_object(RequestView(query=query, params=params)) == expected


class TestMessageMerge:
    @given(not_authorized=st.text(max_size=20), authorized=st.text(max_size=20))
    def test_fields_merge_independently(self, not_authorized: str, authorized: str) -> None:
        base = AuthzConfig()
        only_denied = base.merge(message={"not_authorized": not_authorized})
        assert only_denied.message.not_authorized == not_authorized
        assert only_denied.message.authorized == base.message.authorized

        only_granted = base.merge(message={"authorized": authorized})
        assert only_granted.message.authorized == authorized
        assert only_granted.message.not_authorized == base.message.not_authorized
