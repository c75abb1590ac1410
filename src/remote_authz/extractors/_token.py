"""Default bearer-token extraction."""

from __future__ import annotations

from typing import Any

from remote_authz._audit import log_authentication_failure
from remote_authz.errors import AUT
from remote_authz.exceptions import (
    AuthenticationError,
    AuthenticationFormatMismatch,
    AuthenticationHeaderMissing,
    AuthenticationTypeMismatch,
)

__all__ = ["BearerTokenExtractor", "parse_bearer"]

TOKEN_TYPE = "Bearer"


def parse_bearer(value: str | None, authorization_key: str = "Authorization") -> str:
    """Validate a raw header value and return the token it carries.

    Checks run in order and the first failing one raises:

    1. the header is absent or empty,
    2. the scheme is not exactly ``Bearer``,
    3. splitting on a single space does not give exactly two parts,
    4. the token value is empty.

    Args:
        value: The raw header value, ``None`` when the header is absent.
        authorization_key: Header name, used in the error detail.

    Returns:
        The token value.

    Raises:
        AuthenticationHeaderMissing: Check 1 failed.
        AuthenticationTypeMismatch: Check 2 failed.
        AuthenticationFormatMismatch: Check 3 or 4 failed.

    Example::

        parse_bearer("Bearer abc123")  # "abc123"
        parse_bearer("Basic abc123")   # raises AuthenticationTypeMismatch
    """
    if not value:
        raise AuthenticationHeaderMissing(authorization_key)

    parts = value.split(" ")
    if parts[0] != TOKEN_TYPE:
        raise AuthenticationTypeMismatch()
    if len(parts) != 2:
        raise AuthenticationFormatMismatch()
    if not parts[1]:
        raise AuthenticationFormatMismatch(
            AUT["AUTHENTICATION_VALUE_NOT_SET"].with_detail("Token value must not be empty")
        )
    return parts[1]


class BearerTokenExtractor:
    """Default ``get_token`` strategy.

    Reads the header named by *authorization_key* and validates it with
    :func:`parse_bearer`. On failure exactly one 401 is written onto the
    response and ``None`` is returned, which stops the middleware before
    any network call.

    Args:
        authorization_key: Name of the header carrying the token.

    Example::

        get_token = BearerTokenExtractor("X-Auth")
        token = get_token(request, response)
    """

    __slots__ = ("authorization_key",)

    def __init__(self, authorization_key: str = "Authorization") -> None:
        self.authorization_key = authorization_key

    def __call__(self, request: Any, response: Any) -> str | None:
        try:
            return parse_bearer(request.headers.get(self.authorization_key), self.authorization_key)
        except AuthenticationError as exc:
            log_authentication_failure(exc.descriptor)
            response.status(exc.status_code)
            response.json(exc.descriptor.to_dict())
            return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BearerTokenExtractor):
            return NotImplemented
        return self.authorization_key == other.authorization_key

    def __hash__(self) -> int:
        return hash((BearerTokenExtractor, self.authorization_key))

    def __repr__(self) -> str:
        return f"BearerTokenExtractor(authorization_key={self.authorization_key!r})"
