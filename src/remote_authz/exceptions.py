"""Exception hierarchy for remote-authz."""

from __future__ import annotations

from typing import Any

from remote_authz.errors import AUT, ErrorDescriptor

__all__ = [
    "AuthenticationError",
    "AuthenticationFormatMismatch",
    "AuthenticationHeaderMissing",
    "AuthenticationTypeMismatch",
    "AuthorizationBodyError",
    "AuthorizationDenied",
    "AuthzError",
    "ConfigurationError",
    "RequestRejected",
    "TransportFailure",
]


class AuthzError(Exception):
    """Base exception for all remote-authz errors."""


class ConfigurationError(AuthzError):
    """The effective configuration is unusable.

    Raised once, when the configuration is merged, so that a broken
    ``get_token`` or ``get_access_object`` fails at startup rather than on
    the first real request.

    Example::

        AuthorizationMiddleware(get_access_object=lambda: "x")
        # ConfigurationError: get_access_object() must be a function, ...
    """


class AuthenticationError(AuthzError):
    """The request does not carry a usable bearer token.

    Always surfaced to the caller as HTTP 401 with :attr:`descriptor`
    as the JSON payload.

    Attributes:
        descriptor: The catalog entry, with the occurrence detail set.
    """

    status_code = 401

    def __init__(self, descriptor: ErrorDescriptor) -> None:
        self.descriptor = descriptor
        super().__init__(descriptor.detail or descriptor.error_message)


class AuthenticationHeaderMissing(AuthenticationError):  # noqa: N818
    """The configured authorization header is absent or empty."""

    def __init__(self, authorization_key: str) -> None:
        self.authorization_key = authorization_key
        super().__init__(
            AUT["AUTHENTICATION_TYPE_NOT_ACCORD"].with_detail(
                f"Request header must contain an authorization key word : {authorization_key}"
            )
        )


class AuthenticationTypeMismatch(AuthenticationError):  # noqa: N818
    """The token scheme is not ``Bearer``."""

    def __init__(self) -> None:
        super().__init__(
            AUT["AUTHENTICATION_TYPE_NOT_ACCORD"].with_detail("Token type must be 'Bearer'")
        )


class AuthenticationFormatMismatch(AuthenticationError):  # noqa: N818
    """The header value is not of the form ``Bearer tokenValue``."""

    def __init__(self, descriptor: ErrorDescriptor | None = None) -> None:
        if descriptor is None:
            descriptor = AUT["AUTHENTICATION_TYPE_NOT_ACCORD"].with_detail(
                "Token must have the format 'Bearer tokenValue' "
                "(Note : there is a space between the token type and the value)"
            )
        super().__init__(descriptor)


class AuthorizationDenied(AuthzError):  # noqa: N818
    """The authorization service answered with a non-200 status.

    Attributes:
        status_code: The status returned by the authorization service.
        body: The (augmented) body forwarded to the caller.
    """

    def __init__(self, *, status_code: int, body: Any, message: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        if message is None:
            message = f"Authorization service denied the request with status {status_code}"
        super().__init__(message)


class TransportFailure(AuthzError):  # noqa: N818
    """The authorization service could not be reached.

    Wraps the underlying ``httpx`` error, available as ``__cause__``.

    Attributes:
        endpoint: The URL that was being called.
    """

    status_code = 502

    def __init__(self, *, endpoint: str, message: str | None = None) -> None:
        self.endpoint = endpoint
        if message is None:
            message = f"Could not reach authorization service at {endpoint}"
        super().__init__(message)


class AuthorizationBodyError(AuthzError):
    """The authorization body could not be encoded as JSON.

    Values without a JSON form (UUIDs, dates, ...) are sent as strings, so
    this only happens for bodies JSON cannot represent at all, such as
    tuple mapping keys, NaN or circular references. Mapped to HTTP 500.
    Wraps the encoder error, available as ``__cause__``.
    """

    status_code = 500

    def __init__(self, message: str | None = None) -> None:
        if message is None:
            message = "Authorization body could not be encoded as JSON"
        super().__init__(message)


class RequestRejected(AuthzError):  # noqa: N818
    """A request was terminated by the middleware.

    Raised by framework integrations that cannot write the response
    directly (FastAPI dependencies) and converted back into a JSON
    response by their error handlers.

    Attributes:
        status_code: HTTP status to send.
        payload: JSON payload to send.
    """

    def __init__(self, *, status_code: int, payload: Any) -> None:
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"Request rejected with status {status_code}")
