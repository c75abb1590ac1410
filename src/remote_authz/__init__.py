"""remote-authz: delegate per-request authorization to a remote service.

Extracts a bearer token and a resource id from each incoming request,
POSTs them to an authorization service, and lets the request through
only when the service answers 200.

Example::

    from remote_authz import AuthorizationMiddleware, RequestView, ResponseWriter

    middleware = AuthorizationMiddleware(host="authz.internal", port=8080)

    response = ResponseWriter()
    middleware.authorize(
        RequestView(headers={"Authorization": "Bearer abc123"}, query={"_id": "r1"}),
        response,
        continuation=lambda: print("authorized"),
    )
"""

from importlib.metadata import PackageNotFoundError, version

from remote_authz._client import AuthorizationClient, AuthorizationReply
from remote_authz._health import check_authorization_server
from remote_authz._http import RequestView, ResponseWriter
from remote_authz._middleware import AuthorizationMiddleware, build_authorization_body
from remote_authz._types import RequestLike, ResponseLike
from remote_authz.config._config import AuthzConfig, Messages, configure, merge_config
from remote_authz.errors import AUT, ErrorDescriptor
from remote_authz.exceptions import (
    AuthenticationError,
    AuthenticationFormatMismatch,
    AuthenticationHeaderMissing,
    AuthenticationTypeMismatch,
    AuthorizationBodyError,
    AuthorizationDenied,
    AuthzError,
    ConfigurationError,
    RequestRejected,
    TransportFailure,
)
from remote_authz.extractors import BearerTokenExtractor, get_access_object, parse_bearer

try:
    __version__ = version("remote-authz")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "__version__",
    "AUT",
    "AuthenticationError",
    "AuthenticationFormatMismatch",
    "AuthenticationHeaderMissing",
    "AuthenticationTypeMismatch",
    "AuthorizationBodyError",
    "AuthorizationClient",
    "AuthorizationDenied",
    "AuthorizationMiddleware",
    "AuthorizationReply",
    "AuthzConfig",
    "AuthzError",
    "BearerTokenExtractor",
    "ConfigurationError",
    "ErrorDescriptor",
    "Messages",
    "RequestLike",
    "RequestRejected",
    "RequestView",
    "ResponseLike",
    "ResponseWriter",
    "TransportFailure",
    "build_authorization_body",
    "check_authorization_server",
    "configure",
    "get_access_object",
    "merge_config",
    "parse_bearer",
]
