"""Layered configuration for remote-authz."""

from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from remote_authz._http import RequestView, ResponseWriter
from remote_authz._types import AccessObjectGetter, TokenGetter
from remote_authz.exceptions import ConfigurationError
from remote_authz.extractors._access import get_access_object as _default_get_access_object
from remote_authz.extractors._token import BearerTokenExtractor

__all__ = [
    "AuthzConfig",
    "Messages",
    "configure",
    "get_global_config",
    "merge_config",
    "_reset_global_config",
    "_set_global_config",
]

_SAMPLE_ID = "someId"
_SAMPLE_TOKEN = "Bearer someTokenValues"
_SAMPLE_OTHER_HEADER = "something else"
_REQUIRED_STRINGS = ("host", "endpoint", "authorization_key")


@dataclass(frozen=True, slots=True)
class Messages:
    """Messages attached to responses.

    Attributes:
        not_authorized: Set as ``detail`` on bodies forwarded after a denial.
        authorized: Informational message for granted requests.
    """

    not_authorized: str = "Access Denied"
    authorized: str = "Access Granted"

    def merge(
        self,
        *,
        not_authorized: str | None = None,
        authorized: str | None = None,
    ) -> Messages:
        """Return new messages with non-None overrides applied."""
        return Messages(
            not_authorized=not_authorized if not_authorized is not None else self.not_authorized,
            authorized=authorized if authorized is not None else self.authorized,
        )


@dataclass(frozen=True, slots=True)
class AuthzConfig:
    """Effective configuration of an authorization middleware.

    Instances are immutable and validated on construction, so a config
    can be shared by any number of concurrent requests.

    Attributes:
        host: Host of the authorization service.
        port: Port of the authorization service. A falsy port is omitted
            from the URL.
        endpoint: Path of the validation endpoint.
        auth_endpoint: Full URL of the validation endpoint. When set it
            wins over ``host``, ``port`` and ``endpoint``.
        service: Name of the calling service, forwarded in the body.
        authorization_key: Name of the header carrying the bearer token.
        message: Messages attached to responses.
        get_access_object: Unary strategy ``(request) -> id``.
        get_token: Binary strategy ``(request, response) -> token``. Left
            as ``None`` it resolves to a ``BearerTokenExtractor`` reading
            ``authorization_key``.
        log_decisions: Log granted/denied decisions.

    Raises:
        ConfigurationError: A strategy has the wrong arity or returns
            ``None`` for a well-formed sample request.

    Example::

        config = AuthzConfig(host="authz.internal", port=8080)
        merged = config.merge(message={"not_authorized": "Nope"})
    """

    host: str = "localhost"
    port: int | None = 3400
    endpoint: str = "/auth/token/validate"
    auth_endpoint: str | None = None
    service: str | None = None
    authorization_key: str = "Authorization"
    message: Messages = field(default_factory=Messages)
    get_access_object: AccessObjectGetter = _default_get_access_object
    get_token: TokenGetter | None = None
    log_decisions: bool = True
    _default_token_getter: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in _REQUIRED_STRINGS:
            if getattr(self, name) is None:
                raise ConfigurationError(f"{name} must not be None")
        if not isinstance(self.message, Messages):
            raise ConfigurationError(
                f"message must be a Messages instance, got {type(self.message).__name__}"
            )
        if self.get_token is None:
            # Use object.__setattr__ because the dataclass is frozen
            object.__setattr__(self, "get_token", BearerTokenExtractor(self.authorization_key))
            object.__setattr__(self, "_default_token_getter", True)
        _validate_strategies(self)

    @property
    def endpoint_url(self) -> str:
        """URL the authorization body is POSTed to."""
        if self.auth_endpoint:
            return self.auth_endpoint
        port = f":{self.port}" if self.port else ""
        return f"http://{self.host}{port}{self.endpoint}"

    @property
    def uses_default_token_getter(self) -> bool:
        """Whether ``get_token`` was left to default rather than supplied."""
        return self._default_token_getter

    def merge(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        endpoint: str | None = None,
        auth_endpoint: str | None = None,
        service: str | None = None,
        authorization_key: str | None = None,
        message: Messages | Mapping[str, str] | None = None,
        get_access_object: AccessObjectGetter | None = None,
        get_token: TokenGetter | None = None,
        log_decisions: bool | None = None,
    ) -> AuthzConfig:
        """Return a new config with non-None overrides applied.

        ``message`` given as a mapping is merged key by key onto the
        current messages, so overriding ``authorized`` alone keeps
        ``not_authorized``. A ``Messages`` instance replaces them whole.

        When ``get_token`` is not overridden and was left to default, the
        extractor is rebuilt for the merged ``authorization_key``. An
        extractor supplied by the caller is kept.

        Returns:
            A new, validated ``AuthzConfig``.

        Raises:
            ConfigurationError: On unknown message keys, or when the
                merged strategies are invalid.

        Example::

            base = AuthzConfig()
            merged = base.merge(port=8080, message={"authorized": "Welcome"})
            assert merged.message.not_authorized == "Access Denied"
        """
        overrides = {
            "host": host,
            "port": port,
            "endpoint": endpoint,
            "auth_endpoint": auth_endpoint,
            "service": service,
            "authorization_key": authorization_key,
            "message": message,
            "get_access_object": get_access_object,
            "get_token": get_token,
            "log_decisions": log_decisions,
        }
        return _replace(self, {k: v for k, v in overrides.items() if v is not None})


_FIELD_NAMES = frozenset(f.name for f in dataclasses.fields(AuthzConfig) if f.init)
_MESSAGE_NAMES = frozenset(f.name for f in dataclasses.fields(Messages))


def _replace(config: AuthzConfig, changes: Mapping[str, Any]) -> AuthzConfig:
    """Build a new config from *config* with every key of *changes* replaced."""
    values = {name: getattr(config, name) for name in _FIELD_NAMES}
    values.update(changes)
    values["message"] = _merge_messages(config.message, changes.get("message"))
    if "get_token" not in changes and config.uses_default_token_getter:
        values["get_token"] = None
    return AuthzConfig(**values)


def _merge_messages(
    current: Messages,
    override: Messages | Mapping[str, str] | None,
) -> Messages:
    if override is None:
        return current
    if isinstance(override, Messages):
        return override
    unknown = set(override) - _MESSAGE_NAMES
    if unknown:
        raise ConfigurationError(
            f"Unknown message keys {sorted(unknown)!r}, expected a subset of "
            f"{sorted(_MESSAGE_NAMES)!r}"
        )
    return current.merge(**override)


def merge_config(
    default: AuthzConfig,
    override: Mapping[str, Any] | None = None,
    **overrides: Any,
) -> AuthzConfig:
    """Merge caller-supplied overrides onto *default*.

    Every key present in *override* (or given as a keyword) replaces the
    default, ``None`` included, so ``{"port": None}`` drops the port;
    absent keys keep it. ``message`` is merged key by key, and
    ``get_token=None`` restores the default extractor.

    Args:
        default: The base configuration.
        override: Mapping of ``AuthzConfig`` field names to values.
        **overrides: Same as *override*, keywords win on conflict.

    Returns:
        The effective, validated configuration.

    Raises:
        ConfigurationError: On unknown keys or invalid strategies.

    Example::

        effective = merge_config(
            get_global_config(),
            {"host": "authz", "message": {"not_authorized": "Forbidden"}},
        )
    """
    combined: dict[str, Any] = dict(override or {})
    combined.update(overrides)
    unknown = set(combined) - _FIELD_NAMES
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys {sorted(unknown)!r}, expected a subset of "
            f"{sorted(_FIELD_NAMES)!r}"
        )
    return _replace(default, combined)


# ---------------------------------------------------------------------------
# Strategy validation
# ---------------------------------------------------------------------------


def _required_positional(fn: Callable[..., Any]) -> int | None:
    """Number of positional parameters without defaults, None if not inspectable."""
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return None
    return sum(
        1
        for p in sig.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    )


class _SampleHeaders(httpx.Headers):
    """Headers that answer every name, unknown ones with a placeholder value."""

    def __getitem__(self, key: str) -> str:
        try:
            return super().__getitem__(key)
        except KeyError:
            return _SAMPLE_OTHER_HEADER


def _sample_request(config: AuthzConfig) -> RequestView:
    token_headers = {config.authorization_key: _SAMPLE_TOKEN}
    if isinstance(config.get_token, BearerTokenExtractor):
        token_headers[config.get_token.authorization_key] = _SAMPLE_TOKEN
    return RequestView(
        headers=_SampleHeaders(token_headers),
        query={"_id": _SAMPLE_ID},
        params={"_id": _SAMPLE_ID},
        method="GET",
        path="/",
    )


def _validate_strategies(config: AuthzConfig) -> None:
    get_access_object = config.get_access_object
    get_token = config.get_token

    if not callable(get_access_object) or _required_positional(get_access_object) != 1:
        raise ConfigurationError(
            "get_access_object() must be a function, with only one request argument."
        )
    if not callable(get_token) or _required_positional(get_token) != 2:
        raise ConfigurationError("get_token() must be a function, with two arguments (req, res)")

    sample = _sample_request(config)
    try:
        object_id = get_access_object(sample)
    except Exception as exc:
        raise ConfigurationError(
            f"get_access_object() raised on a well-formed sample request: {exc!r}"
        ) from exc
    if object_id is None:
        raise ConfigurationError(
            "get_access_object() must be a function, with a return value that is not None."
        )

    try:
        token = get_token(sample, ResponseWriter())
    except Exception as exc:
        raise ConfigurationError(
            f"get_token() raised on a well-formed sample request: {exc!r}"
        ) from exc
    if token is None:
        raise ConfigurationError(
            "get_token() must be a function, with a return value that is not None."
        )


# ---------------------------------------------------------------------------
# Global configuration singleton
# ---------------------------------------------------------------------------

_global_config = AuthzConfig()


def get_global_config() -> AuthzConfig:
    """Return the current global default configuration.

    Example::

        config = get_global_config()
        print(config.endpoint_url)  # "http://localhost:3400/auth/token/validate"
    """
    return _global_config


def configure(**overrides: Any) -> AuthzConfig:
    """Update the global default configuration by merging overrides.

    Middlewares built without an explicit config start from these
    defaults. Accepts the same keys as :func:`merge_config`.

    Returns:
        The updated global ``AuthzConfig``.

    Example::

        configure(host="authz.internal", port=8080)
    """
    global _global_config
    _global_config = merge_config(_global_config, overrides)
    return _global_config


def _set_global_config(cfg: AuthzConfig) -> None:
    """Replace global config with an exact snapshot. For testing only."""
    global _global_config
    _global_config = cfg


def _reset_global_config() -> None:
    """Reset global config to defaults. For testing only."""
    global _global_config
    _global_config = AuthzConfig()
