"""Flask integration for remote-authz."""

from __future__ import annotations

try:
    import flask as _flask_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _flask_check
except ImportError as exc:
    raise ImportError(
        "Flask integration requires flask. Install it with: pip install remote-authz[flask]"
    ) from exc

from remote_authz.integrations.flask._extension import AuthzExtension, request_view

__all__ = ["AuthzExtension", "request_view"]
