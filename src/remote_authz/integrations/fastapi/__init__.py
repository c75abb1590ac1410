"""FastAPI integration for remote-authz."""

from __future__ import annotations

try:
    import fastapi as _fastapi_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _fastapi_check
except ImportError as exc:
    raise ImportError(
        "FastAPI integration requires fastapi. Install it with: pip install remote-authz[fastapi]"
    ) from exc

from remote_authz.integrations.fastapi._dependencies import AuthzDep, request_view
from remote_authz.integrations.fastapi._errors import install_error_handlers

__all__ = ["AuthzDep", "install_error_handlers", "request_view"]
