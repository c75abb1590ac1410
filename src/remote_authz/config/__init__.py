"""Configuration module for remote-authz."""

from __future__ import annotations

from remote_authz.config._config import (
    AuthzConfig,
    Messages,
    configure,
    get_global_config,
    merge_config,
)

__all__ = ["AuthzConfig", "Messages", "configure", "get_global_config", "merge_config"]
