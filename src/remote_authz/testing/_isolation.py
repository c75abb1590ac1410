"""Isolation utilities for global remote-authz state in tests."""

from __future__ import annotations

import contextlib
from collections.abc import Generator

from remote_authz.config._config import (
    AuthzConfig,
    _reset_global_config,  # pyright: ignore[reportPrivateUsage]
    _set_global_config,  # pyright: ignore[reportPrivateUsage]
    get_global_config,
)

__all__ = ["isolated_config"]


@contextlib.contextmanager
def isolated_config(config: AuthzConfig | None = None) -> Generator[AuthzConfig, None, None]:
    """Context manager that provides an isolated global configuration.

    Saves the current global config, installs *config* (or the defaults),
    yields it, and restores the saved config on exit, even if the body
    raises.

    Example::

        with isolated_config(AuthzConfig(port=8080)) as cfg:
            configure(host="authz")  # only visible inside the block
    """
    saved_config = get_global_config()
    try:
        if config is None:
            _reset_global_config()
        else:
            _set_global_config(config)
        yield get_global_config()
    finally:
        _set_global_config(saved_config)
