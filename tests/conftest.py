"""Shared test fixtures for remote-authz tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from remote_authz._http import ResponseWriter
from remote_authz.config._config import _reset_global_config
from remote_authz.testing._fixtures import (  # noqa: F401
    authz_middleware,
    authz_server,
    isolated_authz_config,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_global_config() -> Generator[None, None, None]:
    """Every test starts and ends with the default global config."""
    _reset_global_config()
    yield
    _reset_global_config()


@pytest.fixture()
def writer() -> ResponseWriter:
    """A fresh response recorder."""
    return ResponseWriter()


class Continuation:
    """Counts how many times a request was let through."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


@pytest.fixture()
def continuation() -> Continuation:
    return Continuation()
