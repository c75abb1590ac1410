"""Error catalog: structured descriptors written back to callers.

Descriptors are immutable templates. Per-occurrence context is attached
with :meth:`ErrorDescriptor.with_detail`, which returns a copy, so a
template can be shared by any number of concurrent requests.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

__all__ = ["AUT", "ErrorDescriptor", "lookup"]


@dataclass(frozen=True, slots=True)
class ErrorDescriptor:
    """A single catalog entry.

    Attributes:
        error_code: Stable machine-readable code (e.g. ``"AUT_002"``).
        error_name: Short human-readable name.
        error_message: Description of the failure.
        hint: What the caller can do about it.
        detail: Per-occurrence context, ``None`` on catalog templates.

    Example::

        err = AUT["AUTHENTICATION_TYPE_NOT_ACCORD"].with_detail(
            "Token type must be 'Bearer'"
        )
        response.json(err.to_dict())
    """

    error_code: str
    error_name: str
    error_message: str
    hint: str
    detail: str | None = None

    def with_detail(self, detail: str) -> ErrorDescriptor:
        """Return a copy of this descriptor carrying *detail*."""
        return dataclasses.replace(self, detail=detail)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the wire field names."""
        payload: dict[str, Any] = {
            "errorCode": self.error_code,
            "errorName": self.error_name,
            "errorMessage": self.error_message,
            "hint": self.hint,
        }
        if self.detail is not None:
            payload["detail"] = self.detail
        return payload


_DOC_HINT = "View documentation on how to set authentication values on the header."

AUT: Mapping[str, ErrorDescriptor] = MappingProxyType(
    {
        "AUTHENTICATION_NOT_SET": ErrorDescriptor(
            error_code="AUT_000",
            error_name="Authentication is not set",
            error_message="Authentication values are not set.",
            hint=_DOC_HINT,
        ),
        "AUTHENTICATION_DATA_NOT_PROPER_LENGTH": ErrorDescriptor(
            error_code="AUT_001",
            error_name="Authentication data not proper length.",
            error_message="Authentication data does not contain proper length.",
            hint=_DOC_HINT,
        ),
        "AUTHENTICATION_TYPE_NOT_ACCORD": ErrorDescriptor(
            error_code="AUT_002",
            error_name="Authentication type is not correct.",
            error_message="Authentication type is not according to constants.",
            hint="Authentication type should be 'Bearer', view documentation for more.",
        ),
        "AUTHENTICATION_VALUE_NOT_SET": ErrorDescriptor(
            error_code="AUT_003",
            error_name="Authentication value is not set",
            error_message="Authentication values are not set.",
            hint="Authentication key exists, but value may not.",
        ),
        "AUTHORIZATION_SERVICE_UNAVAILABLE": ErrorDescriptor(
            error_code="AUT_004",
            error_name="Authorization service unavailable",
            error_message="The authorization service could not be reached.",
            hint="Check that the authorization server is up and reachable.",
        ),
        "AUTHORIZATION_BODY_NOT_ENCODABLE": ErrorDescriptor(
            error_code="AUT_005",
            error_name="Authorization body not encodable",
            error_message="The request could not be encoded for the authorization service.",
            hint="Request values forwarded for authorization must be JSON-compatible.",
        ),
    }
)


def lookup(name: str) -> ErrorDescriptor:
    """Return the catalog entry registered under *name*.

    Raises:
        KeyError: If *name* is not in the catalog.
    """
    try:
        return AUT[name]
    except KeyError:
        raise KeyError(f"Unknown error descriptor {name!r}") from None
