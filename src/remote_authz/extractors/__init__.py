"""Default, overridable strategies for deriving the token and object id."""

from __future__ import annotations

from remote_authz.extractors._access import ACCESS_OBJECT_KEY, get_access_object
from remote_authz.extractors._token import BearerTokenExtractor, parse_bearer

__all__ = ["ACCESS_OBJECT_KEY", "BearerTokenExtractor", "get_access_object", "parse_bearer"]
