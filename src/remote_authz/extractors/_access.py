"""Default access-object extraction."""

from __future__ import annotations

from typing import Any

__all__ = ["ACCESS_OBJECT_KEY", "get_access_object"]

ACCESS_OBJECT_KEY = "_id"


def get_access_object(request: Any) -> Any:
    """Return the id of the resource the request targets.

    The query parameter ``_id`` takes precedence over the path parameter
    ``_id``. Returns ``None`` when neither is present. The id is opaque
    and forwarded as-is to the authorization service.

    Example::

        get_access_object(RequestView(query={"_id": "r1"}, params={"_id": "p1"}))  # "r1"
    """
    query_id = request.query.get(ACCESS_OBJECT_KEY)
    if query_id is not None:
        return query_id
    return request.params.get(ACCESS_OBJECT_KEY)
