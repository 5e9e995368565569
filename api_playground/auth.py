"""
Owner resolution for inbound calls.

Authentication itself happens upstream (reverse proxy, session
middleware). The core only needs an opaque owner id per call, which the
default dependency reads from the ``X-User-Id`` header set by that layer.
Deployments with a different mechanism override ``get_owner_id``.
"""

from fastapi import Header

from .exceptions import UnauthorizedError


OWNER_HEADER = "X-User-Id"


def get_owner_id(x_user_id: str | None = Header(default=None, alias=OWNER_HEADER)) -> str:
    """
    Dependency returning the authenticated owner id.

    Raises:
        UnauthorizedError: If no owner was established upstream
    """
    if not x_user_id or not x_user_id.strip():
        raise UnauthorizedError()
    return x_user_id.strip()
