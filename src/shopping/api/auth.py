"""Caller identity.

The caller names itself in the ``X-User-Id`` header; the value is the account
name. Verifying that assertion belongs to the gateway in front of the service.
"""

from fastapi import Header

from shopping.errors import UnauthorizedError
from shopping.utils.logging import add_context


async def current_user(x_user_id: str | None = Header(default=None)) -> str:
    if x_user_id is None or not x_user_id.strip():
        raise UnauthorizedError()

    add_context(user=x_user_id)
    return x_user_id
