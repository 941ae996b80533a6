"""Caller identity dependencies.

Identity comes from a bearer token issued by the external identity provider.
Only the subject claim is used; it is the caller's profile id.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.projecthub.core.logging import bind_user_context
from src.projecthub.core.security import decode_token


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_optional_user_id(
    authorization: Annotated[str | None, Header()] = None,
) -> UUID | None:
    """Resolve the caller id from the Authorization header, if one is sent.

    No header means an anonymous caller. A header that is present but malformed,
    expired or carries a bad subject is rejected rather than treated as anonymous.
    """
    if authorization is None:
        return None

    if not authorization.startswith("Bearer "):
        raise _unauthorized("Missing or invalid authorization header")

    payload = decode_token(authorization[7:])
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    subject = payload.get("sub")
    if not subject:
        raise _unauthorized("Invalid token payload")

    try:
        user_id = UUID(subject)
    except ValueError as e:
        raise _unauthorized("Invalid user_id in token") from e

    bind_user_context(user_id)
    return user_id


OptionalUserId = Annotated[UUID | None, Depends(get_optional_user_id)]


async def get_current_user_id(user_id: OptionalUserId) -> UUID:
    """Require an authenticated caller."""
    if user_id is None:
        raise _unauthorized("Authentication required")
    return user_id


CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]
