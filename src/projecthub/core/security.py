"""Session token verification.

Tokens are minted by the external identity provider. This service only needs to
verify them and read the subject; create_access_token exists for local
development and tests, where no provider is running.
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from jose import JWTError, jwt

from src.projecthub.core.config import get_settings


def create_access_token(
    subject: str | UUID,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token for the given user id."""
    settings = get_settings()

    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode: dict[str, Any] = {
        "sub": str(subject),
        "exp": expire,
    }
    if settings.jwt_audience:
        to_encode["aud"] = settings.jwt_audience

    return jwt.encode(  # type: ignore[no-any-return]
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and verify a token. Returns None if invalid or expired."""
    settings = get_settings()
    options = {"verify_aud": settings.jwt_audience is not None}
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
        return payload
    except JWTError:
        return None
