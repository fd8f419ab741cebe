from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def create_access_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issue a bearer token for user_id.

    Production tokens come from the identity service; this mirrors its claim
    layout (user_id, exp, iat) for local use and tests.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_TTL_MINUTES)

    issued_at = datetime.now(UTC)
    claims = {
        "user_id": str(user_id),
        "exp": issued_at + expires_delta,
        "iat": issued_at,
    }
    return jwt.encode(claims, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM)


def verify_jwt(token: str) -> Optional[dict]:
    """Decoded claims, or None for a bad signature or an expired token"""
    try:
        return jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=[ApplicationConfig.JWT_ALGORITHM]
        )
    except JWTError:
        return None


def user_id_from_token(token: str) -> Optional[UUID]:
    """The caller's user ID, or None when the token or its user_id claim is unusable"""
    claims = verify_jwt(token)
    if not claims or "user_id" not in claims:
        return None

    try:
        return UUID(str(claims["user_id"]))
    except ValueError:
        return None
