"""JWT token creation and verification."""

import uuid
from datetime import datetime, timedelta, timezone

import jwt

from study_buddy.config.settings import get_settings

ALGORITHM = "HS256"


def _encode(claims: dict, lifetime: timedelta) -> str:
    settings = get_settings()
    issued_at = datetime.now(timezone.utc)
    payload = {**claims, "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)


def create_access_token(user_id: str, email: str) -> str:
    settings = get_settings()
    return _encode(
        {"sub": user_id, "email": email, "type": "access"},
        timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token(user_id: str) -> str:
    settings = get_settings()
    # jti keeps two refresh tokens minted in the same second distinct
    return _encode(
        {"sub": user_id, "type": "refresh", "jti": uuid.uuid4().hex},
        timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS),
    )


def verify_token(token: str, expected_type: str) -> dict:
    """Decode a JWT and check its type. Raises jwt.InvalidTokenError on any failure."""
    settings = get_settings()
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
    if payload.get("type") != expected_type:
        raise jwt.InvalidTokenError(f"Expected a {expected_type} token")
    return payload