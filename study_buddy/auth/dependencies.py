"""Auth dependencies for FastAPI route injection."""

from dataclasses import dataclass

import jwt
from fastapi import Request

from study_buddy.auth.jwt import verify_token
from study_buddy.utils.exceptions import Unauthenticated


@dataclass
class CurrentUser:
    id: str
    email: str


def _extract_bearer_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth[7:]
    return None


async def get_current_user(request: Request) -> CurrentUser:
    """FastAPI dependency: resolve the caller from a Bearer access token."""
    token = _extract_bearer_token(request)
    if not token:
        raise Unauthenticated("Missing authentication credentials")

    try:
        payload = verify_token(token, "access")
    except jwt.InvalidTokenError:
        raise Unauthenticated("Invalid or expired token")

    return CurrentUser(id=payload["sub"], email=payload.get("email", ""))


def require_user(user: CurrentUser | None) -> CurrentUser:
    """Guard for service entry points that may be reached without a resolved user."""
    if user is None:
        raise Unauthenticated()
    return user
