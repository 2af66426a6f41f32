"""Auth endpoints: register, login, refresh, logout, current user."""

import hashlib
from datetime import datetime, timezone

import bcrypt as _bcrypt
import jwt
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr

from study_buddy.auth.dependencies import CurrentUser, get_current_user
from study_buddy.auth.jwt import create_access_token, create_refresh_token, verify_token
from study_buddy.db.client import get_store
from study_buddy.db.models import REFRESH_TOKENS, USERS, now_ms
from study_buddy.utils.exceptions import Unauthenticated

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


# --- Request / Response schemas ---

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class RefreshRequest(BaseModel):
    refresh_token: str

class TokenResponse(BaseModel):
    status: str = "success"
    data: dict

class UserResponse(BaseModel):
    status: str = "success"
    data: dict[str, str]


# --- Helpers ---

def _hash_refresh_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _epoch_to_iso(epoch: int) -> str:
    return datetime.fromtimestamp(epoch, tz=timezone.utc).isoformat()


def _issue_tokens(user_id: str, email: str) -> dict:
    """Mint an access/refresh pair and remember the refresh token's hash."""
    tokens = {
        "access_token": create_access_token(user_id, email),
        "refresh_token": create_refresh_token(user_id),
        "token_type": "bearer",
    }
    get_store().insert(REFRESH_TOKENS, {
        "user_id": user_id,
        "token_hash": _hash_refresh_token(tokens["refresh_token"]),
        "expires_at": _epoch_to_iso(verify_token(tokens["refresh_token"], "refresh")["exp"]),
        "is_revoked": False,
    })
    return tokens


# --- Endpoints ---

@router.post("/register", status_code=201, response_model=TokenResponse, summary="Register a new user", description="Create a new user account and return JWT tokens.")
async def register(body: RegisterRequest):
    store = get_store()

    with store.transaction():
        if store.find_one(USERS, "email", body.email):
            raise HTTPException(status_code=409, detail="Email already registered")

        password_hash = _bcrypt.hashpw(body.password.encode(), _bcrypt.gensalt()).decode()
        user = store.insert(USERS, {
            "email": body.email,
            "password_hash": password_hash,
            "created_at": now_ms(),
        })

    return TokenResponse(data=_issue_tokens(user["id"], user["email"]))


@router.post("/login", response_model=TokenResponse, summary="Login", description="Authenticate with email and password, returns JWT access and refresh tokens.")
async def login(body: LoginRequest):
    user = get_store().find_one(USERS, "email", body.email)
    if not user:
        raise Unauthenticated("Invalid email or password")

    if not _bcrypt.checkpw(body.password.encode(), user["password_hash"].encode()):
        raise Unauthenticated("Invalid email or password")

    return TokenResponse(data=_issue_tokens(user["id"], user["email"]))


@router.post("/refresh", response_model=TokenResponse, summary="Refresh access token", description="Exchange a valid refresh token for a new token pair. Old refresh token is revoked.")
async def refresh(body: RefreshRequest):
    try:
        payload = verify_token(body.refresh_token, "refresh")
    except jwt.InvalidTokenError:
        raise Unauthenticated("Invalid or expired refresh token")

    store = get_store()
    with store.transaction():
        stored = store.find_one(REFRESH_TOKENS, "token_hash", _hash_refresh_token(body.refresh_token))
        if not stored or stored["is_revoked"]:
            raise Unauthenticated("Refresh token revoked or not found")
        store.patch(REFRESH_TOKENS, stored["id"], {"is_revoked": True})

    user_id = payload["sub"]
    user = store.get(USERS, user_id)
    if not user:
        raise Unauthenticated("User no longer exists")

    return TokenResponse(data=_issue_tokens(user_id, user["email"]))


@router.post("/logout", summary="Logout", description="Revoke the refresh token. Requires a valid access token.")
async def logout(body: RefreshRequest, user: CurrentUser = Depends(get_current_user)):
    store = get_store()
    stored = store.find_one(REFRESH_TOKENS, "token_hash", _hash_refresh_token(body.refresh_token))
    if stored and stored["user_id"] == user.id:
        store.patch(REFRESH_TOKENS, stored["id"], {"is_revoked": True})

    return {"status": "success", "data": {"message": "Logged out successfully"}}


@router.get("/me", response_model=UserResponse, summary="Current user", description="Return the identity resolved from the access token.")
async def me(user: CurrentUser = Depends(get_current_user)):
    return UserResponse(data={"id": user.id, "email": user.email})
