"""Password hashing, access tokens, and the caller identity value.

Invariants:
- Workflow calls receive an explicit ``Identity``; nothing reads a request-scoped global.
- Passwords are only ever stored as passlib hashes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import settings

ACCESS_TOKEN_TYPE = "access"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True, slots=True)
class Identity:
    """Authenticated caller passed into every mutating workflow call."""

    user_id: int
    username: str


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(identity: Identity, expires_delta: timedelta | None = None) -> str:
    """Sign an opaque session token for the identity."""
    now = datetime.now(timezone.utc)
    delta = expires_delta or timedelta(minutes=settings.access_token_expires_minutes)
    payload: dict[str, Any] = {
        "sub": str(identity.user_id),
        "username": identity.username,
        "type": ACCESS_TOKEN_TYPE,
        "iat": now,
        "exp": now + delta,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def read_access_token(token: str) -> Identity | None:
    """Return the identity encoded in a valid access token, else None."""
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if payload.get("type") != ACCESS_TOKEN_TYPE:
        return None
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None
    return Identity(user_id=user_id, username=str(payload.get("username") or ""))
