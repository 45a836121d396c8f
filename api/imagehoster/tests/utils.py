"""Shared helpers for service and API tests."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from imagehoster.core.security import Identity
from imagehoster.models.user import User
from imagehoster.schema.user import UserCreate
from imagehoster.services import user_service

DEFAULT_PASSWORD = "abc123!"


async def make_user(session: AsyncSession, prefix: str = "user") -> tuple[User, Identity]:
    """Persist a user directly through the store and return it with its identity."""
    username = f"{prefix}_{uuid.uuid4().hex[:8]}"
    user = await user_service.create_user(session, UserCreate(username=username, password=DEFAULT_PASSWORD))
    return user, Identity(user_id=user.id, username=user.username)


@dataclass(slots=True)
class AuthContext:
    """Registered user plus the bearer headers for API tests."""

    user: dict[str, Any]
    username: str
    password: str
    token: str

    @property
    def user_id(self) -> int:
        return int(self.user["id"])

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


async def register_and_login(client: AsyncClient, *, prefix: str = "user") -> AuthContext:
    """Register and log in a new user, returning the auth context."""
    username = f"{prefix}_{uuid.uuid4().hex[:8]}"
    creds = {"username": username, "password": DEFAULT_PASSWORD, "profile": {"full_name": prefix.title()}}

    register_res = await client.post("/api/auth/register", json=creds)
    assert register_res.status_code == 200
    user = register_res.json()["user"]

    login_res = await client.post("/api/auth/login", json={"username": username, "password": DEFAULT_PASSWORD})
    assert login_res.status_code == 200
    # Requests authenticate by header; drop the cookie so one client can act as several users.
    client.cookies.clear()

    return AuthContext(user=user, username=username, password=DEFAULT_PASSWORD, token=login_res.json()["access_token"])
