"""User request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from imagehoster.schema.base import ORMModel


class UserProfileCreate(BaseModel):
    """Profile fields captured on the registration form."""
    full_name: str | None = Field(default=None, max_length=255)
    email_address: str | None = Field(default=None, max_length=255)
    mobile_number: str | None = Field(default=None, max_length=32)
    about: str | None = None


class UserCreate(BaseModel):
    """Payload for registering a new user.

    Password complexity is enforced by the registration workflow so a weak
    password is reported with the policy message rather than a field error.
    """
    username: str = Field(min_length=1, max_length=64)
    password: str
    profile: UserProfileCreate = Field(default_factory=UserProfileCreate)


class UserLogin(BaseModel):
    username: str
    password: str


class UserProfileRead(ORMModel):
    full_name: str | None = None
    email_address: str | None = None
    mobile_number: str | None = None
    about: str | None = None


class UserRead(ORMModel):
    """User fields exposed in API responses."""
    id: int
    username: str
    created_at: datetime
    profile: UserProfileRead | None = None
