from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from imagehoster.core.errors import UsernameTaken
from imagehoster.core.security import hash_password, verify_password
from imagehoster.db.session import commit_or_rollback
from imagehoster.models.user import User, UserProfile
from imagehoster.schema.user import UserCreate


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    result = await session.execute(
        select(User).where(User.username == username).options(selectinload(User.profile))
    )
    return result.scalar_one_or_none()


async def get_user_by_id(session: AsyncSession, user_id: int) -> User | None:
    result = await session.execute(
        select(User).where(User.id == user_id).options(selectinload(User.profile))
    )
    return result.scalar_one_or_none()


async def find_by_credentials(session: AsyncSession, username: str, password: str) -> User | None:
    """Return the user whose username and password both match, else None."""
    user = await get_user_by_username(session, username)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


async def create_user(session: AsyncSession, payload: UserCreate) -> User:
    """Persist a user together with its profile in one transaction."""
    if await get_user_by_username(session, payload.username):
        raise UsernameTaken(payload.username)
    profile = payload.profile
    user = User(
        username=payload.username,
        hashed_password=hash_password(payload.password),
        profile=UserProfile(
            full_name=profile.full_name,
            email_address=profile.email_address,
            mobile_number=profile.mobile_number,
            about=profile.about,
        ),
    )
    session.add(user)
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        raise UsernameTaken(payload.username) from exc
    await commit_or_rollback(session, "register user")
    return user
