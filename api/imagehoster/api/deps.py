from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from imagehoster.core.config import settings
from imagehoster.core.security import Identity, read_access_token
from imagehoster.db.session import get_session
from imagehoster.services import user_service

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_prefix}/auth/login", auto_error=False)

ACCESS_COOKIE_NAME = "access_token"


async def get_db() -> AsyncSession:
    async for session in get_session():
        yield session


async def _resolve_identity(session: AsyncSession, token: str) -> Identity:
    identity = read_access_token(token)
    if identity is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    user = await user_service.get_user_by_id(session, identity.user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return Identity(user_id=user.id, username=user.username)


async def get_current_identity(
    session: AsyncSession = Depends(get_db),
    token: str | None = Depends(oauth2_scheme),
    access_token_cookie: str | None = Cookie(default=None, alias=ACCESS_COOKIE_NAME),
) -> Identity:
    candidate = token or access_token_cookie
    if not candidate:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return await _resolve_identity(session, candidate)


async def get_optional_identity(
    session: AsyncSession = Depends(get_db),
    token: str | None = Depends(oauth2_scheme),
    access_token_cookie: str | None = Cookie(default=None, alias=ACCESS_COOKIE_NAME),
) -> Identity | None:
    candidate = token or access_token_cookie
    if not candidate:
        return None
    return await _resolve_identity(session, candidate)
