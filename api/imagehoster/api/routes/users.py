"""User endpoints for the authenticated caller."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from imagehoster.api.deps import get_current_identity, get_db
from imagehoster.core.security import Identity
from imagehoster.schema.user import UserRead
from imagehoster.services import user_service

router = APIRouter()


@router.get("/users/me", response_model=UserRead)
async def read_current_user(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db),
) -> UserRead:
    """Return the current authenticated user with profile."""
    user = await user_service.get_user_by_id(session, identity.user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserRead.model_validate(user)
