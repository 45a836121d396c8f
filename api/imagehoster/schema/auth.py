"""Authentication response schemas."""

from pydantic import BaseModel

from imagehoster.schema.user import UserRead


class TokenRead(BaseModel):
    """Access token returned after login or registration."""
    access_token: str
    token_type: str = "bearer"
    user: UserRead
