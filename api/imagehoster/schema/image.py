"""Image request/response schemas.

Form input is bound into ``ImageCreate``/``ImageUpdate`` and mapped onto ORM
rows by the gallery workflow; rows never receive raw form fields.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from imagehoster.schema.base import ORMModel
from imagehoster.schema.tag import TagRead


class ImageCreate(BaseModel):
    """Validated upload form."""
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    tags: str = ""


class ImageUpdate(ImageCreate):
    """Validated edit form; the file part is optional and handled separately."""


class OwnerRead(ORMModel):
    id: int
    username: str


class CommentRead(ORMModel):
    id: int
    text: str
    created_at: datetime
    user_id: int


class ImageRead(ORMModel):
    """Image metadata without the stored payload."""
    id: int
    title: str
    description: str | None = None
    owner: OwnerRead
    tags: list[TagRead]
    created_at: datetime
    updated_at: datetime


class ImageDetailRead(ORMModel):
    """Read-only detail view: image, tag display string, and comments."""
    image: ImageRead
    tags: str
    comments: list[CommentRead]


class ImageEditRead(ORMModel):
    """Editable state returned to the owner."""
    image: ImageRead
    tags: str


class OwnershipErrorRead(BaseModel):
    """Refused mutation; the current detail view rides along with the message."""
    error: str
    detail: ImageDetailRead
