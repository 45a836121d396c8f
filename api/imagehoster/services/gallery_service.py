"""Upload, edit, and registration workflows over the tag, user, and image stores.

Invariants:
- Only the owner of an image may edit or delete it; a refusal carries the
  image's current read-only detail.
- Tag names resolve to exactly one row, even when a concurrent writer wins the
  insert race.
- A password that fails the policy never reaches the user store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from imagehoster.core.errors import NotFound, OwnershipViolation, PasswordPolicyViolation, TagConflict
from imagehoster.core.security import Identity
from imagehoster.models.image import Comment, Image
from imagehoster.models.tagging import Tag
from imagehoster.models.user import User
from imagehoster.schema.image import ImageCreate, ImageUpdate
from imagehoster.schema.user import UserCreate
from imagehoster.services import image_service, tag_service, user_service

TAG_DELIMITER = ","

logger = logging.getLogger("imagehoster.services.gallery")


@dataclass(slots=True)
class ImageDetail:
    """Read-only view of an image: the row, its tag string, and its comments."""

    image: Image
    tags: str
    comments: list[Comment]


@dataclass(slots=True)
class ImageEditForm:
    """Editable state handed back to the owner."""

    image: Image
    tags: str


def parse_tag_names(raw: str | None) -> list[str]:
    """Split a comma-delimited tag string, trimming tokens and dropping empty ones."""
    if not raw:
        return []
    return [token.strip() for token in raw.split(TAG_DELIMITER) if token.strip()]


def tags_to_string(tags: Sequence[Tag]) -> str:
    """Render tags back into the comma-delimited form used on edit forms."""
    return TAG_DELIMITER.join(tag.name for tag in tags)


def check_password_policy(password: str, username: str | None = None) -> None:
    """Require at least one ASCII letter, one ASCII digit, and one other character."""
    alphabetic = numeric = other = 0
    for char in password:
        if ("a" <= char <= "z") or ("A" <= char <= "Z"):
            alphabetic += 1
        elif "0" <= char <= "9":
            numeric += 1
        else:
            other += 1
    if not (alphabetic and numeric and other):
        raise PasswordPolicyViolation(username)


async def find_or_create_tag(session: AsyncSession, name: str) -> Tag:
    tag = await tag_service.get_tag_by_name(session, name)
    if tag:
        return tag
    try:
        return await tag_service.create_tag(session, name)
    except TagConflict:
        tag = await tag_service.get_tag_by_name(session, name)
        if tag is None:
            raise
        return tag


async def find_or_create_tags(session: AsyncSession, raw: str | None) -> list[Tag]:
    """Resolve a tag string into rows, creating unseen names.

    Repeated names collapse onto their first occurrence so an image links each
    tag at most once.
    """
    tags: list[Tag] = []
    seen: set[str] = set()
    for name in parse_tag_names(raw):
        if name in seen:
            continue
        seen.add(name)
        tags.append(await find_or_create_tag(session, name))
    return tags


async def register_user(session: AsyncSession, payload: UserCreate) -> User:
    check_password_policy(payload.password, payload.username)
    user = await user_service.create_user(session, payload)
    logger.info("Registered user %s", user.id)
    return user


async def login(session: AsyncSession, username: str, password: str) -> User | None:
    return await user_service.find_by_credentials(session, username, password)


def build_detail(image: Image) -> ImageDetail:
    return ImageDetail(image=image, tags=tags_to_string(image.tags), comments=list(image.comments))


async def _load_image(session: AsyncSession, image_id: int) -> Image:
    image = await image_service.get_image(session, image_id)
    if not image:
        raise NotFound("Image", image_id)
    return image


def _ensure_owner(identity: Identity, image: Image, action: str) -> None:
    if image.owner_id != identity.user_id:
        logger.info(
            "Refused %s of image %s",
            action,
            image.id,
            extra={"caller_id": identity.user_id, "owner_id": image.owner_id},
        )
        raise OwnershipViolation(action, build_detail(image))


async def list_images(session: AsyncSession) -> list[Image]:
    return await image_service.list_images(session)


async def get_image_detail(session: AsyncSession, image_id: int) -> ImageDetail:
    return build_detail(await _load_image(session, image_id))


async def edit_image(session: AsyncSession, identity: Identity, image_id: int) -> ImageEditForm:
    """Return the owner's editable form state for an image."""
    image = await _load_image(session, image_id)
    _ensure_owner(identity, image, "edit")
    return ImageEditForm(image=image, tags=tags_to_string(image.tags))


async def upload_image(
    session: AsyncSession, identity: Identity, payload: ImageCreate, data: bytes
) -> Image:
    image_file = image_service.encode_image_file(data)
    tags = await find_or_create_tags(session, payload.tags)
    return await image_service.create_image(
        session,
        owner_id=identity.user_id,
        title=payload.title,
        description=payload.description,
        image_file=image_file,
        tags=tags,
        created_at=datetime.now(timezone.utc),
    )


async def update_image(
    session: AsyncSession,
    identity: Identity,
    image_id: int,
    payload: ImageUpdate,
    data: bytes | None = None,
) -> Image:
    """Apply an owner's edit; an absent or empty file keeps the stored payload."""
    image = await _load_image(session, image_id)
    _ensure_owner(identity, image, "edit")
    tags = await find_or_create_tags(session, payload.tags)
    image_file = image_service.encode_image_file(data) if data else image.image_file
    return await image_service.update_image(
        session,
        image_id,
        title=payload.title,
        description=payload.description,
        image_file=image_file,
        tags=tags,
        updated_at=datetime.now(timezone.utc),
    )


async def delete_image(session: AsyncSession, identity: Identity, image_id: int) -> None:
    image = await _load_image(session, image_id)
    _ensure_owner(identity, image, "delete")
    await image_service.delete_image(session, image_id)


async def images_for_tag(
    session: AsyncSession, name: str, *, limit: int = 50, offset: int = 0
) -> list[Image]:
    tag = await tag_service.get_tag_by_name(session, name)
    if not tag:
        raise NotFound("Tag", name)
    return await tag_service.list_tag_images(session, tag.id, limit=limit, offset=offset)
