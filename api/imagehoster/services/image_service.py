"""Image persistence: payload codec, eager loading, and tag link upkeep.

Invariants:
- ``owner_id`` is written on create only; updates never touch it.
- Tag links keep submitted order through ``ImageTag.position``.
- Deleting an image drops its links and comments, never its tags.
"""

from __future__ import annotations

import base64
import binascii
import logging
from datetime import datetime, timezone
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from imagehoster.core.errors import NotFound
from imagehoster.db.session import commit_or_rollback
from imagehoster.models.image import Image
from imagehoster.models.tagging import ImageTag, Tag

logger = logging.getLogger("imagehoster.services.images")

IMAGE_LOAD_OPTIONS = (
    selectinload(Image.owner),
    selectinload(Image.tag_links).selectinload(ImageTag.tag),
    selectinload(Image.comments),
)


def encode_image_file(data: bytes) -> str:
    """Encode raw upload bytes into the stored base64 text."""
    return base64.b64encode(data).decode("ascii")


def decode_image_file(value: str) -> bytes:
    """Decode stored base64 text back into the original bytes."""
    try:
        return base64.b64decode(value.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise ValueError("Stored image payload is not valid base64") from exc


def _sync_tag_links(image: Image, tags: Iterable[Tag]) -> None:
    # Reuse links for tags that stay so the (image_id, tag_id) constraint never
    # sees a delete and re-insert of the same pair in one flush.
    existing = {link.tag_id: link for link in image.tag_links}
    links: list[ImageTag] = []
    seen: set[int] = set()
    for tag in tags:
        if tag.id in seen:
            continue
        seen.add(tag.id)
        link = existing.pop(tag.id, None) or ImageTag(tag=tag)
        link.position = len(links)
        links.append(link)
    image.tag_links = links


async def get_image(session: AsyncSession, image_id: int) -> Image | None:
    stmt = (
        select(Image)
        .where(Image.id == image_id)
        .options(*IMAGE_LOAD_OPTIONS)
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def list_images(session: AsyncSession) -> list[Image]:
    """List every image in insertion order."""
    result = await session.execute(select(Image).options(*IMAGE_LOAD_OPTIONS).order_by(Image.id.asc()))
    return list(result.scalars().all())


async def create_image(
    session: AsyncSession,
    *,
    owner_id: int,
    title: str,
    description: str | None,
    image_file: str,
    tags: Iterable[Tag],
    created_at: datetime | None = None,
) -> Image:
    stamp = created_at or datetime.now(timezone.utc)
    image = Image(
        owner_id=owner_id,
        title=title,
        description=description,
        image_file=image_file,
        created_at=stamp,
        updated_at=stamp,
    )
    _sync_tag_links(image, tags)
    session.add(image)
    await commit_or_rollback(session, "upload image")
    logger.info("Stored image %s for owner %s", image.id, owner_id)
    return await get_image(session, image.id)


async def update_image(
    session: AsyncSession,
    image_id: int,
    *,
    title: str,
    description: str | None,
    image_file: str,
    tags: Iterable[Tag],
    updated_at: datetime | None = None,
) -> Image:
    """Replace the mutable fields of a stored image. Ownership is checked upstream."""
    image = await get_image(session, image_id)
    if not image:
        raise NotFound("Image", image_id)
    image.title = title
    image.description = description
    image.image_file = image_file
    image.updated_at = updated_at or datetime.now(timezone.utc)
    _sync_tag_links(image, tags)
    await commit_or_rollback(session, "update image")
    return await get_image(session, image_id)


async def delete_image(session: AsyncSession, image_id: int) -> None:
    image = await get_image(session, image_id)
    if not image:
        raise NotFound("Image", image_id)
    await session.delete(image)
    await commit_or_rollback(session, "delete image")
    logger.info("Deleted image %s", image_id)
