"""Tag lookup, creation, and explicit tag/image join queries."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from imagehoster.core.errors import TagConflict, TransactionFailure
from imagehoster.db.session import commit_or_rollback
from imagehoster.models.image import Image
from imagehoster.models.tagging import ImageTag, Tag

logger = logging.getLogger("imagehoster.services.tags")


async def get_tag_by_name(session: AsyncSession, name: str) -> Tag | None:
    """Exact, case-sensitive lookup; None when no tag has that name."""
    result = await session.execute(select(Tag).where(Tag.name == name))
    return result.scalar_one_or_none()


async def create_tag(session: AsyncSession, name: str) -> Tag:
    """Insert and commit a new tag.

    The insert runs inside a savepoint so a unique-name violation from a racing
    writer rolls back only this row; ``TagConflict`` tells the caller to re-read.
    """
    tag = Tag(name=name)
    try:
        async with session.begin_nested():
            session.add(tag)
    except IntegrityError as exc:
        logger.info("Tag %r already exists; deferring to the stored row", name)
        raise TagConflict(name) from exc
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.warning("Rolled back create tag: %s", exc.__class__.__name__)
        raise TransactionFailure("Could not create tag") from exc
    await commit_or_rollback(session, "create tag")
    return tag


async def list_tags(session: AsyncSession) -> list[Tag]:
    """List every tag sorted by name."""
    result = await session.execute(select(Tag).order_by(Tag.name.asc()))
    return list(result.scalars().all())


async def list_image_tags(session: AsyncSession, image_id: int) -> list[Tag]:
    """List tags linked to an image in their submitted order."""
    stmt = (
        select(Tag)
        .join(ImageTag, ImageTag.tag_id == Tag.id)
        .where(ImageTag.image_id == image_id)
        .order_by(ImageTag.position.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_tag_images(
    session: AsyncSession, tag_id: int, *, limit: int = 50, offset: int = 0
) -> list[Image]:
    """Page through images linked to a tag, oldest first."""
    stmt = (
        select(Image)
        .join(ImageTag, ImageTag.image_id == Image.id)
        .where(ImageTag.tag_id == tag_id)
        .options(
            selectinload(Image.owner),
            selectinload(Image.tag_links).selectinload(ImageTag.tag),
        )
        .order_by(Image.id.asc())
        .offset(offset)
        .limit(limit)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())
