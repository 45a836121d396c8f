"""Seed script for demo data in local/dev environments."""

from __future__ import annotations

import asyncio
import base64
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from imagehoster.core.security import Identity
from imagehoster.db.session import async_session
from imagehoster.models.image import Image
from imagehoster.schema.image import ImageCreate
from imagehoster.schema.user import UserCreate, UserProfileCreate
from imagehoster.services import gallery_service, user_service

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "changeme-123"
DEMO_FULL_NAME = "Demo User"

# 1x1 transparent PNG.
PIXEL_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@dataclass(frozen=True)
class SeedImageDefinition:
    title: str
    description: str
    tags: str


SEED_IMAGES: tuple[SeedImageDefinition, ...] = (
    SeedImageDefinition(title="Harbor at dawn", description="First light over the docks.", tags="harbor, sunrise"),
    SeedImageDefinition(title="Quiet forest", description="Moss and fog.", tags="forest, fog, sunrise"),
)


async def seed(session: AsyncSession | None = None) -> None:
    """Seed demo data into the database."""
    if session is None:
        async with async_session() as managed_session:
            await _seed_session(managed_session)
    else:
        await _seed_session(session)


async def _seed_session(session: AsyncSession) -> None:
    user = await user_service.get_user_by_username(session, DEMO_USERNAME)
    if not user:
        user = await gallery_service.register_user(
            session,
            UserCreate(
                username=DEMO_USERNAME,
                password=DEMO_PASSWORD,
                profile=UserProfileCreate(full_name=DEMO_FULL_NAME),
            ),
        )
    identity = Identity(user_id=user.id, username=user.username)

    result = await session.execute(select(Image.title).where(Image.owner_id == user.id))
    existing_titles = set(result.scalars().all())
    for definition in SEED_IMAGES:
        if definition.title in existing_titles:
            continue
        await gallery_service.upload_image(
            session,
            identity,
            ImageCreate(title=definition.title, description=definition.description, tags=definition.tags),
            PIXEL_PNG,
        )

    print(f"Seed complete - log in as {DEMO_USERNAME!r}")


def main() -> None:
    """CLI entrypoint for seeding demo data."""
    asyncio.run(seed())


if __name__ == "__main__":
    main()
