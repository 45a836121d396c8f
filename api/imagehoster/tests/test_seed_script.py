from __future__ import annotations

import pytest

from imagehoster.scripts import seed as seed_script
from imagehoster.services import gallery_service, image_service, tag_service


@pytest.mark.asyncio
async def test_seed_populates_demo_gallery(session):
    await seed_script.seed(session=session)

    images = await image_service.list_images(session)
    assert [image.title for image in images] == [definition.title for definition in seed_script.SEED_IMAGES]
    assert all(image.owner.username == seed_script.DEMO_USERNAME for image in images)
    assert image_service.decode_image_file(images[0].image_file) == seed_script.PIXEL_PNG
    assert gallery_service.tags_to_string(images[1].tags) == "forest,fog,sunrise"


@pytest.mark.asyncio
async def test_seed_is_idempotent(session):
    await seed_script.seed(session=session)
    await seed_script.seed(session=session)

    assert len(await image_service.list_images(session)) == len(seed_script.SEED_IMAGES)
    assert [tag.name for tag in await tag_service.list_tags(session)] == ["fog", "forest", "harbor", "sunrise"]
