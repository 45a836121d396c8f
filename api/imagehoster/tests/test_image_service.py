"""Image store tests for the payload codec, persistence, and rollback."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from imagehoster.core.errors import NotFound, TransactionFailure
from imagehoster.models.image import Comment
from imagehoster.models.tagging import ImageTag
from imagehoster.services import image_service, tag_service
from imagehoster.tests.utils import make_user

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\xff\x00binary\x00tail"


def test_codec_round_trips_exact_bytes():
    encoded = image_service.encode_image_file(PNG_BYTES)

    assert isinstance(encoded, str)
    assert image_service.decode_image_file(encoded) == PNG_BYTES
    assert image_service.decode_image_file(image_service.encode_image_file(b"")) == b""


def test_decode_rejects_corrupt_payload():
    with pytest.raises(ValueError):
        image_service.decode_image_file("not base64!!")


@pytest.mark.asyncio
async def test_create_and_fetch_image(session):
    owner, _ = await make_user(session)
    tag = await tag_service.create_tag(session, "night")

    created = await image_service.create_image(
        session,
        owner_id=owner.id,
        title="Night sky",
        description="Long exposure",
        image_file=image_service.encode_image_file(PNG_BYTES),
        tags=[tag],
    )
    fetched = await image_service.get_image(session, created.id)

    assert fetched.owner.username == owner.username
    assert [t.name for t in fetched.tags] == ["night"]
    assert image_service.decode_image_file(fetched.image_file) == PNG_BYTES
    assert fetched.comments == []


@pytest.mark.asyncio
async def test_list_images_in_insertion_order(session):
    owner, _ = await make_user(session)
    ids = []
    for title in ("first", "second", "third"):
        image = await image_service.create_image(
            session, owner_id=owner.id, title=title, description=None, image_file="", tags=[]
        )
        ids.append(image.id)

    assert [image.id for image in await image_service.list_images(session)] == ids


@pytest.mark.asyncio
async def test_update_replaces_fields_and_keeps_owner(session):
    owner, _ = await make_user(session)
    red = await tag_service.create_tag(session, "red")
    blue = await tag_service.create_tag(session, "blue")
    green = await tag_service.create_tag(session, "green")
    image = await image_service.create_image(
        session, owner_id=owner.id, title="Before", description=None, image_file="YQ==", tags=[red, blue]
    )

    updated = await image_service.update_image(
        session, image.id, title="After", description="new", image_file="Yg==", tags=[blue, green, blue]
    )

    assert updated.owner_id == owner.id
    assert updated.title == "After"
    assert updated.image_file == "Yg=="
    assert [t.name for t in updated.tags] == ["blue", "green"]
    links = await session.execute(select(func.count()).select_from(ImageTag).where(ImageTag.image_id == image.id))
    assert links.scalar_one() == 2


@pytest.mark.asyncio
async def test_update_unknown_image_raises_not_found(session):
    with pytest.raises(NotFound):
        await image_service.update_image(session, 999, title="x", description=None, image_file="", tags=[])


@pytest.mark.asyncio
async def test_delete_drops_links_and_comments_but_keeps_tags(session):
    owner, _ = await make_user(session)
    tag = await tag_service.create_tag(session, "lonely")
    image = await image_service.create_image(
        session, owner_id=owner.id, title="Gone", description=None, image_file="", tags=[tag]
    )
    session.add(Comment(text="nice", user_id=owner.id, image_id=image.id))
    await session.commit()

    await image_service.delete_image(session, image.id)

    assert await image_service.get_image(session, image.id) is None
    assert await tag_service.get_tag_by_name(session, "lonely") is not None
    remaining_links = await session.execute(select(func.count()).select_from(ImageTag))
    remaining_comments = await session.execute(select(func.count()).select_from(Comment))
    assert remaining_links.scalar_one() == 0
    assert remaining_comments.scalar_one() == 0


@pytest.mark.asyncio
async def test_failed_commit_rolls_back_entirely(session, monkeypatch):
    owner, _ = await make_user(session)
    original_commit = session.commit

    async def _failing_commit():
        await session.flush()
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(session, "commit", _failing_commit)
    with pytest.raises(TransactionFailure):
        await image_service.create_image(
            session, owner_id=owner.id, title="Lost", description=None, image_file="", tags=[]
        )
    monkeypatch.setattr(session, "commit", original_commit)

    assert await image_service.list_images(session) == []
