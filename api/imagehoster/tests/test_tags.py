"""Tag store tests for lookup, uniqueness, and explicit join queries."""

from __future__ import annotations

import pytest
from sqlalchemy import Text
from sqlalchemy.exc import DataError

from imagehoster.core.errors import TagConflict, TransactionFailure
from imagehoster.models.tagging import Tag
from imagehoster.schema.image import ImageCreate
from imagehoster.services import gallery_service, tag_service
from imagehoster.tests.utils import make_user


@pytest.mark.asyncio
async def test_lookup_is_exact_and_case_sensitive(session):
    created = await tag_service.create_tag(session, "Cat")

    assert (await tag_service.get_tag_by_name(session, "Cat")).id == created.id
    assert await tag_service.get_tag_by_name(session, "cat") is None
    assert await tag_service.get_tag_by_name(session, "Cat ") is None


@pytest.mark.asyncio
async def test_duplicate_create_raises_conflict_without_partial_row(session):
    original = await tag_service.create_tag(session, "harbor")

    with pytest.raises(TagConflict):
        await tag_service.create_tag(session, "harbor")

    tags = await tag_service.list_tags(session)
    assert [tag.id for tag in tags] == [original.id]


@pytest.mark.asyncio
async def test_list_tags_sorted_by_name(session):
    for name in ("mountain", "beach", "forest"):
        await tag_service.create_tag(session, name)

    assert [tag.name for tag in await tag_service.list_tags(session)] == ["beach", "forest", "mountain"]


@pytest.mark.asyncio
async def test_image_tags_keep_submitted_order(session):
    _, identity = await make_user(session)
    image = await gallery_service.upload_image(
        session, identity, ImageCreate(title="Order", tags="zeta, alpha, mid"), b"data"
    )

    tags = await tag_service.list_image_tags(session, image.id)
    assert [tag.name for tag in tags] == ["zeta", "alpha", "mid"]


@pytest.mark.asyncio
async def test_tag_images_are_paginated(session):
    _, identity = await make_user(session)
    uploaded = []
    for index in range(3):
        uploaded.append(
            await gallery_service.upload_image(
                session, identity, ImageCreate(title=f"Shared {index}", tags="shared"), b"x"
            )
        )
    await gallery_service.upload_image(session, identity, ImageCreate(title="Other", tags="other"), b"y")
    shared = await tag_service.get_tag_by_name(session, "shared")

    first_page = await tag_service.list_tag_images(session, shared.id, limit=2, offset=0)
    second_page = await tag_service.list_tag_images(session, shared.id, limit=2, offset=2)

    assert [image.id for image in first_page] == [uploaded[0].id, uploaded[1].id]
    assert [image.id for image in second_page] == [uploaded[2].id]


@pytest.mark.asyncio
async def test_tag_names_have_no_length_cap(session):
    _, identity = await make_user(session)
    long_name = "t" * 65
    longer_name = "panorama-" * 30

    image = await gallery_service.upload_image(
        session, identity, ImageCreate(title="Long", tags=f"{long_name}, {longer_name}"), b"x"
    )

    assert isinstance(Tag.__table__.c.name.type, Text)
    assert [tag.name for tag in image.tags] == [long_name, longer_name]
    assert (await tag_service.get_tag_by_name(session, long_name)).id == image.tags[0].id


@pytest.mark.asyncio
async def test_rejected_tag_insert_surfaces_as_transaction_failure(session, monkeypatch):
    original_flush = session.sync_session.flush

    def _rejecting_flush(*args, **kwargs):
        if session.sync_session.new:
            raise DataError("INSERT INTO tags", {}, Exception("value too long for type"))
        return original_flush(*args, **kwargs)

    monkeypatch.setattr(session.sync_session, "flush", _rejecting_flush)
    with pytest.raises(TransactionFailure):
        await gallery_service.find_or_create_tag(session, "rejected")
    monkeypatch.setattr(session.sync_session, "flush", original_flush)

    assert await tag_service.get_tag_by_name(session, "rejected") is None
    assert await tag_service.list_tags(session) == []
