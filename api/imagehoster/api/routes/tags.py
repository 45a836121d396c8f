from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from imagehoster.api.deps import get_db
from imagehoster.core.errors import NotFound
from imagehoster.schema.image import ImageRead
from imagehoster.schema.tag import TagRead
from imagehoster.services import gallery_service, tag_service

router = APIRouter()


@router.get("", response_model=list[TagRead])
async def list_tags(session: AsyncSession = Depends(get_db)) -> list[TagRead]:
    tags = await tag_service.list_tags(session)
    return [TagRead.model_validate(tag) for tag in tags]


@router.get("/{name}/images", response_model=list[ImageRead])
async def list_tag_images(
    name: str,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_db),
) -> list[ImageRead]:
    try:
        images = await gallery_service.images_for_tag(session, name, limit=limit, offset=offset)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return [ImageRead.model_validate(image) for image in images]
