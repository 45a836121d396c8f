"""Image endpoints: listing, detail, upload, owner-gated edit and delete."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from imagehoster.api.deps import get_current_identity, get_db
from imagehoster.core.config import settings
from imagehoster.core.errors import NotFound, OwnershipViolation, TransactionFailure
from imagehoster.core.security import Identity
from imagehoster.schema.image import (
    ImageCreate,
    ImageDetailRead,
    ImageEditRead,
    ImageRead,
    ImageUpdate,
    OwnershipErrorRead,
)
from imagehoster.services import gallery_service, image_service

router = APIRouter()


def _bind_form(schema: type[BaseModel], **fields: Any) -> Any:
    try:
        return schema.model_validate(fields)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc


async def _read_upload(file: UploadFile | None) -> bytes | None:
    if file is None:
        return None
    data = await file.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="Image file too large")
    return data


def _not_found(exc: NotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _forbidden(exc: OwnershipViolation) -> HTTPException:
    body = OwnershipErrorRead(error=exc.message, detail=ImageDetailRead.model_validate(exc.detail))
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=body.model_dump(mode="json"))


def _failed(exc: TransactionFailure) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("/images", response_model=list[ImageRead])
async def list_images(session: AsyncSession = Depends(get_db)) -> list[ImageRead]:
    images = await gallery_service.list_images(session)
    return [ImageRead.model_validate(image) for image in images]


@router.get("/images/{image_id}", response_model=ImageDetailRead)
async def read_image(image_id: int, session: AsyncSession = Depends(get_db)) -> ImageDetailRead:
    try:
        detail = await gallery_service.get_image_detail(session, image_id)
    except NotFound as exc:
        raise _not_found(exc) from exc
    return ImageDetailRead.model_validate(detail)


@router.get("/images/{image_id}/file")
async def read_image_file(image_id: int, session: AsyncSession = Depends(get_db)) -> Response:
    image = await image_service.get_image(session, image_id)
    if not image:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    return Response(content=image_service.decode_image_file(image.image_file), media_type="application/octet-stream")


@router.post("/images", response_model=ImageRead, status_code=status.HTTP_201_CREATED)
async def upload_image(
    title: str = Form(...),
    tags: str = Form(""),
    description: str | None = Form(None),
    file: UploadFile = File(...),
    session: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ImageRead:
    payload = _bind_form(ImageCreate, title=title, description=description, tags=tags)
    data = await _read_upload(file)
    try:
        image = await gallery_service.upload_image(session, identity, payload, data)
    except TransactionFailure as exc:
        raise _failed(exc) from exc
    return ImageRead.model_validate(image)


@router.get("/images/{image_id}/edit", response_model=ImageEditRead)
async def edit_image_form(
    image_id: int,
    session: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ImageEditRead:
    try:
        form = await gallery_service.edit_image(session, identity, image_id)
    except NotFound as exc:
        raise _not_found(exc) from exc
    except OwnershipViolation as exc:
        raise _forbidden(exc) from exc
    return ImageEditRead.model_validate(form)


@router.put("/images/{image_id}", response_model=ImageRead)
async def update_image(
    image_id: int,
    title: str = Form(...),
    tags: str = Form(""),
    description: str | None = Form(None),
    file: UploadFile | None = File(None),
    session: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ImageRead:
    payload = _bind_form(ImageUpdate, title=title, description=description, tags=tags)
    data = await _read_upload(file)
    try:
        image = await gallery_service.update_image(session, identity, image_id, payload, data)
    except NotFound as exc:
        raise _not_found(exc) from exc
    except OwnershipViolation as exc:
        raise _forbidden(exc) from exc
    except TransactionFailure as exc:
        raise _failed(exc) from exc
    return ImageRead.model_validate(image)


@router.delete(
    "/images/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    response_model=None,
)
async def delete_image(
    image_id: int,
    session: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> None:
    try:
        await gallery_service.delete_image(session, identity, image_id)
    except NotFound as exc:
        raise _not_found(exc) from exc
    except OwnershipViolation as exc:
        raise _forbidden(exc) from exc
    except TransactionFailure as exc:
        raise _failed(exc) from exc
