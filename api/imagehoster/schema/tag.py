"""Tag response schemas."""

from __future__ import annotations

from imagehoster.schema.base import ORMModel


class TagRead(ORMModel):
    id: int
    name: str
