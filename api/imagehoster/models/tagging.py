from __future__ import annotations

import typing

from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from imagehoster.db.base_class import Base

if typing.TYPE_CHECKING:  # pragma: no cover
    from imagehoster.models.image import Image


class Tag(Base):
    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("name", name="uq_tags_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    # Traversal from a tag to its images goes through tag_service.list_tag_images.
    image_links: Mapped[list["ImageTag"]] = relationship(back_populates="tag", lazy="raise")

    def __repr__(self) -> str:
        return f"<Tag {self.name}>"


class ImageTag(Base):
    __tablename__ = "image_tags"
    __table_args__ = (
        UniqueConstraint("image_id", "tag_id", name="uq_image_tag"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    image_id: Mapped[int] = mapped_column(
        ForeignKey("images.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tag_id: Mapped[int] = mapped_column(
        ForeignKey("tags.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    tag: Mapped[Tag] = relationship(back_populates="image_links")
    image: Mapped["Image"] = relationship(back_populates="tag_links")
