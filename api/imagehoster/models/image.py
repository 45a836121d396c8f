"""Image records with their owner, ordered tag links, and comments."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from imagehoster.db.base_class import Base
from imagehoster.models.tagging import ImageTag, Tag
from imagehoster.models.user import User, utcnow


class Image(Base):
    """Uploaded image; ``owner_id`` is set once at creation."""
    __tablename__ = "images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    # Base64 text of the uploaded bytes.
    image_file: Mapped[str] = mapped_column(Text, nullable=False)
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    owner: Mapped[User] = relationship(back_populates="images")
    tag_links: Mapped[list[ImageTag]] = relationship(
        back_populates="image",
        cascade="all, delete-orphan",
        order_by=ImageTag.position,
    )
    comments: Mapped[list["Comment"]] = relationship(
        back_populates="image",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )

    @property
    def tags(self) -> list[Tag]:
        """Tags in submitted order; requires ``tag_links`` to be loaded."""
        return [link.tag for link in self.tag_links]


class Comment(Base):
    """Comment left on an image; read-only in the gallery workflow."""
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    image_id: Mapped[int] = mapped_column(
        ForeignKey("images.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user: Mapped[User] = relationship()
    image: Mapped[Image] = relationship(back_populates="comments")
