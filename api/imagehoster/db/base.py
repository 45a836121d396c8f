"""Import all models here so metadata is complete for create_all and Alembic."""

from imagehoster.db.base_class import Base
from imagehoster.models import image, tagging, user  # noqa: F401

__all__ = ["Base"]
