from imagehoster.models.image import Comment, Image
from imagehoster.models.tagging import ImageTag, Tag
from imagehoster.models.user import User, UserProfile

__all__ = [
    "Comment",
    "Image",
    "ImageTag",
    "Tag",
    "User",
    "UserProfile",
]
"""SQLAlchemy ORM models for the ImageHoster API."""
