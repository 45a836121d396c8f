from . import gallery_service, image_service, tag_service, user_service

__all__ = [
    "gallery_service",
    "image_service",
    "tag_service",
    "user_service",
]
"""Service-layer helpers for API operations."""
