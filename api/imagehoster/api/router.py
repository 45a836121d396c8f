"""API router composition for all route groups."""

from fastapi import APIRouter

from .routes import auth, images, tags, users

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, tags=["users"])
api_router.include_router(images.router, tags=["images"])
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
