"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from imagehoster.api.deps import get_optional_identity
from imagehoster.api.router import api_router
from imagehoster.core.config import settings
from imagehoster.core.security import Identity
from imagehoster.utils.redaction import redact_database_url

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger("imagehoster.main")


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info(
        "Starting %s (%s) against %s",
        settings.app_name,
        settings.environment,
        redact_database_url(settings.database_url),
    )
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/health", tags=["internal"])
@app.get(f"{settings.api_prefix}/health", tags=["internal"])
async def health(identity: Identity | None = Depends(get_optional_identity)) -> dict[str, Any]:
    """Return liveness, plus the caller's username when authenticated."""
    body: dict[str, Any] = {"status": "ok"}
    if identity:
        body["user"] = identity.username
    return body
