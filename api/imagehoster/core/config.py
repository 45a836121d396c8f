"""Application settings parsed from environment variables and defaults."""

import json
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]
DEVELOPMENT_JWT_SECRET = "imagehoster-dev-secret"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = "ImageHoster API"
    environment: str = "development"
    api_prefix: str = "/api"

    database_url: str = "sqlite+aiosqlite:///./imagehoster.db"
    test_database_url: Optional[str] = None

    access_token_expires_minutes: int = 60 * 12
    jwt_secret_key: str = DEVELOPMENT_JWT_SECRET
    jwt_algorithm: str = "HS256"

    log_level: str = "INFO"
    cors_origins: list[str] | str = Field(default_factory=lambda: DEFAULT_CORS_ORIGINS.copy())
    max_upload_bytes: int = 10 * 1024 * 1024

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_cors_origins(cls, value: str | list[str] | None) -> list[str]:
        """Normalize CORS origins from JSON, CSV, or list inputs."""
        if isinstance(value, list):
            cleaned = [origin.strip() for origin in value if isinstance(origin, str) and origin.strip()]
            return cleaned or DEFAULT_CORS_ORIGINS.copy()
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return DEFAULT_CORS_ORIGINS.copy()
            try:
                parsed = json.loads(stripped)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                cleaned = [str(origin).strip() for origin in parsed if str(origin).strip()]
                if cleaned:
                    return cleaned
            origins = [origin.strip() for origin in stripped.split(",") if origin.strip()]
            if origins:
                return origins
        return DEFAULT_CORS_ORIGINS.copy()

    @model_validator(mode="after")
    def _validate_jwt_secret(self) -> "Settings":
        """Refuse the development signing key outside development."""
        if self.environment.lower() == "production" and self.jwt_secret_key == DEVELOPMENT_JWT_SECRET:
            msg = "JWT_SECRET_KEY must be set to a private value in production"
            raise ValueError(msg)
        return self

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings to avoid re-parsing environment variables."""
    return Settings()


settings = get_settings()
