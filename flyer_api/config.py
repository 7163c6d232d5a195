# flyer_api/config.py

"""
Configuration for the flyer backend.

Settings are read from environment variables (and an optional ``.env`` file)
and validated by pydantic. Code reads them through ``get_settings()``; tests
configure the process through environment variables before import.

Typical usage::

    from flyer_api.config import get_settings

    cfg = get_settings()
    engine = create_engine(cfg.DATABASE_URL)
"""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Central configuration registry.
    """

    # --- Application Meta ---
    APP_NAME: str = "flyer-backend"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False
    API_PREFIX: str = "/api"

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # --- Persistence ---
    DATABASE_URL: str = "sqlite:///./flyer_backend.db"
    AUTO_CREATE_TABLES: bool = True

    # --- Security ---
    JWT_SECRET: str = "change-me-for-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_TTL_MINUTES: int = 24 * 60
    PASSWORD_HASH_ROUNDS: int = 12

    # --- HTTP ---
    # Comma-separated list; "*" allows every origin.
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:3001"
    UPLOADS_DIR: str = "uploads"

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    @property
    def cors_origins(self) -> List[str]:
        raw = (self.CORS_ORIGINS or "").strip()
        if not raw or raw == "*":
            return ["*"]
        return [p.strip() for p in raw.split(",") if p.strip()]

    @property
    def api_prefix(self) -> str:
        prefix = (self.API_PREFIX or "").strip().rstrip("/")
        if prefix and not prefix.startswith("/"):
            prefix = "/" + prefix
        return prefix

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()


def get_settings() -> Settings:
    return settings


__all__ = ["AppEnv", "Settings", "settings", "get_settings"]
