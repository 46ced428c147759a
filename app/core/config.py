# app/core/config.py
from __future__ import annotations

"""
# Reelbase — Centralized Configuration (Pydantic v2)

Single `settings` object with strongly-typed, environment-driven config.

## Goals
- Safe defaults for local/dev; explicit where prod needs secrets.
- One place that knows how to build the database DSN (Postgres parts or a
  full `DATABASE_URL` override, e.g. SQLite for local runs).
- CSV → list helpers for CORS.

## Usage
    from app.core.config import settings
"""

import logging
from typing import Annotated, List, Literal, Optional

from dotenv import load_dotenv
from pydantic import AnyHttpUrl, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

log = logging.getLogger(__name__)
load_dotenv()  # harmless in prod; convenient in dev


# ─────────────────────────────────────────────────────────────
# Small helpers
# ─────────────────────────────────────────────────────────────
def _split_csv(v: str | None) -> list[str]:
    """Split a comma-separated string into a trimmed list (empty-safe)."""
    if not v:
        return []
    return [s.strip() for s in str(v).split(",") if s and s.strip()]


def _derive_async_url(url: str) -> str:
    """Map a sync DSN onto its async driver (asyncpg / aiosqlite)."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://") and "+aiosqlite" not in url:
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


# ─────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────
class Settings(BaseSettings):
    """
    Global application settings sourced from environment.

    Security:
        - `JWT_SECRET_KEY` is required; tokens live `ACCESS_TOKEN_EXPIRE_DAYS`.
        - Issuer/audience claims are only emitted and enforced when configured.

    Notes:
        - `DATABASE_URL` wins over the `POSTGRES_*` parts when set.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # don't crash on unknown keys
    )

    # ── App meta ──────────────────────────────────────────────
    PROJECT_NAME: str = "Reelbase API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    ENV: Literal["development", "staging", "production", "test"] = "development"
    ENABLE_DOCS: bool = True

    # ── Security / JWT ────────────────────────────────────────
    JWT_SECRET_KEY: SecretStr = Field(...)
    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = Field(7, ge=1, le=90)
    JWT_ISSUER: Optional[str] = None
    JWT_AUDIENCE: Optional[str] = None
    PASSWORD_MIN_LENGTH: int = Field(6, ge=1, le=128)

    # ── Database ──────────────────────────────────────────────
    DATABASE_URL_OVERRIDE: Optional[str] = Field(None, alias="DATABASE_URL")
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: SecretStr = SecretStr("postgres")
    POSTGRES_DB: str = "reelbase"
    DB_ECHO: bool = False

    # ── CORS ──────────────────────────────────────────────────
    # CSV in env; NoDecode skips the JSON pre-parse.
    BACKEND_CORS_ORIGINS: Annotated[List[AnyHttpUrl], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"]
    )

    # ── Catalog / reviews ─────────────────────────────────────
    MOVIES_MAX_PAGE_SIZE: int = Field(100, ge=1, le=500)
    REVIEWS_DEFAULT_LIMIT: int = Field(10, ge=1, le=50)
    REVIEWS_MAX_LIMIT: int = Field(50, ge=1, le=200)
    REVIEW_MIN_LENGTH: int = 3
    REVIEW_MAX_LENGTH: int = 2000

    # ── TMDB (sync job) ───────────────────────────────────────
    TMDB_API_KEY: Optional[SecretStr] = None
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_LANGUAGE: str = "en-US"
    TMDB_TIMEOUT_SECONDS: float = Field(10.0, gt=0, le=120)

    # ── Validators / normalizers ──────────────────────────────
    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def _assemble_cors_origins(cls, v: str | List[str]):
        if isinstance(v, str):
            return _split_csv(v)
        return v

    @field_validator("TMDB_BASE_URL", mode="before")
    @classmethod
    def _strip_tmdb_base(cls, v: str) -> str:
        return str(v or "").strip().rstrip("/")

    # ── Derived / convenience properties ─────────────────────
    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"

    @property
    def DATABASE_URL(self) -> str:
        """Sync DSN."""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def ASYNC_DATABASE_URL(self) -> str:
        """Async SQLAlchemy DSN."""
        return _derive_async_url(self.DATABASE_URL)

    @property
    def cors_origins_list(self) -> List[str]:
        return [str(u).rstrip("/") for u in (self.BACKEND_CORS_ORIGINS or [])]


# Singleton instance
settings = Settings()
