"""Lightweight configuration for the LegacyForge service."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from legacyforge.schemas.board import BoardVersion

BUNDLED_CONTENT_DIR = Path(__file__).resolve().parent / "content"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="LEGACYFORGE_", env_file=".env", env_file_encoding="utf-8"
    )

    content_dir: Path = Field(
        default=BUNDLED_CONTENT_DIR,
        description="Root of the content store (rules, pack modifiers, board topologies)",
    )
    database_url: str = Field(
        default="sqlite:///legacyforge.db", description="SQLAlchemy URL for campaign unlocks"
    )
    database_echo: bool = Field(default=False, description="Echo SQL statements")
    log_level: str = Field(default="INFO", description="Root logging level")
    default_board_version: BoardVersion = Field(
        default=BoardVersion.ORIGINAL, description="Board used when a request names none"
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
