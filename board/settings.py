"""Application settings via Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # App
    app_name: str = "Bulletin Board"
    app_version: str = "0.1.0"
    debug: bool = Field(
        default=False,
        validation_alias=AliasChoices("DEBUG", "APP_DEBUG"),
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Storage
    store_backend: Literal["redis", "memory"] = Field(
        default="redis",
        description="Key-value backend for posts. 'memory' keeps posts in-process only.",
    )
    redis_url: str = "redis://localhost:6379/0"

    # Presentation
    template_dir: Path = DEFAULT_TEMPLATE_DIR
    default_page_size: int = Field(default=10, ge=1, le=100)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
