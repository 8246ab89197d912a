"""Application configuration via Pydantic Settings and ENV."""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONTENT_API_BASE_URL = "https://bible.helloao.org"


class Settings(BaseSettings):
    """App settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = Field(default="local", alias="APP_ENV")
    database_url: str = Field(
        default="sqlite+aiosqlite:///./bible_study.sqlite",
        alias="DATABASE_URL",
    )
    db_echo: bool = Field(default=False, alias="DB_ECHO")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Content provider (translations, book catalog). Plan scopes expand against its books.json.
    content_api_base_url: str = Field(default=DEFAULT_CONTENT_API_BASE_URL, alias="CONTENT_API_BASE_URL")
    content_api_timeout_seconds: float = Field(default=10.0, alias="CONTENT_API_TIMEOUT_SECONDS")
    default_translation: str = Field(default="BSB", alias="DEFAULT_TRANSLATION")
    book_catalog_cache_ttl_seconds: int = Field(default=3600, alias="BOOK_CATALOG_CACHE_TTL_SECONDS")

    # Rate limit: requests per minute per owner (X-User-ID). Needs REDIS_URL.
    redis_url: Optional[str] = Field(default=None, alias="REDIS_URL")
    rate_limit_per_min: int = Field(default=120, alias="RATE_LIMIT_PER_MIN")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
