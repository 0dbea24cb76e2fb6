"""Application configuration loaded from environment variables."""
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central place for strongly typed application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )

    app_name: str = Field(default="Rental Inventory Service")
    environment: Literal["development", "staging", "production"] = Field(default="development")
    log_level: str = Field(default="INFO")

    database_url: str = Field(validation_alias="DATABASE_URL")

    storage_url: str = Field(default="http://localhost:54321", validation_alias="SUPABASE_URL")
    storage_key: str = Field(default="", validation_alias="SUPABASE_SERVICE_KEY")
    storage_bucket: str = Field(default="products")
    storage_timeout_seconds: float = Field(default=10.0)

    max_image_size_mb: int = Field(default=5)
    allowed_image_types: list[str] = Field(default=["image/jpeg", "image/png", "image/webp"])
    upload_max_attempts: int = Field(default=3, ge=1)
    upload_retry_delay_seconds: float = Field(default=1.0, ge=0)

    @model_validator(mode="after")
    def convert_database_url(self) -> "Settings":
        """Convert postgresql+psycopg:// (psycopg3) to postgresql:// (psycopg2)."""
        if self.database_url.startswith("postgresql+psycopg://"):
            self.database_url = self.database_url.replace("postgresql+psycopg://", "postgresql://")
        return self

    @property
    def max_image_size_bytes(self) -> int:
        return self.max_image_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance so downstream code can import directly."""

    return Settings()
