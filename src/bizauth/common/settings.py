"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BIZAUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Keys
    key_repository_path: str = Field(
        default="keys.txt",
        description="Path to the '<client> <key>' key repository file",
    )
    key_bytes: int = Field(
        default=32,
        gt=0,
        description="Number of random bytes in a generated client key",
    )

    # Auth
    auth_exempt_paths: tuple[str, ...] = Field(
        default=("/health",),
        description="Paths exempt from signed-URL authentication",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level name",
    )
    log_json: bool = Field(
        default=False,
        description="Emit logs as JSON lines",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
