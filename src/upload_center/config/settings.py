"""
Client configuration for upload-center.

Settings are read from ``UPLOAD_CENTER_*`` environment variables and an
optional ``.env`` file.
"""
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import MAX_UPLOAD_SIZE_BYTES


class ClientSettings(BaseSettings):
    """Settings for the backend API client and the upload workflow."""

    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_CENTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Endpoints
    api_url: str = Field(default="http://localhost:3000", description="Upload Center backend base URL")
    user_api_url: str = Field(default="http://localhost:9521", description="Identity endpoint URL")
    environment: str = Field(default="local", description="Deployment environment name")

    # Transport
    request_timeout: float = Field(default=30.0, gt=0, description="Backend request timeout in seconds")
    identity_timeout: float = Field(default=10.0, gt=0, description="Identity request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    # Upload workflow
    max_file_size: int = Field(default=MAX_UPLOAD_SIZE_BYTES, gt=0, description="Largest accepted file in bytes")
    progress_interval: float = Field(default=0.2, gt=0, description="Seconds between synthesized progress ticks")
    progress_step: int = Field(default=10, ge=1, le=100, description="Percent added per progress tick")
    progress_ceiling: int = Field(default=90, ge=0, le=99, description="Highest synthesized percentage")

    # Downloads
    download_dir: Path = Field(default=Path("."), description="Directory downloads are saved into")

    @field_validator("api_url", "user_api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("URL must not be empty")
        return value.rstrip("/")

    @property
    def is_production(self) -> bool:
        """Check if running against the production environment."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> ClientSettings:
    """Return cached client settings instance."""
    return ClientSettings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""
    get_settings.cache_clear()
