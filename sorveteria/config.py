from typing import Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_API_PREFIX,
    DEFAULT_PORT,
    DEFAULT_TIMEZONE,
    MIN_API_TOKEN_LENGTH,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env files."""

    # Server configuration
    debug: bool = Field(default=True, description="Enable debug mode")
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="Server port")

    # Application configuration
    app_name: str = Field(default="Sorveteria", description="Application name")
    version: str = Field(default="0.1.0", description="Application version")
    api_prefix: str = Field(
        default=DEFAULT_API_PREFIX, description="Path prefix of the internal API"
    )
    timezone: str = Field(
        default=DEFAULT_TIMEZONE,
        description="IANA time zone used to decide the shop's operating status",
    )

    # Security configuration
    internal_api_token: str | None = Field(
        default=None,
        min_length=MIN_API_TOKEN_LENGTH,
        description="Bearer token required by the internal API (open when unset)",
    )

    # Logging configuration
    log_to_file: bool = Field(
        default=False, description="Force logging to file even in debug mode"
    )

    # Pydantic Settings configuration
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        """Normalize the prefix to a leading slash and no trailing slash."""
        v = "/" + v.strip().strip("/")
        if v == "/":
            raise ValueError("API prefix cannot be empty")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.debug

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.debug

    @computed_field  # type: ignore[prop-decorator]
    @property
    def auth_enabled(self) -> bool:
        """Whether the internal API requires a bearer token."""
        return self.internal_api_token is not None


# Global settings instance
settings: Final = Settings()
