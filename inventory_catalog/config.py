from typing import Final

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_LOG_DIR
from .domain.constants import DEFAULT_FIRST_ID

_LOG_LEVELS: Final = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env files."""

    # Application configuration
    app_name: str = Field(default="Inventory Catalog", description="Application name")
    version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=True, description="Enable debug mode")

    # Catalog configuration
    first_id: int = Field(
        default=DEFAULT_FIRST_ID,
        ge=1,
        description="First id handed out to new parts and products",
    )

    # Logging configuration
    log_level: str | None = Field(
        default=None, description="Override the log level derived from debug mode"
    )
    log_to_file: bool = Field(
        default=False, description="Force logging to file even in debug mode"
    )
    log_dir: str = Field(default=DEFAULT_LOG_DIR, description="Directory for log files")

    # Telemetry configuration
    enable_telemetry: bool = Field(
        default=False, description="Export OpenTelemetry traces and metrics"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str | None:
        """Normalise the log level and reject unknown names."""
        if v is None:
            return v
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Log level must be one of {', '.join(sorted(_LOG_LEVELS))}"
            )
        return level

    # Pydantic Settings configuration
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

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


# Global settings instance
settings: Final = Settings()
