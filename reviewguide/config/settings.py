"""Application settings using Pydantic Settings for environment variable management."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REVIEWGUIDE_",
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Observability
    logfire_token: str | None = Field(
        default=None,
        validation_alias="LOGFIRE_TOKEN",
        description="Pydantic Logfire token for observability",
    )

    # Application Settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )

    # Check Configuration
    config_file: str = Field(
        default=".reviewguide.yaml",
        description="Project configuration file, relative to the working directory",
    )
    toc_titles: list[str] = Field(
        default_factory=lambda: ["Table of Contents", "Contents", "TOC"],
        description="Heading texts that introduce a table of contents",
    )
    toc_level: int = Field(
        default=2, ge=1, le=6, description="Heading level listed by the table of contents"
    )
    fail_on: Literal["error", "warning"] = Field(
        default="error", description="Lowest unsuppressed severity that fails a run"
    )
    output_format: Literal["text", "json", "markdown"] = Field(
        default="text", description="Default report format for the CLI"
    )
    max_document_bytes: int = Field(
        default=2_000_000, description="Largest document accepted by the HTTP API"
    )

    # Server Configuration
    # Use a localhost default to avoid binding to all interfaces.
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


# Global settings instance
settings = Settings()
