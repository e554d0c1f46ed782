"""Configuration management for Runpod Assistant."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

DEFAULT_GRAPHQL_URL = "https://api.runpod.io/graphql"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="",
    )

    # RunPod
    runpod_api_key: SecretStr | None = Field(
        default=None, description="RunPod API key (read by `validate`, never logged)"
    )
    runpod_graphql_url: str = Field(
        default=DEFAULT_GRAPHQL_URL,
        description="RunPod GraphQL endpoint used for credential validation",
    )

    # Global configuration
    config_dir: Path = Field(
        default=Path.home() / ".config" / "runpod-assistant",
        description="Directory holding the global config and auth files",
    )

    # Application
    environment: str = Field(default="production", description="Environment name")
    log_level: str = Field(default="WARNING", description="Logging level")

    # Logging Configuration
    log_to_file: bool = Field(default=False, description="Enable file-based logging")
    log_directory: str = Field(default="logs", description="Directory for log files")
    log_file_max_bytes: int = Field(
        default=10485760,  # 10MB
        description="Max size per log file before rotation",
    )
    log_file_backup_count: int = Field(
        default=3, description="Number of rotated log files to keep"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalise the log level name."""
        level = v.strip().upper()
        if level not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_VALID_LOG_LEVELS)}, got '{v}'")
        return level

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def log_file_path(self) -> str:
        """Get the full log file path."""
        return f"{self.log_directory}/runpod_assistant.log"

    @property
    def global_config_path(self) -> Path:
        """Path of the global config file that holds the default model."""
        return self.config_dir / "config.json"

    @property
    def auth_path(self) -> Path:
        """Path of the credential store."""
        return self.config_dir / "auth.json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
