"""
Application configuration.

Values are read from the environment (prefix ``MOODJOURNAL_``) or a local
``.env`` file.
"""
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app import __version__


class Settings(BaseSettings):
    """Runtime settings for the API, the CLI and the backup engine."""

    model_config = SettingsConfigDict(
        env_prefix="MOODJOURNAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Mood Journal", description="Display name written into backups")
    app_version: str = Field(default=__version__)
    environment: Literal["development", "production", "testing"] = "development"
    api_v1_prefix: str = "/api/v1"

    # Database
    database_url: str = Field(default="sqlite:///./moodjournal.db")
    database_echo: bool = False

    # Backups
    backup_dir: str = Field(default="./downloads", description="Where exported backups are written")
    backup_cleanup_days: int = Field(default=30, description="Retention for backups in backup_dir (0 disables cleanup)")
    import_export_max_file_size_mb: int = Field(default=100, ge=1)
    import_stream_threshold_mb: int = Field(default=50, ge=1)
    pending_import_ttl_seconds: int = Field(default=900, ge=1)

    # Entry limits
    max_images_per_entry: int = Field(default=5, ge=0)
    max_note_length: int = Field(default=10_000, ge=0)

    # Logging
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper() or "INFO"

    @property
    def backup_path(self) -> Path:
        return Path(self.backup_dir)


settings = Settings()
