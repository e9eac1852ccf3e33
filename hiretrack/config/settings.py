"""
HireTrack Configuration Module

Environment-based configuration with fail-fast validation.
All settings are loaded from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    model_config = SettingsConfigDict(
        env_prefix="HIRETRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    env: Literal["development", "production", "test"] = Field(
        default="development",
        description="Application environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    data_dir: Path = Field(
        default=Path("./data"),
        description="Directory for runtime data (database file)",
    )
    database_name: str = Field(
        default="hiretrack.db",
        min_length=1,
        description="SQLite database file name inside data_dir",
    )

    # Listing
    default_page_size: int = Field(
        default=20,
        ge=1,
        description="Page size used when a listing does not pass a limit",
    )
    max_page_size: int = Field(
        default=100,
        ge=1,
        description="Upper bound applied to any listing limit",
    )

    # Deadlines
    operation_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Default deadline in seconds for a single store call",
    )

    @field_validator("data_dir", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path) -> Path:
        """Convert string to Path."""
        return Path(v)

    @model_validator(mode="after")
    def check_page_sizes(self) -> "Settings":
        """Default page size may not exceed the cap."""
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size must not exceed max_page_size")
        return self

    def ensure_data_dir(self) -> None:
        """Create data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def database_path(self) -> Path:
        """Path to SQLite database."""
        return self.data_dir / self.database_name


def get_settings() -> Settings:
    """
    Get validated settings instance.
    
    Raises:
        ValidationError: If required settings are missing or invalid.
    """
    settings = Settings()
    settings.ensure_data_dir()
    return settings
