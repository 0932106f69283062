"""Configuration settings for Synaptic Store."""

from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    DEBUG: bool = Field(default=False, description="Debug mode")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_DIRECTORY: Optional[Path] = Field(
        default=None, description="Directory for the log file (disabled when unset)"
    )

    # Engine behaviour
    DEFAULT_STORAGE_KIND: str = Field(
        default="session", description="Storage kind used by generic operations: 'local' or 'session'"
    )
    UNDO_ENABLED: bool = Field(
        default=False, description="Track the previous value of every write for undo"
    )

    # Durable (local) storage
    DURABLE_ENABLED: bool = Field(
        default=True, description="Enable the durable host store"
    )
    DURABLE_DATABASE_PATH: Path = Field(
        default=Path("./data/durable.db"), description="SQLite path of the durable store"
    )

    # Session storage
    SESSION_ENABLED: bool = Field(
        default=True, description="Enable the session host store"
    )
    SESSION_DATABASE_PATH: str = Field(
        default=":memory:", description="SQLite path of the session store"
    )

    MAX_STORAGE_ENTRIES: Optional[int] = Field(
        default=None, ge=1, description="Per-store entry quota (unlimited when unset)"
    )

    # Redis Configuration
    REDIS_ENABLED: bool = Field(
        default=False, description="Use Redis instead of SQLite for durable storage"
    )
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", description="Redis connection URL"
    )
    REDIS_NAMESPACE: str = Field(
        default="synaptic", description="Prefix for the Redis keys holding the store"
    )

    @field_validator("DEFAULT_STORAGE_KIND")
    @classmethod
    def _check_kind(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("local", "session"):
            raise ValueError("DEFAULT_STORAGE_KIND must be 'local' or 'session'")
        return value

    def create_directories(self) -> None:
        """Create necessary directories."""
        if not self.REDIS_ENABLED:
            self.DURABLE_DATABASE_PATH.parent.mkdir(parents=True, exist_ok=True)
        if self.LOG_DIRECTORY is not None:
            self.LOG_DIRECTORY.mkdir(parents=True, exist_ok=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump()

    def __repr__(self) -> str:
        """String representation of settings."""
        return (
            f"Settings(kind={self.DEFAULT_STORAGE_KIND}, "
            f"durable={self.DURABLE_DATABASE_PATH}, redis={self.REDIS_ENABLED})"
        )
