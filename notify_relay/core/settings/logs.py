"""Logging settings (``LOG_`` environment variables)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """How the relay and the HTTP service write their logs.

    ``LOG_LEVEL=DEBUG LOG_JSON=false`` gives readable local output;
    the defaults emit JSON Lines on stderr for a log collector.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        env_ignore_empty=True,
    )

    level: LogLevel = "INFO"
    json_logs: bool = Field(default=True, validation_alias="LOG_JSON")
    service_name: str = "notify-relay"
    console_enabled: bool = True
    console_level: LogLevel | None = Field(
        default=None, description="Stderr threshold; the root level when unset"
    )
    include_context: bool = Field(
        default=True, description="Attach channel, topic and exchange context to records"
    )
    file_path: Path | None = Field(default=None, description="Rotating log file; off when unset")
    file_max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    file_backup_count: int = Field(default=5, ge=0, le=100)

    @field_validator("level", "console_level", mode="before")
    @classmethod
    def _upper(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    def to_logging_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``configure_logging``."""
        return {
            "log_level": self.level,
            "console_level": self.console_level or self.level,
            "json_logs": self.json_logs,
            "service_name": self.service_name,
            "console_enabled": self.console_enabled,
            "include_context": self.include_context,
            "file_path": self.file_path,
            "file_max_bytes": self.file_max_bytes,
            "file_backup_count": self.file_backup_count,
        }
