"""Configuration settings for glyphdraw."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class UnclosedPathPolicy(str, Enum):
    """What closing a point pen session does with an unterminated contour."""

    ERROR = "error"
    DISCARD = "discard"


class PenConfig(BaseModel):
    """Configuration for point pen sessions."""

    unclosed_path: UnclosedPathPolicy = Field(
        default=UnclosedPathPolicy.ERROR,
        description="Raise on, or silently discard, a contour left open when the session closes",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file (no file output when unset)",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphDrawSettings(BaseModel):
    """Main library settings."""

    pen: PenConfig = Field(default_factory=PenConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphDrawSettings:
    """Get default library settings."""
    return GlyphDrawSettings()
