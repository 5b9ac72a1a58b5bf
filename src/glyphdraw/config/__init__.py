"""Configuration management for glyphdraw.

This module provides configuration management using Pydantic models.

Key classes:
- PenConfig: Point pen session settings
- LoggingConfig: Logging settings
- GlyphDrawSettings: Main library settings
"""

from glyphdraw.config.settings import (
    GlyphDrawSettings,
    LoggingConfig,
    PenConfig,
    UnclosedPathPolicy,
    get_default_settings,
)

__all__ = [
    "GlyphDrawSettings",
    "LoggingConfig",
    "PenConfig",
    "UnclosedPathPolicy",
    "get_default_settings",
]
