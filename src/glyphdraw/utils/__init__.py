"""Utility functions for glyphdraw.

This module provides:

- Logging setup and configuration
- Drawing summaries for log lines
"""

from glyphdraw.utils.logging import (
    DrawingStats,
    configure_logging,
    configure_logging_from_settings,
    summarize_drawing,
)

__all__ = [
    "DrawingStats",
    "configure_logging",
    "configure_logging_from_settings",
    "summarize_drawing",
]
