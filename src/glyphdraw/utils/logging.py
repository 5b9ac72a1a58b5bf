"""Logging utilities for glyphdraw."""

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import structlog

from glyphdraw.config import LoggingConfig
from glyphdraw.domain.drawing import Drawing


@dataclass
class DrawingStats:
    """Element counts of a drawing, for log lines."""

    anchors: int = 0
    components: int = 0
    contours: int = 0
    nodes: int = 0
    on_curve: int = 0
    off_curve: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_drawing(drawing: Drawing) -> DrawingStats:
    """Count the elements of a drawing.

    Args:
        drawing: Drawing to inspect

    Returns:
        DrawingStats for the drawing
    """
    stats = DrawingStats(
        anchors=len(drawing.anchors),
        components=len(drawing.components),
        contours=len(drawing.contours),
    )
    for contour in drawing.contours:
        for node in contour.nodes:
            stats.nodes += 1
            if node.typ.is_on_curve:
                stats.on_curve += 1
            else:
                stats.off_curve += 1
    return stats


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging on top of the standard library.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphdraw")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file is not None else None,
        level=console_level,
    )

    return logger


def configure_logging_from_settings(
    config: LoggingConfig,
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure logging from a LoggingConfig."""
    return configure_logging(
        log_file=config.log_file,
        console_level=config.log_level,
        file_level=config.file_log_level,
        quiet=quiet,
    )
