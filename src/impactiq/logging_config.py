"""
Logging configuration for ImpactIQ.

Log Levels:
    DEBUG:   Per-record details (individual RACI changes, clamped values)
    INFO:    Aggregate operations ("Analyzed 42 processes, 17 RACI changes")
    WARNING: Recoverable data issues (out-of-range rating, stale overall rating, skipped row)
    ERROR:   Failures (every row of a batch rejected)

Usage:
    from impactiq.logging_config import setup_logging
    setup_logging()

    # In any module:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Starting analysis")
"""

import logging
import sys

from impactiq.config import settings

_logging_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure logging for the engine.

    Safe to call multiple times (the host application may call it on every
    request). Only attaches handlers on the first call; subsequent calls just
    update the log level.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR). Defaults to
            settings.log_level (LOG_LEVEL in the environment).
    """
    global _logging_configured  # noqa: PLW0603

    level = level or settings.log_level
    log_level = getattr(logging, level.upper(), logging.INFO)
    app_logger = logging.getLogger("impactiq")

    if not _logging_configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        app_logger.addHandler(handler)
        # Host application owns the root logger
        app_logger.propagate = False

        _logging_configured = True

    app_logger.setLevel(log_level)
