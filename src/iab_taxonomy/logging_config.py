"""Logging configuration for the IAB taxonomy browser."""

import sys
from pathlib import Path

from loguru import logger


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure loguru with appropriate level.

    With ``log_file`` set, messages go to that file instead of stderr, which the
    terminal UI owns while it runs.
    """
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    if log_file is None:
        logger.add(sys.stderr, level=level, format="{level.icon} {message}")
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} {level: <8} {name}: {message}",
    )
