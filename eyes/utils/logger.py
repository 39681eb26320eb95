"""
Logging setup for Eyes.

main() configures the "eyes" package logger once; every module then logs
through get_logger(__name__) and inherits its handlers.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str,
    level: str = "WARNING",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure a logger writing to stdout and, optionally, a file.

    The level normally comes from EYES_LOG_LEVEL and the file from
    EYES_LOG_FILE (see AppConfig). Calling it again for the same name only
    updates the level.

    Args:
        name: Logger name, "eyes" for the whole application
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown
            names fall back to WARNING
        log_file: File to append to; its directory is created if needed

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(numeric_level)

    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.info(f"File logging enabled: {log_file}")
        except OSError as e:
            # Console logging still works
            logger.warning(f"Failed to enable file logging: {e}")

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass __name__ so it sits under the "eyes" logger."""
    return logging.getLogger(name)
