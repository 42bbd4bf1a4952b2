"""
Logging configuration for tilegrid.

The library only creates loggers; applications opt in to output:

    from tilegrid.logging_config import setup_logging
    setup_logging()                 # console only
    setup_logging("logs")           # console + logs/tilegrid.log

All tilegrid.* loggers then write WARNING+ to the console and, when a log
directory is given, DEBUG to a rotating file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union


LOG_FILE_NAME = "tilegrid.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5
ROOT_LOGGER = "tilegrid"


def setup_logging(
    log_dir: Optional[Union[Path, str]] = None,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
) -> Optional[Path]:
    """
    Configure the tilegrid logger.

    Args:
        log_dir: Directory for the log file (no file logging if None)
        log_level: Level for file logging
        console_level: Level for console output

    Returns:
        Path to the log file, or None without a log directory
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG)

    # Re-initialization replaces earlier handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(
        fmt="%(levelname)-8s | %(name)-25s | %(message)s"
    ))
    root_logger.addHandler(console_handler)

    if log_dir is None:
        return None

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / LOG_FILE_NAME

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-25s | %(funcName)-20s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    root_logger.addHandler(file_handler)

    root_logger.debug("Logging to %s", log_file.absolute())
    return log_file


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the tilegrid namespace.

    Args:
        name: Module name (typically __name__)
    """
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
