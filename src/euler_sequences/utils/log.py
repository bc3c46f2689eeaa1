"""Logger setup for command-line use.

Library modules only create module loggers; handlers are attached here so
that importing the package never configures logging on its own.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "euler_sequences"


def setup_logger(verbose: bool = False, log_path: Optional[Path] = None) -> logging.Logger:
    """Set up the package logger to write to console and optionally a file.

    Args:
        verbose: If True, console shows DEBUG records instead of INFO.
        log_path: Optional file that captures everything at DEBUG level.

    Returns:
        The configured ``euler_sequences`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    logger.handlers.clear()

    if log_path is not None:
        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)

    return logger
