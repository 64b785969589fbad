#!/usr/bin/env python3
"""Logging setup for the i18nsync command line."""

import logging
import os
import sys
from typing import Optional

LOGGER_NAME = "i18nsync"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logger(
    log_level_str: str = "INFO",
    log_file_path: Optional[str] = None,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Set up the package logger.

    Library modules log through ``logging.getLogger(__name__)``, which all
    hang off this logger. Console output goes to stderr so it never mixes
    with the JSON results printed on stdout.

    Args:
        log_level_str: The logging level as a string (e.g., 'INFO', 'DEBUG').
        log_file_path: Optional path of a log file.
        log_to_console: Whether to log to stderr.

    Returns:
        The configured logger instance.
    """
    logger = logging.getLogger(LOGGER_NAME)

    log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    logger.setLevel(log_level)

    # Clear any existing handlers to prevent duplicate logging
    if logger.hasHandlers():
        logger.handlers.clear()

    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path, encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
