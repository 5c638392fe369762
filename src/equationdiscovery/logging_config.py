"""
Logging Configuration
Sets up the 'equationdiscovery' logger for a discovery run.

The console shows progress at the requested level. A log file, when given,
always records at DEBUG so every rejected candidate and its reason ends up
in the file without flooding the terminal.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "equationdiscovery"

CONSOLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s'


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    file_level: int = logging.DEBUG
) -> logging.Logger:
    """
    Configures the package logger.

    Args:
        level: Console logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path of a log file, overwritten on every run.
        file_level: Level of the file handler.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    # Repeated calls (tests, several runs in one process) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    effective_level = level
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)
        effective_level = min(level, file_level)

    logger.setLevel(effective_level)
    logger.debug(f"Logging initialized (console {logging.getLevelName(level)}"
                 f"{f', file {log_file}' if log_file else ''})")
    return logger
