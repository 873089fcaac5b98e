"""
Logging Configuration
Sets up the package logger for the application.

The console follows the requested level. A log file, when given, always
records DEBUG so a bug report carries every tick and patch, and it starts
with a header line naming the version and the platform.
"""
from datetime import datetime
import logging
import platform
import sys
from typing import Optional

from zonesync import __version__

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_LOG_FORMAT = '%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def session_header() -> str:
    return (
        f"# zonesync {__version__} session started {datetime.now().isoformat(timespec='seconds')}"
        f" (Python {platform.python_version()}, {platform.system()})"
    )


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'zonesync' namespace.

    Args:
        level: Console logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save a DEBUG-level log to.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("zonesync")

    # Avoid duplicate handlers when the app is restarted in the same process
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt=DATE_FORMAT))
        # Header goes straight to the stream, outside the record format
        file_handler.stream.write(session_header() + "\n")
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(level)

    logger.info("Logging initialized.")
    return logger
