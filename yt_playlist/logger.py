"""Logging configuration for the application."""

import logging
import os
import sys
from datetime import date, datetime
from pathlib import Path

from yt_playlist.config import Settings, settings

# Configure logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_LOG_FORMAT = "[%(levelname)s] %(asctime)s: %(message)s"

ROOT_LOGGER_NAME = "yt_playlist"

# Configure root logger
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],
)


class MicrosecondFormatter(logging.Formatter):
    """Formatter whose timestamps carry microseconds, e.g. 2024-05-01 09:30:00.123456."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return datetime.fromtimestamp(record.created).strftime(
            datefmt or "%Y-%m-%d %H:%M:%S.%f"
        )


class DailyRotatingFileHandler(logging.FileHandler):
    """
    File handler that rotates the active log once per calendar day.

    Before a record is written, the active log is compared against today's
    date using its last-modified time. A log last touched on another day is
    moved to ``<log>.1`` after the numbered backups are shifted up by one;
    ``<log>.<backup_count>`` is dropped first.
    """

    def __init__(self, filename: str | Path, backup_count: int = 14):
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(path, mode="a", encoding="utf-8", delay=True)
        self.backup_count = backup_count

    def backup_path(self, index: int) -> str:
        return f"{self.baseFilename}.{index}"

    def should_rotate(self) -> bool:
        """Check whether the active log was last modified before today."""
        if not os.path.exists(self.baseFilename):
            return False

        modified = date.fromtimestamp(os.path.getmtime(self.baseFilename))
        return modified != date.today()

    def do_rotate(self) -> None:
        """Shift numbered backups and move the active log to slot 1."""
        if self.stream:
            self.stream.close()
            self.stream = None

        oldest = self.backup_path(self.backup_count)
        if os.path.exists(oldest):
            os.remove(oldest)

        for index in range(self.backup_count - 1, 0, -1):
            source = self.backup_path(index)
            if os.path.exists(source):
                os.replace(source, self.backup_path(index + 1))

        os.replace(self.baseFilename, self.backup_path(1))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if self.should_rotate():
                self.do_rotate()
        except OSError:
            self.handleError(record)
            return

        super().emit(record)


def build_file_handler(path: str | Path, backup_count: int = 14) -> DailyRotatingFileHandler:
    """
    Create the day-rotating file handler used for the handler's log.

    Args:
        path: Active log file path
        backup_count: Number of numbered backups kept

    Returns:
        Configured handler
    """
    handler = DailyRotatingFileHandler(path, backup_count=backup_count)
    formatter = MicrosecondFormatter(FILE_LOG_FORMAT)
    handler.setFormatter(formatter)
    handler.setLevel(logging.DEBUG)
    return handler


def configure_logging(config: Settings = settings) -> None:
    """
    Attach the rotating file handler to the package logger.

    Calling it again with the same log path is a no-op.
    """
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    target = os.path.abspath(config.log_path)

    for handler in package_logger.handlers:
        if isinstance(handler, DailyRotatingFileHandler) and handler.baseFilename == target:
            return

    package_logger.addHandler(build_file_handler(target, config.log_rotations))
    package_logger.setLevel(logging.DEBUG if config.debug else logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name below the package logger (e.g. "auth")

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

    # Set level based on environment
    if settings.is_production:
        logger.setLevel(logging.INFO)
    else:
        logger.setLevel(logging.DEBUG)

    return logger


# Create loggers for different modules
app_logger = get_logger("app")
config_logger = get_logger("config")
auth_logger = get_logger("auth")
storage_logger = get_logger("storage")
api_logger = get_logger("api")
