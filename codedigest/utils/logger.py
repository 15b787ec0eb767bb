"""
Logging for codedigest with an extra NOTICE level between INFO and WARNING.

A single shared logger named ``codedigest``. Until :meth:`DigestLogger.configure`
is called it only carries a ``NullHandler``, so library callers see nothing
unless they opt in. The CLI configures console and file output.
"""

import logging
import sys
import threading
from datetime import datetime
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Optional


# ============================================================================
# Severity Levels
# ============================================================================

# RFC 5424 severity 5: normal but significant, e.g. a finished run
NOTICE = 25

logging.addLevelName(NOTICE, "NOTICE")

LOGGER_NAME = "codedigest"


# ============================================================================
# Formatters
# ============================================================================


class DetailedFormatter(logging.Formatter):
    """File formatter that adds ``module:function:line`` as ``%(location)s``."""

    def format(self, record: logging.LogRecord) -> str:
        record.location = f"{record.module}:{record.funcName}:{record.lineno}"
        return super().format(record)


class SimpleFormatter(logging.Formatter):
    """Console formatter: the message, prefixed with the level for warnings and above."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.WARNING:
            return f"{record.levelname}: {message}"
        return message


# ============================================================================
# Singleton Logger
# ============================================================================


class DigestLogger:
    """
    Thread-safe singleton around the ``codedigest`` logger.

    Features:
    - ``notice`` level on top of the stdlib levels
    - Console output (INFO+) and dated log file (configured level)
    - Location tracking in file logs
    - Optional size or time based rotation
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if getattr(self, "_initialized", False):
            return

        self._initialized = True
        self._logger = logging.getLogger(LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False

        self._console_handler: Optional[logging.Handler] = None
        self._file_handler: Optional[logging.Handler] = None
        self._log_dir: Optional[Path] = None

        self._cleanup_handlers()
        self._logger.addHandler(logging.NullHandler())

    def configure(
        self,
        log_level: str = "INFO",
        log_dir: str = "logs",
        enable_console: bool = True,
        enable_file: bool = True,
        rotation_enabled: bool = False,
        rotation_type: str = "size",
        max_bytes: int = 10485760,  # 10 MB
        backup_count: int = 5,
        when: str = "midnight",
    ) -> None:
        """
        Configure console and file output.

        Args:
            log_level: Logging level name (DEBUG, INFO, NOTICE, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files
            enable_console: Write INFO and above to stdout
            enable_file: Write the configured level and above to a dated log file
            rotation_enabled: Rotate the log file
            rotation_type: "size" or "time"
            max_bytes: Max bytes for size-based rotation
            backup_count: Number of rotated files to keep
            when: Interval for time-based rotation (e.g. "midnight", "H")
        """
        self._cleanup_handlers()
        self._console_handler = None
        self._file_handler = None
        self._log_dir = None

        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO
        self._logger.setLevel(level)

        if enable_console:
            self._console_handler = logging.StreamHandler(sys.stdout)
            self._console_handler.setLevel(max(level, logging.INFO))
            self._console_handler.setFormatter(SimpleFormatter(fmt="%(message)s"))
            self._logger.addHandler(self._console_handler)

        if enable_file:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            self._log_dir = log_path
            log_file = log_path / f"codedigest_{datetime.now().strftime('%Y%m%d')}.log"

            if rotation_enabled:
                if rotation_type == "size":
                    self._file_handler = RotatingFileHandler(
                        log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8", delay=True
                    )
                elif rotation_type == "time":
                    self._file_handler = TimedRotatingFileHandler(
                        log_file, when=when, backupCount=backup_count, encoding="utf-8", delay=True
                    )
                else:
                    raise ValueError(f"Invalid rotation_type: {rotation_type}. Must be 'size' or 'time'.")
            else:
                self._file_handler = logging.FileHandler(log_file, encoding="utf-8", delay=True)

            self._file_handler.setLevel(level)
            self._file_handler.setFormatter(
                DetailedFormatter(
                    fmt="%(asctime)s [%(levelname)s] [%(location)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
                )
            )
            self._logger.addHandler(self._file_handler)

        if not self._logger.handlers:
            self._logger.addHandler(logging.NullHandler())

    def shutdown(self) -> None:
        """Close configured handlers and fall back to silent mode."""
        self._cleanup_handlers()
        self._console_handler = None
        self._file_handler = None
        self._logger.addHandler(logging.NullHandler())

    def get_logger(self) -> logging.Logger:
        """Get the underlying logger instance."""
        return self._logger

    def _cleanup_handlers(self) -> None:
        for handler in list(self._logger.handlers):
            handler.close()
            self._logger.removeHandler(handler)

    def critical(self, msg: str, *args, **kwargs) -> None:
        self._logger.critical(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def notice(self, msg: str, *args, **kwargs) -> None:
        """Log notice message (severity 5 - normal but significant, e.g. a finished run)."""
        self._logger.log(NOTICE, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)


def get_logger() -> DigestLogger:
    """Return the shared DigestLogger instance."""
    return DigestLogger()
