"""
Centralized logging module for Mini METARs.

This module provides logging to a debug file for tracking issues.
It is designed to be imported by both backend and ui modules without
causing circular imports.
"""

import logging
from datetime import datetime, timedelta
from pathlib import Path

from common.paths import get_or_create_dir, get_user_logs_dir

LOGS_DIR = get_user_logs_dir()


def cleanup_old_logs(days_to_keep: int = 10) -> None:
    """Remove log files older than the specified number of days."""
    try:
        cutoff_date = datetime.now() - timedelta(days=days_to_keep)
        logs_path = Path(LOGS_DIR)

        for log_file in logs_path.glob('debug_*.log'):
            try:
                file_mtime = datetime.fromtimestamp(log_file.stat().st_mtime)
                if file_mtime < cutoff_date:
                    log_file.unlink()
            except OSError:
                pass  # Silently skip files we can't delete
    except OSError:
        pass


# One file per day
LOG_FILE = LOGS_DIR / f'debug_{datetime.now().strftime("%Y%m%d")}.log'

_logger = logging.getLogger('mini_metars')
_logger.setLevel(logging.DEBUG)

# Only add handler if not already added (prevents duplicate handlers on reimport)
if not _logger.handlers:
    if get_or_create_dir(LOGS_DIR) is not None:
        cleanup_old_logs()
        try:
            _handler: logging.Handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
        except OSError:
            _handler = logging.NullHandler()
    else:
        # Read-only home directory; logging becomes a no-op
        _handler = logging.NullHandler()

    _handler.setLevel(logging.DEBUG)
    _handler.setFormatter(logging.Formatter(
        '%(asctime)s.%(msecs)03d | %(levelname)-8s | %(message)s',
        datefmt='%H:%M:%S'
    ))
    _logger.addHandler(_handler)


def debug(message: str) -> None:
    """Log a debug message."""
    _logger.debug(message)


def info(message: str) -> None:
    """Log an info message."""
    _logger.info(message)


def warning(message: str) -> None:
    """Log a warning message."""
    _logger.warning(message)


def error(message: str, exc_info: bool = False) -> None:
    """Log an error message."""
    _logger.error(message, exc_info=exc_info)


def get_log_file_path() -> str:
    """Get the path to the current log file."""
    return str(LOG_FILE)
