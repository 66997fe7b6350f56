# compliance_scheduler/utils/logger.py
"""
Centralised logging configuration for the entire application.
Logs to console and to a rotating file (LOG_DIR / LOG_FILE, default ./logs/scheduler.log).
SQL statement logging follows LOG_SQL so maintenance passes can be traced query by query.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from compliance_scheduler.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DEFAULT_LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")

_configured = False


def log_file_path() -> str:
    return os.path.join(settings.LOG_DIR or _DEFAULT_LOG_DIR, settings.LOG_FILE)


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)

    path = log_file_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    # Keeps last 10 × 5MB log files
    file_handler = RotatingFileHandler(
        filename=path,
        maxBytes=5 * 1024 * 1024,
        backupCount=10,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(console)
    root.addHandler(file_handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.LOG_SQL else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)
