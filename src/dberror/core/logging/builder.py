"""
Build and apply the dictConfig for hosts that want dberror's logging setup.

dberror never configures logging on import; call setup_logging(settings)
from your application's startup if you want these formatters and handlers.
"""

import logging
import logging.config
from pathlib import Path

from dberror.config.settings import Settings

from .filters import RedactFilter, SqlstateFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    dictConfig mapping for ``settings``.

    Handlers:
      - LOG_TO_STDOUT or no LOG_DIR: console + error_console
      - otherwise: console + file + error_file
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(sqlstate)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": getattr(settings, "SERVICE_NAME", "dberror"),
        },
    }

    filters = {
        "sqlstate": {"()": SqlstateFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "dberror": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """Create LOG_DIR if needed and apply make_dict_config(settings)."""
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(make_dict_config(settings))
