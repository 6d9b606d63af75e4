"""
Formatters wired by builder.make_dict_config().

  - JsonFormatter: one JSON object per record for log collectors. Extras passed
    via ``extra={...}`` (sqlstate, constraint, ...) become top-level keys.
  - ColorFormatter: compact ANSI-colored lines for a developer terminal.
"""

import json
import logging
from logging import LogRecord
from typing import Any

from dberror.utils.logging import get_project_version

PROJECT_VERSION = get_project_version()

# LogRecord attributes that are already represented (or are noise) in our output.
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Construction:
      - env: environment name included on every record.
      - service: logical service name (defaults to "dberror").
      - datefmt: passed to logging.Formatter.formatTime.

    Non-serializable extras are stringified, so format() never raises.
    """

    def __init__(self, *, env: str | None = None, service: str = "dberror", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "sqlstate": getattr(record, "sqlstate", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in log_record or key in _RESERVED or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                log_record[key] = value
            except (TypeError, ValueError):
                log_record[key] = str(value)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """TIMESTAMP | LEVEL | LOGGER | SQLSTATE | MESSAGE, with the level colored."""

    COLOR_CODES = {
        "DEBUG": "\033[1;36;47m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;41m",
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        line = (
            f"{timestamp} | {color}{record.levelname:<8}{reset} | "
            f"{record.name:<30} | "
            f"{getattr(record, 'sqlstate', '-'):<5} | "
            f"{record.getMessage()}"
        )
        if record.exc_info:
            line = line + "\n" + self.formatException(record.exc_info)
        return line
