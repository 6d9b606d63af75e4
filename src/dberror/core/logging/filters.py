"""
Logging filters.

SqlstateFilter guarantees every record has a ``sqlstate`` attribute so
formatters can reference %(sqlstate)s; translation code passes the real code
via ``extra={"sqlstate": ...}`` and everything else gets "-".

RedactFilter scrubs record attributes whose names look like secrets, since
driver errors can carry connection details into ``extra``.
"""

import logging
from logging import LogRecord


class SqlstateFilter(logging.Filter):
    def filter(self, record: LogRecord) -> bool:
        record.sqlstate = getattr(record, "sqlstate", None) or "-"
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "dsn", "connection_string", "authorization"}

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = "***REDACTED***"
        return True
