"""
Normalize driver errors into one canonical record.

Every supported driver reports the same Postgres diagnostic fields under
different attribute names:

    psycopg2    err.pgcode, err.diag.message_primary, err.diag.column_name, ...
    psycopg 3   err.sqlstate, err.diag.message_primary, err.diag.column_name, ...
    asyncpg     err.sqlstate, err.message, err.column_name, ...

SQLAlchemy wraps all of them in a ``DBAPIError`` whose ``.orig`` is the
driver exception (or, for asyncpg, an adapter exception whose ``__cause__``
is the real asyncpg error).

Detection is capability based: we probe attributes instead of importing
driver modules, so none of the drivers is a hard dependency.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import DBAPIError

logger = logging.getLogger(__name__)

_SQLSTATE_RE = re.compile(r"^[0-9A-Z]{5}$")


@dataclass(frozen=True)
class PgDiagnostic:
    """Canonical Postgres error record handed to the message synthesizer."""

    code: str
    message: str = ""
    detail: str = ""
    hint: str = ""
    column: str = ""
    table: str = ""
    constraint: str = ""
    severity: str = ""
    routine: str = ""
    schema: str = ""
    data_type: str = ""
    where: str = ""


# canonical field -> attribute names to probe, in order
_DIAG_FIELDS = {
    "message": ("message_primary",),
    "detail": ("message_detail",),
    "hint": ("message_hint",),
    "column": ("column_name",),
    "table": ("table_name",),
    "constraint": ("constraint_name",),
    "severity": ("severity", "severity_nonlocalized"),
    "routine": ("source_function",),
    "schema": ("schema_name",),
    "data_type": ("datatype_name",),
    "where": ("context",),
}

_ASYNCPG_FIELDS = {
    "message": ("message",),
    "detail": ("detail",),
    "hint": ("hint",),
    "column": ("column_name",),
    "table": ("table_name",),
    "constraint": ("constraint_name",),
    "severity": ("severity",),
    "routine": ("server_source_function",),
    "schema": ("schema_name",),
    "data_type": ("data_type_name",),
    "where": ("context",),
}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _first_attr(obj: Any, names: tuple[str, ...]) -> str:
    for name in names:
        value = _text(getattr(obj, name, None))
        if value:
            return value
    return ""


def _sqlstate_of(obj: Any) -> str:
    """Return the SQLSTATE ``obj`` advertises, or "" if it has none."""
    diag = getattr(obj, "diag", None)
    for candidate in (
        getattr(obj, "sqlstate", None),
        getattr(obj, "pgcode", None),
        getattr(diag, "sqlstate", None) if diag is not None else None,
    ):
        # psycopg 3 exposes ``sqlstate`` as a class attribute that is None on
        # the base classes; keep probing in that case.
        code = _text(candidate)
        if _SQLSTATE_RE.match(code):
            return code
    return ""


def _first_line(text: str) -> str:
    # psycopg2 pgerror looks like 'ERROR:  duplicate key ...\nDETAIL:  Key (id)=...'
    line = text.splitlines()[0] if text else ""
    for prefix in ("ERROR:", "FATAL:", "PANIC:"):
        if line.startswith(prefix):
            return line[len(prefix):].strip()
    return line.strip()


def _from_psycopg(err: Any, code: str) -> PgDiagnostic:
    diag = getattr(err, "diag", None)
    fields = {key: _first_attr(diag, names) for key, names in _DIAG_FIELDS.items()}
    if not fields["message"]:
        fields["message"] = _first_line(_text(getattr(err, "pgerror", None)) or _text(err))
    return PgDiagnostic(code=code, **fields)


def _from_asyncpg(err: Any, code: str) -> PgDiagnostic:
    fields = {key: _first_attr(err, names) for key, names in _ASYNCPG_FIELDS.items()}
    if not fields["message"]:
        fields["message"] = _first_line(_text(err))
    return PgDiagnostic(code=code, **fields)


def _unwrap(err: Any) -> Any:
    """
    Peel SQLAlchemy wrappers off ``err``.

    SQLAlchemy's asyncpg dialect wraps the asyncpg exception in an adapter
    exception that carries ``sqlstate`` but none of the diagnostic fields, so
    if ``__cause__`` looks like a richer driver error we prefer it.
    """
    if isinstance(err, DBAPIError) and err.orig is not None:
        err = err.orig
    cause = getattr(err, "__cause__", None)
    if cause is not None and _sqlstate_of(cause) and getattr(cause, "message", None) is not None:
        if getattr(err, "diag", None) is None and getattr(err, "detail", None) is None:
            return cause
    return err


def normalize_driver_error(err: Any) -> PgDiagnostic | None:
    """
    Map any supported driver error to a ``PgDiagnostic``.

    Returns None when ``err`` is not a Postgres server error (no SQLSTATE),
    which the dispatcher treats as "not ours, hand it back untouched".
    """
    if err is None:
        return None
    if isinstance(err, PgDiagnostic):
        return err

    native = _unwrap(err)
    code = _sqlstate_of(native)
    if not code:
        return None

    if getattr(native, "diag", None) is not None:
        diag = _from_psycopg(native, code)
    else:
        diag = _from_asyncpg(native, code)

    logger.debug(
        "Normalized driver error",
        extra={"sqlstate": code, "driver_type": type(native).__name__},
    )
    return diag


__all__ = ["PgDiagnostic", "normalize_driver_error"]
