"""
Translate driver errors into StructuredError.

Flow:
    get_error(err)
      -> normalize_driver_error(err)          # any driver shape -> PgDiagnostic
      -> synthesize(diag, registry)           # per-SQLSTATE message rules
      -> StructuredError

Anything that isn't a Postgres server error is handed back untouched, and a
recognized driver error never comes back as the driver type.
"""

import logging
from contextlib import asynccontextmanager, contextmanager
from typing import Any, Callable

from ..utils.text import capitalize
from .base import StructuredError
from .codes import PostgresErrorCodes
from .detail_parsers import (
    find_column,
    find_foreign_key_table,
    find_parent_table,
    find_value,
)
from .diagnostics import PgDiagnostic, normalize_driver_error
from .registry import ConstraintRegistry, default_registry

logger = logging.getLogger(__name__)


def _message_or_default(diag: PgDiagnostic) -> str:
    return diag.message or f"Database error (SQLSTATE {diag.code})"


# -----------------------
# Per-code message builders
# -----------------------

def _unique_violation(diag: PgDiagnostic, registry: ConstraintRegistry) -> StructuredError:
    column = find_column(diag.detail)
    value = find_value(diag.detail)
    if value:
        msg = f"A {column or 'value'} already exists with this value ({value})"
    else:
        msg = f"A {column or 'value'} already exists with that value"
    return StructuredError(
        msg,
        code=diag.code,
        severity=diag.severity,
        constraint=diag.constraint,
        table=diag.table,
        detail=diag.detail,
        column=column,
    )


def _foreign_key_violation(diag: PgDiagnostic, registry: ConstraintRegistry) -> StructuredError:
    column = find_column(diag.detail) or "value"
    value = find_value(diag.detail)
    referenced = find_foreign_key_table(diag.detail)
    table_part = f"in the {referenced} table" if referenced else "in the parent table"

    if "update or delete" in diag.message:
        # The statement touched the parent; diag.table names the child table
        # that still points at it.
        parent = find_parent_table(diag.message)
        msg = (
            f"Can't update or delete {parent} records because the {parent} "
            f"{column} ({value}) is still referenced by the {diag.table} table"
        )
    elif not value:
        msg = f"Can't save to {diag.table} because the {column} isn't present {table_part}"
    else:
        msg = f"Can't save to {diag.table} because the {column} ({value}) isn't present {table_part}"

    return StructuredError(
        msg,
        code=diag.code,
        column=diag.column,
        constraint=diag.constraint,
        table=diag.table,
        routine=diag.routine,
        severity=diag.severity,
    )


def _numeric_value_out_of_range(diag: PgDiagnostic, registry: ConstraintRegistry) -> StructuredError:
    msg = diag.message.replace("out of range", "too large or too small", 1)
    return StructuredError(
        capitalize(msg) or _message_or_default(diag),
        code=diag.code,
        severity=diag.severity,
    )


def _invalid_text_representation(diag: PgDiagnostic, registry: ConstraintRegistry) -> StructuredError:
    msg = diag.message
    # Postgres versions disagree on whether the word "type" is in there.
    if "invalid input syntax for type" not in msg:
        msg = msg.replace("input syntax for", "input syntax for type", 1)
    msg = msg.replace("input value for enum ", "", 1)
    msg = msg.replace("invalid", "Invalid", 1)
    return StructuredError(
        msg or _message_or_default(diag),
        code=diag.code,
        severity=diag.severity,
    )


def _not_null_violation(diag: PgDiagnostic, registry: ConstraintRegistry) -> StructuredError:
    msg = f"No {diag.column} was provided. Please provide a {diag.column}"
    return StructuredError(
        msg,
        code=diag.code,
        column=diag.column,
        table=diag.table,
        severity=diag.severity,
    )


def _check_violation_fallback(diag: PgDiagnostic) -> StructuredError:
    return StructuredError(
        _message_or_default(diag),
        code=diag.code,
        column=diag.column,
        table=diag.table,
        severity=diag.severity,
        constraint=diag.constraint,
    )


def _check_violation(diag: PgDiagnostic, registry: ConstraintRegistry) -> StructuredError:
    handler = registry.lookup(diag.constraint)
    if handler is None:
        logger.debug("No handler for check constraint", extra={"constraint": diag.constraint})
        return _check_violation_fallback(diag)

    try:
        result = handler.build(diag)
    except Exception:
        logger.exception(
            "Constraint handler failed, using database message",
            extra={"constraint": diag.constraint},
        )
        return _check_violation_fallback(diag)

    if not isinstance(result, StructuredError):
        logger.error(
            "Constraint handler returned %s instead of StructuredError",
            type(result).__name__,
            extra={"constraint": diag.constraint},
        )
        return _check_violation_fallback(diag)
    return result


def _passthrough(diag: PgDiagnostic, registry: ConstraintRegistry | None = None) -> StructuredError:
    return StructuredError(
        _message_or_default(diag),
        code=diag.code,
        column=diag.column,
        constraint=diag.constraint,
        table=diag.table,
        routine=diag.routine,
        severity=diag.severity,
    )


_BUILDERS: dict[PostgresErrorCodes, Callable[[PgDiagnostic, ConstraintRegistry], StructuredError]] = {
    PostgresErrorCodes.UNIQUE_VIOLATION: _unique_violation,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION: _foreign_key_violation,
    PostgresErrorCodes.NUMERIC_VALUE_OUT_OF_RANGE: _numeric_value_out_of_range,
    PostgresErrorCodes.INVALID_TEXT_REPRESENTATION: _invalid_text_representation,
    PostgresErrorCodes.NOT_NULL_VIOLATION: _not_null_violation,
    PostgresErrorCodes.CHECK_VIOLATION: _check_violation,
    PostgresErrorCodes.LOCK_NOT_AVAILABLE: _passthrough,
}


def synthesize(diag: PgDiagnostic, registry: ConstraintRegistry | None = None) -> StructuredError:
    """Build the StructuredError for a normalized driver error."""
    registry = registry if registry is not None else default_registry
    code = PostgresErrorCodes.from_code(diag.code)
    if code is None:
        logger.debug("Unhandled SQLSTATE, passing driver message through", extra={"sqlstate": diag.code})
        return _passthrough(diag)
    return _BUILDERS[code](diag, registry)


# -----------------------
# Dispatcher
# -----------------------

class ErrorTranslator:
    """
    Dispatcher bound to one constraint registry.

    Build one at the application's composition root and pass it where errors
    are handled:
        translator = ErrorTranslator(registry)
        raise translator.translate(exc) from exc
    """

    def __init__(self, registry: ConstraintRegistry | None = None):
        self.registry = registry if registry is not None else default_registry

    def translate(self, err: Any) -> Any:
        """
        Return a StructuredError for Postgres errors, ``err`` unchanged otherwise.

        None -> None. Never raises.
        """
        if err is None:
            return None
        if isinstance(err, StructuredError):
            return err
        diag = normalize_driver_error(err)
        if diag is None:
            return err
        return synthesize(diag, self.registry)

    __call__ = translate


def get_error(err: Any, registry: ConstraintRegistry | None = None) -> Any:
    """
    Translate ``err`` into a human-readable StructuredError if it is a Postgres
    error; return it as-is otherwise.
    """
    return ErrorTranslator(registry).translate(err)


# -----------------------
# Context managers to DRY translation at call sites
# -----------------------

def _reraise(exc: Exception, registry: ConstraintRegistry | None):
    translated = get_error(exc, registry)
    if translated is exc:
        raise exc
    raise translated from exc


@contextmanager
def translate_errors(registry: ConstraintRegistry | None = None):
    """
    Usage:
        with translate_errors():
            cursor.execute(...)
    Postgres errors raised inside the block are re-raised as StructuredError
    chained from the driver error; anything else propagates unchanged.
    """
    try:
        yield
    except Exception as exc:
        _reraise(exc, registry)


@asynccontextmanager
async def atranslate_errors(registry: ConstraintRegistry | None = None):
    """Async version of translate_errors, for ``async with`` blocks."""
    try:
        yield
    except Exception as exc:
        _reraise(exc, registry)


__all__ = [
    "ErrorTranslator",
    "get_error",
    "synthesize",
    "translate_errors",
    "atranslate_errors",
]
