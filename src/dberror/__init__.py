"""
dberror: turn Postgres driver errors into messages you can show to users.

    from dberror import get_error

    try:
        cursor.execute("INSERT INTO accounts (id) VALUES (null)")
    except Exception as exc:
        err = get_error(exc)
        # err.message == "No id was provided. Please provide a id"
"""

from .exceptions.base import ConstraintRegistrationError, StructuredError
from .exceptions.codes import (
    CODE_CHECK_VIOLATION,
    CODE_FOREIGN_KEY_VIOLATION,
    CODE_INVALID_TEXT_REPRESENTATION,
    CODE_LOCK_NOT_AVAILABLE,
    CODE_NOT_NULL_VIOLATION,
    CODE_NUMERIC_VALUE_OUT_OF_RANGE,
    CODE_UNIQUE_VIOLATION,
    PostgresErrorCodes,
)
from .exceptions.diagnostics import PgDiagnostic
from .exceptions.mapper import ErrorTranslator, atranslate_errors, get_error, translate_errors
from .exceptions.registry import (
    ConstraintHandler,
    ConstraintRegistry,
    default_registry,
    register_constraint,
)

__all__ = [
    "get_error",
    "ErrorTranslator",
    "translate_errors",
    "atranslate_errors",
    "register_constraint",
    "ConstraintHandler",
    "ConstraintRegistry",
    "default_registry",
    "StructuredError",
    "ConstraintRegistrationError",
    "PgDiagnostic",
    "PostgresErrorCodes",
    "CODE_NUMERIC_VALUE_OUT_OF_RANGE",
    "CODE_INVALID_TEXT_REPRESENTATION",
    "CODE_NOT_NULL_VIOLATION",
    "CODE_FOREIGN_KEY_VIOLATION",
    "CODE_UNIQUE_VIOLATION",
    "CODE_CHECK_VIOLATION",
    "CODE_LOCK_NOT_AVAILABLE",
]
