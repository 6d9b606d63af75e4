# dberror/exceptions/
# ├── base.py             # StructuredError, ConstraintRegistrationError
# ├── codes.py            # SQLSTATE codes we rewrite
# ├── diagnostics.py      # driver error -> PgDiagnostic
# ├── detail_parsers.py   # column/value/table extraction from Postgres text
# ├── registry.py         # check-constraint handler registry
# └── mapper.py           # message synthesis + get_error dispatcher

from .base import ConstraintRegistrationError, StructuredError
from .codes import PostgresErrorCodes
from .diagnostics import PgDiagnostic, normalize_driver_error
from .mapper import ErrorTranslator, atranslate_errors, get_error, synthesize, translate_errors
from .registry import ConstraintHandler, ConstraintRegistry, default_registry, register_constraint

__all__ = [
    "StructuredError",
    "ConstraintRegistrationError",
    "PostgresErrorCodes",
    "PgDiagnostic",
    "normalize_driver_error",
    "ErrorTranslator",
    "get_error",
    "synthesize",
    "translate_errors",
    "atranslate_errors",
    "ConstraintHandler",
    "ConstraintRegistry",
    "default_registry",
    "register_constraint",
]
