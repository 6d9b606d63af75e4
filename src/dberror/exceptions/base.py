"""
Error types returned or raised by dberror.
"""

from typing import Any

from .codes import PostgresErrorCodes


class StructuredError(Exception):
    """
    Human-readable database error.

    - message: non-empty, user-facing message; also what ``str(err)`` returns
    - code: SQLSTATE code of the originating driver error (e.g. "23505")
    - constraint, severity, routine, table, detail, column: driver metadata,
      empty strings when not applicable for the code path that built the error
    """

    # SQLSTATE -> default HTTP status. Anything not listed maps to 400.
    CODE_TO_STATUS = {
        PostgresErrorCodes.UNIQUE_VIOLATION: 409,
        PostgresErrorCodes.FOREIGN_KEY_VIOLATION: 409,
        PostgresErrorCodes.LOCK_NOT_AVAILABLE: 409,
        PostgresErrorCodes.NOT_NULL_VIOLATION: 422,
        PostgresErrorCodes.CHECK_VIOLATION: 422,
        PostgresErrorCodes.INVALID_TEXT_REPRESENTATION: 422,
        PostgresErrorCodes.NUMERIC_VALUE_OUT_OF_RANGE: 422,
    }

    def __init__(self, message: str, *, code: str = "", constraint: str = "",
                 severity: str = "", routine: str = "", table: str = "",
                 detail: str = "", column: str = ""):
        if not message:
            raise ValueError("StructuredError requires a non-empty message")
        super().__init__(message)
        self.message = message
        self.code = code
        self.constraint = constraint
        self.severity = severity
        self.routine = routine
        self.table = table
        self.detail = detail
        self.column = column

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"StructuredError(message={self.message!r}, code={self.code!r})"

    def as_dict(self) -> dict[str, str]:
        return {
            "message": self.message,
            "code": self.code,
            "constraint": self.constraint,
            "severity": self.severity,
            "routine": self.routine,
            "table": self.table,
            "detail": self.detail,
            "column": self.column,
        }

    def to_payload(self, include_detail: bool = False) -> dict[str, Any]:
        """
        Return a JSON-serializable dict suitable for HTTP responses.

        Shape:
            {
                "detail": "A email already exists with this value (a@b.com)",
                "code": "23505",
                "fields": ["email"],
            }

        Table, constraint and severity are left out unless ``include_detail``
        is set, since they describe the schema rather than the request.
        """
        payload: dict[str, Any] = {"detail": self.message}
        if self.code:
            payload["code"] = self.code
        if self.column:
            payload["fields"] = [self.column]
        if include_detail:
            for key in ("table", "constraint", "severity"):
                value = getattr(self, key)
                if value:
                    payload[key] = value
        return payload

    def http_status(self) -> int:
        return self.CODE_TO_STATUS.get(self.code, 400)


class ConstraintRegistrationError(RuntimeError):
    """Raised when two handlers are registered for the same constraint name."""

    def __init__(self, name: str):
        super().__init__(f"dberror: constraint handler registered twice for name {name!r}")
        self.name = name


__all__ = [
    "StructuredError",
    "ConstraintRegistrationError",
]
