from enum import Enum


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    NUMERIC_VALUE_OUT_OF_RANGE = "22003"
    INVALID_TEXT_REPRESENTATION = "22P02"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    UNIQUE_VIOLATION = "23505"
    CHECK_VIOLATION = "23514"
    LOCK_NOT_AVAILABLE = "55P03"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code: str) -> "PostgresErrorCodes | None":
        """Return the member for ``code``, or None for codes we don't rewrite."""
        try:
            return cls(code)
        except ValueError:
            return None


CODE_NUMERIC_VALUE_OUT_OF_RANGE = PostgresErrorCodes.NUMERIC_VALUE_OUT_OF_RANGE.value
CODE_INVALID_TEXT_REPRESENTATION = PostgresErrorCodes.INVALID_TEXT_REPRESENTATION.value
CODE_NOT_NULL_VIOLATION = PostgresErrorCodes.NOT_NULL_VIOLATION.value
CODE_FOREIGN_KEY_VIOLATION = PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value
CODE_UNIQUE_VIOLATION = PostgresErrorCodes.UNIQUE_VIOLATION.value
CODE_CHECK_VIOLATION = PostgresErrorCodes.CHECK_VIOLATION.value
CODE_LOCK_NOT_AVAILABLE = PostgresErrorCodes.LOCK_NOT_AVAILABLE.value

__all__ = [
    "PostgresErrorCodes",
    "CODE_NUMERIC_VALUE_OUT_OF_RANGE",
    "CODE_INVALID_TEXT_REPRESENTATION",
    "CODE_NOT_NULL_VIOLATION",
    "CODE_FOREIGN_KEY_VIOLATION",
    "CODE_UNIQUE_VIOLATION",
    "CODE_CHECK_VIOLATION",
    "CODE_LOCK_NOT_AVAILABLE",
]
