"""
Extract column / value / table names from Postgres detail and message text.

These match the exact phrasing Postgres uses and nothing else. Every parser
is total: no match returns "".
"""

import re

# Key (id)=(3c7d2b4a-3fc8-4782-a518-4ce9efef51e7) already exists.
_COLUMN_RE = re.compile(r"Key \((.+)\)=")
_VALUE_RE = re.compile(r"Key \(.+\)=\((.+)\)")

# Key (account_id)=(91f47e99-...) is not present in table "accounts".
_FOREIGN_KEY_TABLE_RE = re.compile(r'not present in table "(.+)"')

# update or delete on table "accounts" violates foreign key constraint ... on table "payments"
_PARENT_TABLE_RE = re.compile(r'update or delete on table "([^"]+)"')


def _first_group(pattern: re.Pattern, text: str | None) -> str:
    if not text:
        return ""
    m = pattern.search(text)
    return m.group(1) if m else ""


def find_column(detail: str | None) -> str:
    """Column from a ``Key (<col>)=...`` detail string."""
    return _first_group(_COLUMN_RE, detail)


def find_value(detail: str | None) -> str:
    """Offending value from a ``Key (...)=(<value>)`` detail string."""
    return _first_group(_VALUE_RE, detail)


def find_foreign_key_table(detail: str | None) -> str:
    """Referenced table from a ``not present in table "<table>"`` detail string."""
    return _first_group(_FOREIGN_KEY_TABLE_RE, detail)


def find_parent_table(message: str | None) -> str:
    """Parent table from an ``update or delete on table "<table>"`` message."""
    return _first_group(_PARENT_TABLE_RE, message)


__all__ = [
    "find_column",
    "find_value",
    "find_foreign_key_table",
    "find_parent_table",
]
