"""
Registry of caller-supplied messages for named check constraints.

Postgres reports a failed CHECK as 'new row for relation "accounts" violates
check constraint "accounts_balance_check"', which is not something to show a
user. Applications register a ConstraintHandler per constraint name at
startup and the dispatcher delegates to it.

Usage:
    registry = ConstraintRegistry()
    registry.register(ConstraintHandler(
        name="accounts_balance_check",
        build=lambda diag: StructuredError("Cannot write a negative balance", code=diag.code),
    ))
    translator = ErrorTranslator(registry)
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator

from .base import ConstraintRegistrationError, StructuredError
from .diagnostics import PgDiagnostic

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConstraintHandler:
    """
    Custom error builder for one database constraint.

    name: the constraint name as defined in the database.
    build: called with the normalized driver error; returns the error to show.
    """

    name: str
    build: Callable[[PgDiagnostic], StructuredError]

    def __post_init__(self):
        if not self.name:
            raise ValueError("ConstraintHandler requires a non-empty name")


class _ReadWriteLock:
    """Many concurrent readers, or one writer."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class ConstraintRegistry:
    """Thread-safe mapping of constraint name -> ConstraintHandler."""

    def __init__(self):
        self._handlers: dict[str, ConstraintHandler] = {}
        self._lock = _ReadWriteLock()

    def register(self, handler: ConstraintHandler) -> None:
        """
        Add ``handler`` under ``handler.name``.

        Raises:
            ConstraintRegistrationError: a handler with that name already exists.
                Shadowing a handler silently would change user-facing messages,
                so this is treated as a configuration error at startup.
        """
        with self._lock.write():
            if handler.name in self._handlers:
                raise ConstraintRegistrationError(handler.name)
            self._handlers[handler.name] = handler
        logger.debug("Registered constraint handler", extra={"constraint": handler.name})

    def lookup(self, name: str) -> ConstraintHandler | None:
        with self._lock.read():
            return self._handlers.get(name)

    def names(self) -> list[str]:
        with self._lock.read():
            return sorted(self._handlers)

    def __contains__(self, name: object) -> bool:
        with self._lock.read():
            return name in self._handlers

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._handlers)


# Process-wide registry used when callers don't wire their own.
default_registry = ConstraintRegistry()


def register_constraint(handler: ConstraintHandler, registry: ConstraintRegistry | None = None) -> None:
    """Register ``handler`` on ``registry`` (the default registry if omitted)."""
    (registry if registry is not None else default_registry).register(handler)


__all__ = [
    "ConstraintHandler",
    "ConstraintRegistry",
    "default_registry",
    "register_constraint",
]
