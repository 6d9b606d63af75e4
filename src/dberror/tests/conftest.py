"""
Shared pytest configuration.

Driver errors are simulated (see test_fixtures/driver_fixtures.py), so the
suite needs no database server.
"""

import logging

import pytest

from dberror.config.settings import get_settings
from dberror.exceptions.registry import ConstraintRegistry

from .test_fixtures.driver_fixtures import (  # noqa: F401 - registers fixtures globally
    balance_check_diag,
    not_null_asyncpg,
    unique_violation_psycopg2,
)


@pytest.fixture
def registry() -> ConstraintRegistry:
    """A fresh registry per test, so registrations never leak between tests."""
    return ConstraintRegistry()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    # get_settings() is lru_cached; tests that monkeypatch env need a fresh read.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def dberror_caplog(caplog):
    """caplog capturing DEBUG from the dberror logger tree."""
    caplog.set_level(logging.DEBUG, logger="dberror")
    logging.getLogger("dberror").propagate = True
    return caplog


@pytest.fixture(autouse=True)
def reset_dberror_logger():
    # setup_logging() attaches handlers to the "dberror" logger; undo that after each test.
    yield
    logger = logging.getLogger("dberror")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
