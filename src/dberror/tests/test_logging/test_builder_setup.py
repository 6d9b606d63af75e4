import json
import logging
from types import SimpleNamespace

from dberror.core.logging.builder import make_dict_config, setup_logging
from dberror.exceptions.mapper import get_error
from dberror.exceptions.registry import ConstraintHandler


def make_test_settings(tmp_path, **overrides):
    s = SimpleNamespace(
        ENV="testing",
        SERVICE_NAME="dberror-tests",
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="json",
        LOG_TO_STDOUT=False,
        LOG_DIR=tmp_path,
        LOG_MAX_BYTES=1_000_000,
        LOG_BACKUP_COUNT=1,
    )
    for key, value in overrides.items():
        setattr(s, key, value)
    return s


def test_make_dict_config_with_files(tmp_path):
    cfg = make_dict_config(make_test_settings(tmp_path))

    assert set(cfg["handlers"]) == {"console", "file", "error_file"}
    assert "json" in cfg["formatters"]
    assert cfg["formatters"]["json"]["service"] == "dberror-tests"
    assert cfg["loggers"]["dberror"]["level"] == "DEBUG"


def test_make_dict_config_stdout_only(tmp_path):
    cfg = make_dict_config(make_test_settings(tmp_path, LOG_TO_STDOUT=True))
    assert set(cfg["handlers"]) == {"console", "error_console"}


def test_setup_logging_creates_log_dir(tmp_path):
    log_dir = tmp_path / "logs"
    assert not log_dir.exists()

    setup_logging(make_test_settings(tmp_path, LOG_DIR=log_dir))

    assert log_dir.exists()
    assert logging.getLogger("dberror").handlers


def test_failing_handler_written_to_error_log(tmp_path, registry, balance_check_diag):
    setup_logging(make_test_settings(tmp_path))

    def build(diag):
        raise RuntimeError("bug in handler")

    registry.register(ConstraintHandler(name="accounts_balance_check", build=build))
    get_error(balance_check_diag, registry)

    for handler in logging.getLogger("dberror").handlers:
        handler.flush()

    lines = (tmp_path / "errors.log").read_text(encoding="utf-8").splitlines()
    records = [json.loads(line) for line in lines]
    assert any(r["constraint"] == "accounts_balance_check" and "exc_info" in r for r in records)
