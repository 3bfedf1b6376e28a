import datetime as dt
import logging

import pytest
from ukbh.__main__ import _configure_logging

FIXED_CREATED = dt.datetime(2025, 12, 25, 9, 30, 15, 250000, tzinfo=dt.UTC).timestamp()


def _format_root(record: logging.LogRecord) -> str:
    root = logging.getLogger()
    assert len(root.handlers) == 1
    return root.handlers[0].format(record).strip()


def _utc_iso() -> str:
    return dt.datetime.fromtimestamp(FIXED_CREATED, tz=dt.UTC).isoformat(timespec="milliseconds")


def _local_iso() -> str:
    return dt.datetime.fromtimestamp(FIXED_CREATED).astimezone().isoformat(timespec="milliseconds")


@pytest.fixture
def log_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("LOG_TZ", "utc")
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    monkeypatch.delenv("LOG_DATEFMT", raising=False)
    return monkeypatch


def test_default_format_has_timestamp_and_logger_name(
    isolated_root_logger, log_env, make_log_record
) -> None:
    _configure_logging()

    line = _format_root(make_log_record(created=FIXED_CREATED))
    assert line == f"{_utc_iso()} INFO ukbh.test - hello"


@pytest.mark.parametrize("tz", ["local", "bad-value", None])
def test_local_time_used_unless_utc_requested(
    isolated_root_logger, log_env, make_log_record, tz
) -> None:
    if tz is None:
        log_env.delenv("LOG_TZ", raising=False)
    else:
        log_env.setenv("LOG_TZ", tz)

    _configure_logging()

    line = _format_root(make_log_record(created=FIXED_CREATED))
    assert line == f"{_local_iso()} INFO ukbh.test - hello"


def test_log_tz_normalizes_whitespace_and_case(
    isolated_root_logger, log_env, make_log_record
) -> None:
    log_env.setenv("LOG_TZ", " UTC ")

    _configure_logging()

    assert _format_root(make_log_record(created=FIXED_CREATED)).startswith(_utc_iso())


def test_datefmt_and_format_overrides(isolated_root_logger, log_env, make_log_record) -> None:
    log_env.setenv("LOG_DATEFMT", "%Y-%m-%d %H:%M")
    log_env.setenv("LOG_FORMAT", "[%(asctime)s] %(name)s: %(message)s")

    _configure_logging()

    line = _format_root(make_log_record(created=FIXED_CREATED))
    assert line == "[2025-12-25 09:30] ukbh.test: hello"


def test_reconfigure_replaces_handlers(isolated_root_logger, log_env, make_log_record) -> None:
    existing = logging.NullHandler()
    isolated_root_logger.addHandler(existing)
    log_env.setenv("LOG_FORMAT", "A:%(message)s")

    _configure_logging()
    assert existing not in isolated_root_logger.handlers
    first = isolated_root_logger.handlers[0]

    log_env.setenv("LOG_FORMAT", "B:%(message)s")
    _configure_logging()
    assert len(isolated_root_logger.handlers) == 1
    assert isolated_root_logger.handlers[0] is not first
    assert _format_root(make_log_record(created=FIXED_CREATED)) == "B:hello"


def test_log_level_filters_and_writes_to_stderr(isolated_root_logger, log_env, capsys) -> None:
    log_env.setenv("LOG_LEVEL", "WARNING")
    log_env.setenv("LOG_FORMAT", "%(levelname)s %(name)s - %(message)s")

    _configure_logging()
    capsys.readouterr()

    logger = logging.getLogger("ukbh.test")
    logger.info("quiet")
    logger.warning("loud")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.strip() == "WARNING ukbh.test - loud"


def test_invalid_log_level_defaults_to_info(isolated_root_logger, log_env) -> None:
    log_env.setenv("LOG_LEVEL", "NOPE")

    _configure_logging()

    assert isolated_root_logger.level == logging.INFO
