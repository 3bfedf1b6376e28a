from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from ukbh.holiday_calendar import BankHolidayCalendar


@pytest.fixture(autouse=True)
def _clean_ukbh_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "UKBH_CONFIG",
        "UKBH_DATE_BACKEND",
        "UKBH_SNAPSHOT_PATH",
        "UKBH_SOURCE_URL",
        "UKBH_TIMEOUT",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def isolated_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    old_handlers = list(root.handlers)
    old_level = root.level

    for handler in old_handlers:
        root.removeHandler(handler)

    try:
        yield root
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        root.setLevel(old_level)
        for handler in old_handlers:
            root.addHandler(handler)


@pytest.fixture
def make_log_record() -> Callable[..., logging.LogRecord]:
    def _make(
        *,
        name: str = "ukbh.test",
        level: int = logging.INFO,
        msg: str = "hello",
        created: float | None = None,
    ) -> logging.LogRecord:
        record = logging.LogRecord(
            name=name,
            level=level,
            pathname=__file__,
            lineno=1,
            msg=msg,
            args=(),
            exc_info=None,
        )
        if created is not None:
            record.created = created
            record.msecs = (created - int(created)) * 1000.0
        return record

    return _make


def _event(title: str, date: str, notes: str = "") -> dict[str, Any]:
    return {"title": title, "date": date, "notes": notes, "bunting": True}


@pytest.fixture
def small_payload() -> dict[str, Any]:
    """New Year's Day everywhere plus one Northern Ireland-only holiday."""
    new_year = _event("New Year’s Day", "2025-01-01")
    return {
        "england-and-wales": {"division": "england-and-wales", "events": [new_year]},
        "scotland": {"division": "scotland", "events": [new_year]},
        "northern-ireland": {
            "division": "northern-ireland",
            "events": [new_year, _event("Battle of the Boyne", "2025-07-12")],
        },
    }


@pytest.fixture(scope="session")
def cached_calendar() -> BankHolidayCalendar:
    return BankHolidayCalendar.cached(dates="datetime")
