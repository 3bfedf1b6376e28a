from __future__ import annotations

import datetime as dt
from itertools import islice
from typing import Any

import pytest
from ukbh.divisions import Division
from ukbh.holiday_calendar import BankHolidayCalendar
from ukbh.work_days import MonToFriWorkDays


def _d(text: str) -> dt.date:
    return dt.date.fromisoformat(text)


class MonToWedWorkDays:
    """Part-time week."""

    def is_work_day(self, date: Any) -> bool:
        return date.weekday() < 3


def test_mon_to_fri() -> None:
    work_days = MonToFriWorkDays()

    assert work_days.is_work_day(_d("2025-12-19"))
    assert not work_days.is_work_day(_d("2025-12-20"))
    assert not work_days.is_work_day(_d("2025-12-21"))


@pytest.mark.parametrize(
    ("division", "expected"),
    [
        (
            None,
            [
                "2025-12-22", "2025-12-23", "2025-12-24", "2025-12-29",
                "2025-12-30", "2025-12-31", "2026-01-02", "2026-01-05",
            ],
        ),
        (
            Division.SCOTLAND,
            [
                "2025-12-22", "2025-12-23", "2025-12-24", "2025-12-29",
                "2025-12-30", "2025-12-31", "2026-01-05", "2026-01-06",
            ],
        ),
    ],
)
def test_work_days_after(
    cached_calendar: BankHolidayCalendar, division: Division | None, expected: list[str]
) -> None:
    got = list(islice(cached_calendar.iter_work_days_after("2025-12-19", division), len(expected)))

    assert got == [_d(day) for day in expected]


@pytest.mark.parametrize(
    ("division", "expected"),
    [
        (
            None,
            [
                "2026-01-02", "2025-12-31", "2025-12-30", "2025-12-29",
                "2025-12-24", "2025-12-23", "2025-12-22", "2025-12-19",
            ],
        ),
        (
            Division.SCOTLAND,
            [
                "2025-12-31", "2025-12-30", "2025-12-29", "2025-12-24",
                "2025-12-23", "2025-12-22", "2025-12-19", "2025-12-18",
            ],
        ),
    ],
)
def test_work_days_before(
    cached_calendar: BankHolidayCalendar, division: Division | None, expected: list[str]
) -> None:
    got = list(islice(cached_calendar.iter_work_days_before("2026-01-05", division), len(expected)))

    assert got == [_d(day) for day in expected]


def test_next_and_previous_work_day(cached_calendar: BankHolidayCalendar) -> None:
    assert cached_calendar.next_work_day("2025-12-24") == _d("2025-12-29")
    assert cached_calendar.next_work_day("2025-12-31", Division.SCOTLAND) == _d("2026-01-05")
    assert cached_calendar.previous_work_day("2026-01-05") == _d("2026-01-02")
    assert cached_calendar.previous_work_day("2026-04-07", Division.ENGLAND_AND_WALES) == _d(
        "2026-04-02"
    )
    assert cached_calendar.previous_work_day("2026-04-07") == _d("2026-04-06")


def test_is_work_day(cached_calendar: BankHolidayCalendar) -> None:
    assert cached_calendar.is_work_day("2025-12-24")
    assert not cached_calendar.is_work_day("2025-12-25")
    assert not cached_calendar.is_work_day("2025-12-27")
    assert cached_calendar.is_work_day("2026-01-02", Division.ENGLAND_AND_WALES)
    assert not cached_calendar.is_work_day("2026-01-02", Division.SCOTLAND)


def test_work_days_continue_past_known_holidays(cached_calendar: BankHolidayCalendar) -> None:
    # No holiday data for 2031, so only weekends are skipped.
    got = list(islice(cached_calendar.iter_work_days_after("2031-01-03"), 3))

    assert got == [_d("2031-01-06"), _d("2031-01-07"), _d("2031-01-08")]


def test_part_time_week() -> None:
    calendar = BankHolidayCalendar.cached(dates="datetime", work_days=MonToWedWorkDays())
    start = _d("2026-02-01")  # Sunday
    pattern = [False, True, True, True, False, False, False]

    for offset in range(28):
        day = start + dt.timedelta(days=offset)
        assert calendar.is_work_day(day, Division.SCOTLAND) is pattern[offset % 7], day


def test_work_days_match_across_backends(cached_calendar: BankHolidayCalendar) -> None:
    pytest.importorskip("pandas")
    pandas_calendar = BankHolidayCalendar.cached(dates="pandas")

    ours = list(islice(cached_calendar.iter_work_days_after("2025-12-19"), 10))
    theirs = list(islice(pandas_calendar.iter_work_days_after("2025-12-19"), 10))

    assert [d.isoformat() for d in ours] == [pandas_calendar.dates.to_iso(t) for t in theirs]
