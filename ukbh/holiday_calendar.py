from __future__ import annotations

import asyncio
import logging
from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Iterator
from typing import Any, Optional

import requests

from .builder import build_holidays
from .config import Settings, load_settings
from .data.base import DataSource
from .data.cached import CachedSource
from .data.govuk_client import GovUKSource
from .data.payload import RawCalendarData
from .dates import DateAdapter, DatesLike, resolve_dates
from .divisions import Division
from .model import BankHoliday
from .work_days import MonToFriWorkDays, WorkDays

logger = logging.getLogger(__name__)


class BankHolidayCalendar:
    """Read-only calendar of known UK bank holidays.

    Bank holidays differ between divisions of the UK. Every query taking a
    ``division`` considers only that division's holidays, or, when it is
    ``None``, only holidays common to all three divisions.

    Date arguments may be ``datetime.date``/``datetime.datetime``,
    ``pandas.Timestamp`` or ``YYYY-MM-DD`` strings; results use the
    calendar's date backend. Instances never change after construction and
    can be shared freely between threads.
    """

    def __init__(
        self,
        holidays: Iterable[BankHoliday],
        *,
        dates: DatesLike = None,
        work_days: Optional[WorkDays] = None,
    ) -> None:
        self._dates: DateAdapter = resolve_dates(dates)
        self._holidays: tuple[BankHoliday, ...] = tuple(sorted(holidays, key=lambda h: h.date))
        self._keys: tuple[Any, ...] = tuple(h.date for h in self._holidays)
        self._work_days: WorkDays = work_days or MonToFriWorkDays()
        if not self._holidays:
            logger.warning("Empty bank holiday calendar")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_raw(
        cls,
        raw: RawCalendarData,
        *,
        dates: DatesLike = None,
        work_days: Optional[WorkDays] = None,
    ) -> "BankHolidayCalendar":
        adapter = resolve_dates(dates)
        return cls(build_holidays(raw, adapter), dates=adapter, work_days=work_days)

    @classmethod
    def from_source(
        cls,
        source: DataSource,
        *,
        dates: DatesLike = None,
        work_days: Optional[WorkDays] = None,
    ) -> "BankHolidayCalendar":
        return cls.from_raw(source.load(), dates=dates, work_days=work_days)

    @classmethod
    def cached(
        cls,
        *,
        dates: DatesLike = None,
        work_days: Optional[WorkDays] = None,
    ) -> "BankHolidayCalendar":
        """Build from the bundled snapshot; no network access."""
        return cls.from_source(CachedSource(), dates=dates, work_days=work_days)

    @classmethod
    def load(
        cls,
        settings: Optional[Settings] = None,
        *,
        session: Optional[requests.Session] = None,
        dates: DatesLike = None,
        work_days: Optional[WorkDays] = None,
    ) -> "BankHolidayCalendar":
        """Fetch from GOV.UK. Raises on failure; there is no implicit fallback.

        Wrap the sources in :class:`ukbh.data.FallbackSource` and use
        :meth:`from_source` to fall back to the snapshot.
        """
        settings = settings or load_settings()
        source = GovUKSource(settings.source_url, timeout=settings.timeout, session=session)
        return cls.from_source(
            source,
            dates=dates if dates is not None else settings.date_backend,
            work_days=work_days,
        )

    @classmethod
    async def aload(
        cls,
        source: DataSource,
        *,
        dates: DatesLike = None,
        work_days: Optional[WorkDays] = None,
    ) -> "BankHolidayCalendar":
        """Load and build in a worker thread so the event loop is not blocked."""
        return await asyncio.to_thread(cls.from_source, source, dates=dates, work_days=work_days)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def dates(self) -> DateAdapter:
        return self._dates

    @property
    def work_days(self) -> WorkDays:
        return self._work_days

    @property
    def first_date(self) -> Any:
        return self._keys[0] if self._keys else None

    @property
    def last_date(self) -> Any:
        return self._keys[-1] if self._keys else None

    def holidays(self, division: Optional[Division] = None) -> list[BankHoliday]:
        return [h for h in self._holidays if h.applies_to(division)]

    def holidays_on(self, date: Any, division: Optional[Division] = None) -> list[BankHoliday]:
        day = self._dates.coerce(date)
        lo = bisect_left(self._keys, day)
        hi = bisect_right(self._keys, day)
        return [h for h in self._holidays[lo:hi] if h.applies_to(division)]

    def is_holiday(self, date: Any, division: Optional[Division] = None) -> bool:
        return bool(self.holidays_on(date, division))

    def holidays_between(
        self,
        start: Any,
        end: Any,
        division: Optional[Division] = None,
    ) -> list[BankHoliday]:
        """Holidays with ``start <= date <= end``; empty if ``start > end``."""
        lo_day = self._dates.coerce(start)
        hi_day = self._dates.coerce(end)
        if lo_day > hi_day:
            return []
        lo = bisect_left(self._keys, lo_day)
        hi = bisect_right(self._keys, hi_day)
        return [h for h in self._holidays[lo:hi] if h.applies_to(division)]

    def iter_holidays_after(
        self, date: Any, division: Optional[Division] = None
    ) -> Iterator[BankHoliday]:
        """Ascending holidays strictly after ``date``."""
        start = bisect_right(self._keys, self._dates.coerce(date))
        return (h for h in self._holidays[start:] if h.applies_to(division))

    def iter_holidays_before(
        self, date: Any, division: Optional[Division] = None
    ) -> Iterator[BankHoliday]:
        """Descending holidays strictly before ``date``."""
        end = bisect_left(self._keys, self._dates.coerce(date))
        return (h for h in reversed(self._holidays[:end]) if h.applies_to(division))

    def next_holiday(
        self, after: Any, division: Optional[Division] = None
    ) -> Optional[BankHoliday]:
        # None once the data runs out; GOV.UK only publishes a year or two ahead.
        return next(self.iter_holidays_after(after, division), None)

    def previous_holiday(
        self, before: Any, division: Optional[Division] = None
    ) -> Optional[BankHoliday]:
        return next(self.iter_holidays_before(before, division), None)

    # ------------------------------------------------------------------
    # Work days
    # ------------------------------------------------------------------
    def is_work_day(self, date: Any, division: Optional[Division] = None) -> bool:
        day = self._dates.coerce(date)
        return self._work_days.is_work_day(day) and not self.is_holiday(day, division)

    def iter_work_days_after(
        self, date: Any, division: Optional[Division] = None
    ) -> Iterator[Any]:
        """Work days strictly after ``date``. Infinite."""
        return self._walk_work_days(self._dates.coerce(date), division, 1)

    def iter_work_days_before(
        self, date: Any, division: Optional[Division] = None
    ) -> Iterator[Any]:
        """Work days strictly before ``date``, most recent first. Infinite."""
        return self._walk_work_days(self._dates.coerce(date), division, -1)

    def next_work_day(self, date: Any, division: Optional[Division] = None) -> Any:
        return next(self.iter_work_days_after(date, division))

    def previous_work_day(self, date: Any, division: Optional[Division] = None) -> Any:
        return next(self.iter_work_days_before(date, division))

    def _walk_work_days(self, day: Any, division: Optional[Division], step: int) -> Iterator[Any]:
        while True:
            day = self._dates.shift(day, step)
            if self.is_work_day(day, division):
                yield day

    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._holidays)

    def __iter__(self) -> Iterator[BankHoliday]:
        return iter(self._holidays)

    def __repr__(self) -> str:
        if not self._holidays:
            return f"<BankHolidayCalendar empty dates={self._dates.name}>"
        return (
            f"<BankHolidayCalendar {len(self._holidays)} holidays "
            f"{self._dates.to_iso(self.first_date)}..{self._dates.to_iso(self.last_date)} "
            f"dates={self._dates.name}>"
        )


__all__ = ["BankHolidayCalendar"]
