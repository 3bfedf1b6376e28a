"""UK bank holidays as published by GOV.UK.

GOV.UK lists bank holidays separately for three divisions: England and
Wales, Scotland and Northern Ireland. Calendar methods taking a ``division``
consider only that division, or only holidays common to all divisions when
it is ``None``.

    >>> from ukbh import BankHolidayCalendar, Division
    >>> calendar = BankHolidayCalendar.cached()
    >>> calendar.is_holiday("2025-12-25")
    True
    >>> calendar.is_holiday("2025-07-14", Division.NORTHERN_IRELAND)
    True
"""

from .data import (
    SOURCE_URL,
    CachedSource,
    DataSource,
    FallbackSource,
    FileSource,
    GovUKSource,
)
from .dates import DateAdapter, DatetimeDates, PandasDates, get_date_adapter
from .divisions import ALL_DIVISIONS, Division
from .errors import (
    BankHolidaysError,
    BuildError,
    DecodeError,
    HttpStatusError,
    InvalidDateError,
    LoadError,
    TransportError,
)
from .holiday_calendar import BankHolidayCalendar
from .model import BankHoliday
from .work_days import MonToFriWorkDays, WorkDays

__all__ = [
    "ALL_DIVISIONS",
    "SOURCE_URL",
    "BankHoliday",
    "BankHolidayCalendar",
    "BankHolidaysError",
    "BuildError",
    "CachedSource",
    "DataSource",
    "DateAdapter",
    "DatetimeDates",
    "DecodeError",
    "Division",
    "FallbackSource",
    "FileSource",
    "GovUKSource",
    "HttpStatusError",
    "InvalidDateError",
    "LoadError",
    "MonToFriWorkDays",
    "PandasDates",
    "TransportError",
    "WorkDays",
    "get_date_adapter",
]
