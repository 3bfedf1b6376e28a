"""Date representation adapters.

Bank holiday dates are ISO-8601 calendar dates without time or zone. The
calendar stores and returns them in one of two representations:

- ``datetime`` (default): :class:`datetime.date`
- ``pandas``: :class:`pandas.Timestamp` normalised to midnight

The backend is picked with ``UKBH_DATE_BACKEND`` or by passing an adapter
(or its name) to the calendar constructors. Query behaviour is identical
under either backend.
"""

from __future__ import annotations

import datetime as dt
import os
import re
from typing import Any, Protocol, Union

from .errors import InvalidDateError

DEFAULT_BACKEND = "datetime"
BACKEND_ENV = "UKBH_DATE_BACKEND"

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DateAdapter(Protocol):
    name: str

    def parse(self, text: str) -> Any: ...

    def coerce(self, value: Any) -> Any: ...

    def today(self) -> Any: ...

    def weekday(self, value: Any) -> int: ...

    def shift(self, value: Any, days: int) -> Any: ...

    def to_iso(self, value: Any) -> str: ...


def parse_iso_date(text: Any) -> dt.date:
    """Strict ``YYYY-MM-DD`` parse; raises ValueError on anything else."""
    if not isinstance(text, str) or not _ISO_DATE.match(text.strip()):
        raise ValueError(f"expected a YYYY-MM-DD date, got {text!r}")
    return dt.date.fromisoformat(text.strip())


def _to_stdlib_date(value: Any) -> dt.date:
    # datetime (and pandas.Timestamp) subclass date; keep the calendar day only.
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return parse_iso_date(value)
        except ValueError as exc:
            raise InvalidDateError(str(exc)) from exc
    raise InvalidDateError(f"cannot use {type(value).__name__} as a date: {value!r}")


class DatetimeDates:
    name = "datetime"

    def parse(self, text: str) -> dt.date:
        return parse_iso_date(text)

    def coerce(self, value: Any) -> dt.date:
        return _to_stdlib_date(value)

    def today(self) -> dt.date:
        return dt.date.today()

    def weekday(self, value: dt.date) -> int:
        return value.weekday()

    def shift(self, value: dt.date, days: int) -> dt.date:
        return value + dt.timedelta(days=days)

    def to_iso(self, value: dt.date) -> str:
        return value.isoformat()

    def __repr__(self) -> str:
        return "DatetimeDates()"


class PandasDates:
    name = "pandas"

    def __init__(self) -> None:
        try:
            import pandas as pd
        except ImportError as exc:
            raise ImportError(
                "The 'pandas' date backend requires pandas. "
                "Install it with: pip install 'ukbh[pandas]'"
            ) from exc
        self._pd = pd

    def parse(self, text: str) -> Any:
        return self._pd.Timestamp(parse_iso_date(text))

    def coerce(self, value: Any) -> Any:
        if isinstance(value, self._pd.Timestamp):
            if value.tzinfo is not None:
                value = value.tz_localize(None)
            return value.normalize()
        return self._pd.Timestamp(_to_stdlib_date(value))

    def today(self) -> Any:
        return self._pd.Timestamp(dt.date.today())

    def weekday(self, value: Any) -> int:
        return value.weekday()

    def shift(self, value: Any, days: int) -> Any:
        return value + self._pd.Timedelta(days=days)

    def to_iso(self, value: Any) -> str:
        return value.strftime("%Y-%m-%d")

    def __repr__(self) -> str:
        return "PandasDates()"


_BACKENDS = {
    "datetime": DatetimeDates,
    "pandas": PandasDates,
}


def available_backends() -> tuple[str, ...]:
    return tuple(_BACKENDS)


def get_date_adapter(name: str | None = None) -> DateAdapter:
    """Return the adapter called ``name`` (default: ``UKBH_DATE_BACKEND``)."""
    resolved = (name or os.getenv(BACKEND_ENV) or DEFAULT_BACKEND).strip().lower()
    factory = _BACKENDS.get(resolved)
    if factory is None:
        raise ValueError(
            f"Unknown date backend {resolved!r}; expected one of {', '.join(_BACKENDS)}"
        )
    return factory()


DatesLike = Union[DateAdapter, str, None]


def resolve_dates(dates: DatesLike) -> DateAdapter:
    if dates is None or isinstance(dates, str):
        return get_date_adapter(dates)
    return dates


__all__ = [
    "DEFAULT_BACKEND",
    "DateAdapter",
    "DatesLike",
    "DatetimeDates",
    "PandasDates",
    "available_backends",
    "get_date_adapter",
    "parse_iso_date",
    "resolve_dates",
]
