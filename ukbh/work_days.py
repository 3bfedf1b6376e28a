from __future__ import annotations

from typing import Any, Protocol


class WorkDays(Protocol):
    """Decides whether a date is a working day, ignoring bank holidays."""

    def is_work_day(self, date: Any) -> bool: ...


class MonToFriWorkDays:
    """Typical working week, Monday to Friday."""

    def is_work_day(self, date: Any) -> bool:
        # datetime.date and pandas.Timestamp both expose weekday(), Monday=0.
        return date.weekday() < 5

    def __repr__(self) -> str:
        return "MonToFriWorkDays()"


__all__ = ["MonToFriWorkDays", "WorkDays"]
