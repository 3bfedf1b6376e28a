from __future__ import annotations

from typing import Protocol, runtime_checkable

from .payload import RawCalendarData


@runtime_checkable
class DataSource(Protocol):
    """Anything that can produce raw GOV.UK-shaped calendar data.

    ``load`` raises a :class:`ukbh.errors.LoadError` subclass on failure.
    """

    def load(self) -> RawCalendarData: ...


__all__ = ["DataSource"]
