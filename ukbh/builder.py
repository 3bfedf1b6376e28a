from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .data.payload import RawCalendarData, RawEvent
from .dates import DateAdapter
from .divisions import Division
from .errors import BuildError
from .model import BankHoliday

logger = logging.getLogger(__name__)


@dataclass
class _Pending:
    date: Any
    event: RawEvent
    notes: str
    divisions: list[Division] = field(default_factory=list)

    def freeze(self) -> BankHoliday:
        return BankHoliday(
            date=self.date,
            title=self.event.title,
            notes=self.notes,
            bunting=self.event.bunting,
            divisions=frozenset(self.divisions),
        )


def build_holidays(raw: RawCalendarData, dates: DateAdapter) -> tuple[BankHoliday, ...]:
    """Normalise per-division lists into one chronological tuple.

    Events with the same date and title in several divisions become a single
    record carrying all of those divisions. Divisions are walked in canonical
    order, and the date sort is stable, so same-day holidays keep the order
    in which they were first seen. One bad date fails the whole build.
    """
    pending: dict[tuple[Any, str], _Pending] = {}
    for item in raw:
        for event in item.events:
            try:
                day = dates.parse(event.date)
            except ValueError as exc:
                raise BuildError(
                    f"{item.division.value}: cannot parse date {event.date!r} "
                    f"for {event.title!r}: {exc}"
                ) from exc

            key = (day, event.title)
            entry = pending.get(key)
            if entry is None:
                entry = _Pending(date=day, event=event, notes=event.notes)
                pending[key] = entry
            elif not entry.notes and event.notes:
                entry.notes = event.notes
            if item.division not in entry.divisions:
                entry.divisions.append(item.division)

    holidays = tuple(sorted((entry.freeze() for entry in pending.values()), key=lambda h: h.date))
    logger.debug(
        "Built %s bank holidays from %s events (%s date backend)",
        len(holidays),
        raw.event_count,
        dates.name,
    )
    return holidays


__all__ = ["build_holidays"]
