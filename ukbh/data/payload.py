"""Decode/encode the GOV.UK ``bank-holidays.json`` document.

Shape::

    {
      "england-and-wales": {
        "division": "england-and-wales",
        "events": [
          {"title": "New Year’s Day", "date": "2025-01-01", "notes": "", "bunting": true},
          ...
        ]
      },
      "scotland": {...},
      "northern-ireland": {...}
    }

Every data source funnels its bytes through :func:`decode_calendar_data`, so
a schema problem surfaces the same way whatever the origin. Dates stay as
strings here; parsing them is the builder's job.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from ..divisions import Division
from ..errors import DecodeError


@dataclass(frozen=True)
class RawEvent:
    title: str
    date: str
    notes: str = ""
    bunting: bool = False


@dataclass(frozen=True)
class RawDivisionList:
    division: Division
    events: tuple[RawEvent, ...] = ()


@dataclass(frozen=True)
class RawCalendarData:
    divisions: Mapping[Division, RawDivisionList] = field(default_factory=dict)

    @classmethod
    def from_lists(cls, lists: Iterable[RawDivisionList]) -> "RawCalendarData":
        by_division = {item.division: item for item in lists}
        # Missing divisions become empty lists.
        complete = {
            division: by_division.get(division, RawDivisionList(division=division))
            for division in Division.all()
        }
        return cls(divisions=complete)

    def events(self, division: Division) -> tuple[RawEvent, ...]:
        item = self.divisions.get(division)
        return item.events if item is not None else ()

    def __iter__(self) -> Iterator[RawDivisionList]:
        for division in Division.all():
            item = self.divisions.get(division)
            if item is not None:
                yield item

    @property
    def event_count(self) -> int:
        return sum(len(item.events) for item in self)


Payload = Union[bytes, bytearray, str, Mapping[str, Any]]


def _decode_event(division: Division, index: int, item: Any) -> RawEvent:
    where = f"{division.value} event #{index}"
    if not isinstance(item, dict):
        raise DecodeError(f"{where}: expected an object, got {type(item).__name__}")

    title = item.get("title")
    date = item.get("date")
    if not isinstance(title, str):
        raise DecodeError(f"{where}: 'title' must be a string")
    if not isinstance(date, str):
        raise DecodeError(f"{where}: 'date' must be a string")

    notes = item.get("notes")
    if notes is None:
        notes = ""
    elif not isinstance(notes, str):
        raise DecodeError(f"{where}: 'notes' must be a string")

    bunting = item.get("bunting", False)
    if bunting is None:
        bunting = False
    elif not isinstance(bunting, bool):
        raise DecodeError(f"{where}: 'bunting' must be a boolean")

    return RawEvent(title=title, date=date, notes=notes, bunting=bunting)


def _decode_division(key: Any, value: Any) -> RawDivisionList:
    try:
        division = Division(key)
    except ValueError as exc:
        raise DecodeError(f"unknown division {key!r}") from exc

    if not isinstance(value, dict):
        raise DecodeError(f"{key}: expected an object, got {type(value).__name__}")

    declared = value.get("division", key)
    if declared != key:
        raise DecodeError(f"divisions do not match: key {key!r} declares {declared!r}")

    events = value.get("events")
    if not isinstance(events, list):
        raise DecodeError(f"{key}: 'events' must be a list")

    return RawDivisionList(
        division=division,
        events=tuple(_decode_event(division, idx, item) for idx, item in enumerate(events)),
    )


def decode_calendar_data(payload: Payload) -> RawCalendarData:
    """Parse JSON bytes/text (or an already-loaded mapping) into raw lists."""
    if isinstance(payload, (bytes, bytearray, str)):
        try:
            loaded: Any = json.loads(payload)
        except (ValueError, RecursionError) as exc:
            raise DecodeError(f"invalid JSON: {exc}") from exc
    else:
        loaded = payload

    if not isinstance(loaded, Mapping):
        raise DecodeError(
            f"expected a mapping of divisions at the root, got {type(loaded).__name__}"
        )

    return RawCalendarData.from_lists(
        [_decode_division(key, value) for key, value in loaded.items()]
    )


def encode_calendar_data(raw: RawCalendarData) -> dict[str, Any]:
    """Inverse of decode; canonical division order, events sorted by date."""
    out: dict[str, Any] = {}
    for item in raw:
        events = sorted(item.events, key=lambda ev: ev.date)
        out[item.division.value] = {
            "division": item.division.value,
            "events": [
                {
                    "title": ev.title,
                    "date": ev.date,
                    "notes": ev.notes,
                    "bunting": ev.bunting,
                }
                for ev in events
            ],
        }
    return out


__all__ = [
    "Payload",
    "RawCalendarData",
    "RawDivisionList",
    "RawEvent",
    "decode_calendar_data",
    "encode_calendar_data",
]
