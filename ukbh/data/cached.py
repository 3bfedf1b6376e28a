"""Bundled snapshot of the GOV.UK feed.

Used as a backup, in tests, or where network access is unavailable. It is
not refreshed automatically: regenerate it with ``ukbh download``. GOV.UK
drops older years from its feed over time, so the snapshot and a fresh fetch
can cover different years; the two are never merged.
"""

from __future__ import annotations

from importlib import resources

from ..errors import DecodeError
from .payload import RawCalendarData, decode_calendar_data

SNAPSHOT_RESOURCE = "bank-holidays.json"


def read_snapshot_bytes() -> bytes:
    try:
        return resources.files(__package__).joinpath(SNAPSHOT_RESOURCE).read_bytes()
    except OSError as exc:
        raise DecodeError(f"Cached bank holidays unreadable: {exc}") from exc


class CachedSource:
    def load(self) -> RawCalendarData:
        return decode_calendar_data(read_snapshot_bytes())

    def __repr__(self) -> str:
        return "CachedSource()"


__all__ = ["SNAPSHOT_RESOURCE", "CachedSource", "read_snapshot_bytes"]
