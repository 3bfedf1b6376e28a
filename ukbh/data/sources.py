from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import DecodeError, LoadError
from .base import DataSource
from .payload import RawCalendarData, decode_calendar_data

logger = logging.getLogger(__name__)


class FileSource:
    """Reads a GOV.UK-format JSON file from disk."""

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)

    def load(self) -> RawCalendarData:
        try:
            payload = self.path.read_bytes()
        except OSError as exc:
            raise DecodeError(f"Failed to read bank holidays file '{self.path}': {exc}") from exc
        return decode_calendar_data(payload)

    def __repr__(self) -> str:
        return f"FileSource({str(self.path)!r})"


class FallbackSource:
    """Tries ``primary`` and, on a load error, ``fallback``.

    Nothing in the calendar falls back on its own; callers opt in by
    building one of these. Errors from ``fallback`` propagate.
    """

    def __init__(self, primary: DataSource, fallback: DataSource):
        self.primary = primary
        self.fallback = fallback

    def load(self) -> RawCalendarData:
        try:
            return self.primary.load()
        except LoadError as exc:
            logger.error("Failed to load bank holidays from %r: %s", self.primary, exc)
            logger.info("Falling back to %r", self.fallback)
        return self.fallback.load()

    def __repr__(self) -> str:
        return f"FallbackSource({self.primary!r}, {self.fallback!r})"


__all__ = ["FallbackSource", "FileSource"]
