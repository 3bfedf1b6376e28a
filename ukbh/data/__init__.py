from .base import DataSource
from .cached import CachedSource
from .govuk_client import DEFAULT_TIMEOUT, SOURCE_URL, GovUKSource
from .payload import (
    RawCalendarData,
    RawDivisionList,
    RawEvent,
    decode_calendar_data,
    encode_calendar_data,
)
from .sources import FallbackSource, FileSource

__all__ = [
    "DEFAULT_TIMEOUT",
    "SOURCE_URL",
    "CachedSource",
    "DataSource",
    "FallbackSource",
    "FileSource",
    "GovUKSource",
    "RawCalendarData",
    "RawDivisionList",
    "RawEvent",
    "decode_calendar_data",
    "encode_calendar_data",
]
