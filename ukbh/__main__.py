from __future__ import annotations

import argparse
import datetime as dt
import logging
import os
import sys
from typing import Optional

from .config import Settings, load_dotenv_if_available, load_settings
from .config_loader import ConfigLoadError
from .data.base import DataSource
from .data.cached import CachedSource
from .data.govuk_client import GovUKSource
from .data.payload import encode_calendar_data
from .data.sources import FallbackSource, FileSource
from .dates import parse_iso_date
from .divisions import Division
from .errors import BankHolidaysError
from .holiday_calendar import BankHolidayCalendar
from .model import BankHoliday
from .utils.atomic_io import atomic_write_json

logger = logging.getLogger("ukbh")


def _configure_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    log_format = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    log_datefmt = os.getenv("LOG_DATEFMT") or None
    log_tz = (os.getenv("LOG_TZ") or "local").strip().lower()
    if log_tz not in {"local", "utc"}:
        log_tz = "local"

    class _TZFormatter(logging.Formatter):
        def __init__(self, fmt: str, *, datefmt: str | None, tz: str) -> None:
            super().__init__(fmt=fmt, datefmt=datefmt)
            self._tz = tz

        def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
            if self._tz == "utc":
                ts = dt.datetime.fromtimestamp(record.created, tz=dt.UTC)
            else:
                ts = dt.datetime.fromtimestamp(record.created).astimezone()

            datefmt = datefmt or self.datefmt
            if datefmt:
                return ts.strftime(datefmt)
            return ts.isoformat(timespec="milliseconds")

    # Log lines go to stderr so stdout carries only answers.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_TZFormatter(log_format, datefmt=log_datefmt, tz=log_tz))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def _division_arg(value: str) -> Division:
    try:
        return Division.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _date_arg(value: str) -> dt.date:
    try:
        return parse_iso_date(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ukbh", description="UK bank holidays from GOV.UK data")
    p.add_argument(
        "--source",
        type=str,
        default="auto",
        choices=["auto", "remote", "cached"],
        help="Where to load holidays from; auto tries GOV.UK then the bundled snapshot",
    )
    p.add_argument(
        "--division",
        type=_division_arg,
        default=None,
        help="england-and-wales, scotland or northern-ireland (default: common to all)",
    )
    p.add_argument("--config", type=str, default=None, help="Path to YAML config")
    sub = p.add_subparsers(dest="cmd")

    today = sub.add_parser("today", help="Print whether a date (default today) is a bank holiday")
    today.add_argument("--date", type=_date_arg, default=None, help="YYYY-MM-DD")

    nxt = sub.add_parser("next", help="Print the next bank holiday")
    nxt.add_argument("--date", type=_date_arg, default=None, help="Search after YYYY-MM-DD")

    prev = sub.add_parser("previous", help="Print the previous bank holiday")
    prev.add_argument("--date", type=_date_arg, default=None, help="Search before YYYY-MM-DD")

    between = sub.add_parser("between", help="List bank holidays in an inclusive date range")
    between.add_argument("start", type=_date_arg)
    between.add_argument("end", type=_date_arg)

    download = sub.add_parser("download", help="Save the GOV.UK feed to a JSON file")
    download.add_argument("path", type=str)
    return p


def _select_source(settings: Settings, mode: str) -> DataSource:
    cached: DataSource = (
        FileSource(settings.snapshot_path) if settings.snapshot_path else CachedSource()
    )
    if mode == "cached":
        return cached
    remote = GovUKSource(settings.source_url, timeout=settings.timeout)
    if mode == "remote":
        return remote
    return FallbackSource(remote, cached)


def _where(division: Optional[Division]) -> str:
    return f"in {division.title}" if division else "across the UK"


def _describe(calendar: BankHolidayCalendar, holiday: BankHoliday) -> str:
    text = f"{holiday.title} ({calendar.dates.to_iso(holiday.date)})"
    if holiday.substitute:
        text += " [substitute day]"
    return text


def _run_today(calendar: BankHolidayCalendar, date: Optional[dt.date], division: Optional[Division]) -> int:
    day = calendar.dates.coerce(date) if date else calendar.dates.today()
    label = calendar.dates.to_iso(day)
    prefix = label if date else f"Today ({label})"
    matches = calendar.holidays_on(day, division)
    if matches:
        titles = ", ".join(h.title for h in matches)
        print(f"{prefix} is a bank holiday {_where(division)}: {titles}")
    else:
        print(f"{prefix} is not a bank holiday {_where(division)}")
    return 0


def _run_next(calendar: BankHolidayCalendar, date: Optional[dt.date], division: Optional[Division]) -> int:
    day = calendar.dates.coerce(date) if date else calendar.dates.today()
    holiday = calendar.next_holiday(day, division)
    if holiday is None:
        print("Next bank holiday cannot be determined", file=sys.stderr)
        return 2
    print(f"The next bank holiday {_where(division)} is {_describe(calendar, holiday)}")
    return 0


def _run_previous(calendar: BankHolidayCalendar, date: Optional[dt.date], division: Optional[Division]) -> int:
    day = calendar.dates.coerce(date) if date else calendar.dates.today()
    holiday = calendar.previous_holiday(day, division)
    if holiday is None:
        print("Previous bank holiday cannot be determined", file=sys.stderr)
        return 2
    print(f"The previous bank holiday {_where(division)} was {_describe(calendar, holiday)}")
    return 0


def _run_between(
    calendar: BankHolidayCalendar, start: dt.date, end: dt.date, division: Optional[Division]
) -> int:
    for holiday in calendar.holidays_between(start, end, division):
        print(_describe(calendar, holiday))
    return 0


def _run_download(settings: Settings, path: str) -> int:
    source = GovUKSource(settings.source_url, timeout=settings.timeout)
    raw = source.load()
    # Overwrites the target; older years are not carried over.
    try:
        atomic_write_json(path, encode_calendar_data(raw))
    except OSError as exc:
        logger.error("Failed to write bank holidays to %s: %s", path, exc)
        return 1
    logger.info("Saved %s events to %s", raw.event_count, path)
    return 0


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    load_dotenv_if_available()
    _configure_logging()
    parser = _build_parser()
    ns = parser.parse_args(argv)
    cmd = ns.cmd or "today"

    try:
        settings = load_settings(config_path=ns.config)
        if cmd == "download":
            return _run_download(settings, ns.path)

        calendar = BankHolidayCalendar.from_source(
            _select_source(settings, ns.source), dates=settings.date_backend
        )
        date = getattr(ns, "date", None)
        if cmd == "today":
            return _run_today(calendar, date, ns.division)
        if cmd == "next":
            return _run_next(calendar, date, ns.division)
        if cmd == "previous":
            return _run_previous(calendar, date, ns.division)
        if cmd == "between":
            return _run_between(calendar, ns.start, ns.end, ns.division)
    except (BankHolidaysError, ConfigLoadError) as exc:
        logger.error("%s", exc)
        return 1

    parser.print_help()
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
