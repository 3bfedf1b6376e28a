from __future__ import annotations


class BankHolidaysError(RuntimeError):
    """Base error for bank holiday loading and building."""


class LoadError(BankHolidaysError):
    """Raw calendar data could not be obtained from a data source."""


class TransportError(LoadError):
    """Network, DNS, TLS or timeout failure while fetching data."""


class HttpStatusError(LoadError):
    def __init__(self, status_code: int, url: str | None = None) -> None:
        self.status_code = status_code
        self.url = url
        target = f" from {url}" if url else ""
        super().__init__(f"HTTP {status_code}{target}")


class DecodeError(LoadError):
    """Payload is not valid JSON or does not match the GOV.UK schema."""

    def __init__(self, diagnostic: str) -> None:
        self.diagnostic = diagnostic
        super().__init__(diagnostic)


class BuildError(BankHolidaysError):
    """Raw events could not be normalised (e.g. an unparseable date)."""

    def __init__(self, diagnostic: str) -> None:
        self.diagnostic = diagnostic
        super().__init__(diagnostic)


class InvalidDateError(BankHolidaysError, ValueError):
    """A caller-supplied value cannot be used as a calendar date."""


__all__ = [
    "BankHolidaysError",
    "BuildError",
    "DecodeError",
    "HttpStatusError",
    "InvalidDateError",
    "LoadError",
    "TransportError",
]
