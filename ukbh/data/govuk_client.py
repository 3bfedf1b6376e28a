from __future__ import annotations

import logging
from typing import Optional

import requests

from ..errors import HttpStatusError, TransportError
from .payload import RawCalendarData, decode_calendar_data

SOURCE_URL = "https://www.gov.uk/bank-holidays.json"
DEFAULT_TIMEOUT = 10.0

logger = logging.getLogger(__name__)


class GovUKSource:
    """Loads bank holidays from the GOV.UK JSON feed.

    One GET per ``load()`` call, no retries and no caching between calls.
    """

    def __init__(
        self,
        url: str = SOURCE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self) -> bytes:
        logger.debug("Loading bank holidays from %s", self.url)
        headers = {"Accept": "application/json"}
        try:
            resp = self.session.get(self.url, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Request to {self.url} failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise HttpStatusError(resp.status_code, self.url)
        return resp.content

    def load(self) -> RawCalendarData:
        return decode_calendar_data(self.fetch())

    def close(self) -> None:
        self.session.close()

    def __repr__(self) -> str:
        return f"GovUKSource(url={self.url!r}, timeout={self.timeout!r})"


__all__ = ["DEFAULT_TIMEOUT", "SOURCE_URL", "GovUKSource"]
