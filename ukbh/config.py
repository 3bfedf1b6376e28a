from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from .config_loader import load_yaml_config
from .data.govuk_client import DEFAULT_TIMEOUT, SOURCE_URL
from .dates import DEFAULT_BACKEND, available_backends

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    source_url: str = SOURCE_URL
    timeout: float = DEFAULT_TIMEOUT
    date_backend: str = DEFAULT_BACKEND
    snapshot_path: Optional[str] = None  # local JSON used instead of the bundled snapshot


def load_dotenv_if_available() -> None:
    load_dotenv(override=False)


def _first(*values: Any) -> Any:
    for value in values:
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def _normalize_url(url: Optional[str]) -> str:
    if not url:
        return SOURCE_URL

    url = str(url).strip()
    if not url:
        return SOURCE_URL

    if not url.startswith("http://") and not url.startswith("https://"):
        url = f"https://{url}"

    parsed = urlparse(url)
    if not parsed.hostname:
        logger.warning("Ignoring invalid source URL %r", url)
        return SOURCE_URL
    return url


def _parse_timeout(value: Any) -> float:
    if value is None:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid timeout %r; using %s", value, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    if not math.isfinite(timeout):
        logger.warning("Timeout must be finite, got %r; using %s", value, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    if timeout <= 0:
        logger.warning("Timeout must be positive, got %r; using %s", value, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    return timeout


def _parse_backend(value: Any) -> str:
    if value is None:
        return DEFAULT_BACKEND
    backend = str(value).strip().lower()
    if backend not in available_backends():
        logger.warning("Unknown date backend %r; using %s", value, DEFAULT_BACKEND)
        return DEFAULT_BACKEND
    return backend


def load_settings(
    *,
    config_path: Optional[str] = None,
    source_url: Optional[str] = None,
    timeout: Optional[float] = None,
    date_backend: Optional[str] = None,
    snapshot_path: Optional[str] = None,
) -> Settings:
    """Resolve settings: explicit arguments > environment > YAML file > defaults."""
    load_dotenv_if_available()
    file_cfg = load_yaml_config(config_path).raw

    snapshot = _first(snapshot_path, os.getenv("UKBH_SNAPSHOT_PATH"), file_cfg.get("snapshot_path"))

    return Settings(
        source_url=_normalize_url(
            _first(source_url, os.getenv("UKBH_SOURCE_URL"), file_cfg.get("source_url"))
        ),
        timeout=_parse_timeout(
            _first(timeout, os.getenv("UKBH_TIMEOUT"), file_cfg.get("timeout"))
        ),
        date_backend=_parse_backend(
            _first(date_backend, os.getenv("UKBH_DATE_BACKEND"), file_cfg.get("date_backend"))
        ),
        snapshot_path=str(snapshot) if snapshot is not None else None,
    )


__all__ = ["Settings", "load_dotenv_if_available", "load_settings"]
