"""YAML settings file for ukbh (``ukbh.yaml`` or ``$UKBH_CONFIG``).

Recognised keys: ``source_url``, ``timeout``, ``date_backend`` and
``snapshot_path``. Hyphenated spellings (``source-url``) are accepted.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV = "UKBH_CONFIG"
DEFAULT_CONFIG_FILE = "ukbh.yaml"
KNOWN_KEYS = frozenset({"source_url", "timeout", "date_backend", "snapshot_path"})


class ConfigLoadError(RuntimeError):
    """The settings file exists but is unreadable or not a YAML mapping."""


@dataclass(frozen=True)
class ConfigData:
    raw: dict[str, Any] = field(default_factory=dict)
    path: Optional[Path] = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)


def config_path(path: str | os.PathLike[str] | None = None) -> Path:
    if path is not None:
        return Path(path)
    return Path(os.getenv(CONFIG_ENV) or DEFAULT_CONFIG_FILE)


def _normalise_keys(loaded: dict[Any, Any], source: Path) -> dict[str, Any]:
    settings: dict[str, Any] = {}
    for key, value in loaded.items():
        name = str(key).strip().lower().replace("-", "_")
        if name not in KNOWN_KEYS:
            logger.warning("Ignoring unknown setting %r in %s", key, source)
            continue
        settings[name] = value
    return settings


def load_yaml_config(path: str | os.PathLike[str] | None = None) -> ConfigData:
    """Read the settings file; a missing file yields empty settings."""
    p = config_path(path)
    if not p.exists():
        return ConfigData()

    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Failed to read config file '{p}': {exc}") from exc
    try:
        loaded: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"Failed to parse config file '{p}': {exc}") from exc

    if loaded is None:
        return ConfigData(path=p)
    if not isinstance(loaded, dict):
        raise ConfigLoadError(
            f"Config file '{p}' must have a mapping of settings at its root, "
            f"got {type(loaded).__name__}."
        )

    logger.debug("Loaded settings from %s", p)
    return ConfigData(raw=_normalise_keys(loaded, p), path=p)


__all__ = ["ConfigData", "ConfigLoadError", "config_path", "load_yaml_config"]
