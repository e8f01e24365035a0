from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

import yaml

from settings.types import MapSettings

logger = logging.getLogger(__name__)


def settings_path() -> Path | None:
    raw = (os.getenv("LANDMAP_SETTINGS_PATH") or "").strip()
    return Path(raw) if raw else None


def log_level() -> str:
    return (os.getenv("LANDMAP_LOG_LEVEL") or "INFO").strip().upper()


def cors_origins() -> list[str]:
    raw = os.getenv("LANDMAP_CORS_ORIGINS") or "http://localhost:3000"
    return [o.strip() for o in raw.split(",") if o.strip()]


def _load_yaml(path: Path) -> dict:
    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid settings yaml root: {path}")
    return data


def load_settings(path: Path | None = None) -> MapSettings:
    """
    Resolve map settings: YAML file values over the model defaults.

    With no path, only defaults are used.
    """
    if path is None:
        return MapSettings()
    logger.info("Loading map settings from %s", path)
    return MapSettings.model_validate(_load_yaml(path))


@lru_cache(maxsize=1)
def get_settings() -> MapSettings:
    return load_settings(settings_path())


def clear_settings_cache() -> None:
    """
    Forget cached settings so the next `get_settings()` re-reads env and YAML.
    """
    get_settings.cache_clear()
