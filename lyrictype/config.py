from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".lyrictype" / "config.yaml"
DEFAULT_API_URL = "http://localhost:54321"


@dataclass(frozen=True)
class Settings:
    """Runtime settings. File: ~/.lyrictype/config.yaml, overridden by LYRICTYPE_* env vars."""

    api_url: str = DEFAULT_API_URL
    api_key: str = ""
    user_id: Optional[str] = None
    timed: bool = False
    request_timeout: float = 10.0


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def load_settings(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from YAML (if present) then apply environment overrides."""
    path = path or DEFAULT_CONFIG_PATH
    env = os.environ if environ is None else environ
    settings = Settings()

    if path.exists():
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (yaml.YAMLError, OSError) as e:
            logger.warning("Could not read settings from %s: %s", path, e)
            raw = {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring %s: expected a mapping at the top level", path)
            raw = {}
        settings = replace(
            settings,
            api_url=str(raw.get("api_url", settings.api_url)),
            api_key=str(raw.get("api_key", settings.api_key)),
            user_id=str(raw["user_id"]) if raw.get("user_id") else None,
            timed=_as_bool(raw.get("timed", settings.timed)),
            request_timeout=float(raw.get("request_timeout", settings.request_timeout)),
        )

    if env.get("LYRICTYPE_API_URL"):
        settings = replace(settings, api_url=env["LYRICTYPE_API_URL"])
    if env.get("LYRICTYPE_API_KEY"):
        settings = replace(settings, api_key=env["LYRICTYPE_API_KEY"])
    if env.get("LYRICTYPE_USER_ID"):
        settings = replace(settings, user_id=env["LYRICTYPE_USER_ID"])
    if "LYRICTYPE_TIMED" in env:
        settings = replace(settings, timed=env["LYRICTYPE_TIMED"] == "1")
    return settings
