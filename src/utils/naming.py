"""Centralized filename and path naming for exported JSON."""

from __future__ import annotations

import os
import re
from config import settings

_SANITIZE_PATTERN = re.compile(r"[^\w\s-]")
_WS_PATTERN = re.compile(r"[-\s]+")


def sanitize(value: str) -> str:
    value = _SANITIZE_PATTERN.sub("", value).strip()
    return _WS_PATTERN.sub("_", value)


def season_slug(season: str) -> str:
    """``"2025/26"`` -> ``"2025_26"``."""
    return sanitize(season.replace("/", "_"))


def team_view_filename(team_name: str, season: str) -> str:
    return f"team_view_{sanitize(team_name)}_{season_slug(season)}.json"


def league_overview_filename(season: str) -> str:
    return f"league_overview_{season_slug(season)}.json"


def output_path(out: str | None, default_name: str) -> str | None:
    """Resolve ``--out``: a directory gets ``default_name`` appended, ``"-"`` means data dir."""
    if out is None:
        return None
    if out == "-":
        return os.path.join(data_dir(), default_name)
    if os.path.isdir(out) or out.endswith(("/", os.sep)):
        return os.path.join(out, default_name)
    return out


def data_dir() -> str:
    return settings.DATA_DIR
