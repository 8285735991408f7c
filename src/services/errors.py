"""Errors surfaced to callers of the orchestration services."""

from __future__ import annotations

import re
from typing import Dict

SEASON_RE = re.compile(r"\d{4}/\d{2}")


class MissingParameterError(ValueError):
    """A required identifying parameter (team, season, URL) was blank."""

    def __init__(self, name: str):
        super().__init__(f"Missing required parameter: {name}")
        self.name = name


class TeamViewError(RuntimeError):
    """Every independent branch of a team-view build failed."""

    def __init__(self, team: str, errors: Dict[str, BaseException]):
        branches = ", ".join(sorted(errors))
        super().__init__(f"All data sources failed for {team}: {branches}")
        self.team = team
        self.errors = errors


def require(name: str, value: str | None) -> str:
    if value is None or not str(value).strip():
        raise MissingParameterError(name)
    return str(value).strip()


class InvalidParameterError(ValueError):
    """An identifying parameter was present but not in the form the site expects."""

    def __init__(self, name: str, value: str):
        super().__init__(f"Invalid {name}: {value!r}")
        self.name = name
        self.value = value


class LeagueOverviewError(RuntimeError):
    """Every league-wide source page of an overview build failed."""

    def __init__(self, season: str, errors: Dict[str, BaseException]):
        branches = ", ".join(sorted(errors))
        super().__init__(f"All league pages failed for {season}: {branches}")
        self.season = season
        self.errors = errors


def require_season(value: str | None, *, allow: tuple[str, ...] = ()) -> str:
    """Like ``require`` but also checks the ``YYYY/yy`` form (or one of ``allow``)."""
    season = require("season", value)
    if season not in allow and not SEASON_RE.fullmatch(season):
        raise InvalidParameterError("season", season)
    return season
