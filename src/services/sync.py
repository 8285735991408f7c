"""Persist an assembled team view through the repository boundary.

Only validated data is written: match reports are checked again before saving
and rejected ones are dropped, never stored in part.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from db.repositories.protocols import LeagueRepository
from domain.models import ScheduleMatch, SpecialStats, TeamView
from services import validation
from services.errors import require

_log = logging.getLogger(__name__)


def persist_team_view(
    repo: LeagueRepository,
    view: TeamView,
    season: Optional[str] = None,
    *,
    schedule: Sequence[ScheduleMatch] = (),
) -> dict:
    """Write ``view`` for ``season`` (default: the view's own season) and return counts."""
    team = require("team_name", view.team_name)
    season = require("season", season or view.season)
    reports = validation.filter_valid(view.match_reports)
    rejected = len(view.match_reports) - len(reports)
    if rejected:
        _log.info("Not persisting %s invalid match reports for %s", rejected, team)

    if view.team_stats is not None:
        repo.save_team_stats(team, season, view.team_stats)
    repo.save_player_stats(team, season, view.players)
    repo.save_match_reports(team, season, reports)
    repo.save_special_stats(
        team,
        season,
        SpecialStats(one_eighties=list(view.one_eighties), high_finishes=list(view.high_finishes)),
    )
    if schedule:
        repo.save_schedule(team, season, list(schedule))
    summary = {
        "team": team,
        "season": season,
        "players": len(view.players),
        "match_reports": len(reports),
        "rejected_reports": rejected,
        "schedule": len(schedule),
    }
    _log.debug("Persisted %s", summary)
    return summary
