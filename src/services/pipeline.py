"""High-level orchestration pipeline.

``build_team_view`` fans out the independent page fetches of one team with
``asyncio.gather``, then walks the dependent chain: match list, match reports,
validation, per-match averages. A ``FetchError`` inside one branch gives that
branch its empty default and is recorded in ``failed_branches``; only when every
independent branch fails is the build aborted with ``TeamViewError``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Awaitable, AsyncIterator, Dict, List, Optional, Sequence

import httpx

from config import settings
from core.async_http import FetchError, FetchFn, Fetcher, create_client
from domain import mapping
from domain.models import (
    LeagueOverview,
    MatchAverages,
    MatchdayDetail,
    MatchReport,
    StandingRow,
    TeamPage,
    TeamStats,
    TeamView,
)
from parsing import league_parser
from scraping import league_scraper, match_scraper, team_scraper
from services import league_statistics_service, validation
from services.errors import LeagueOverviewError, TeamViewError, require, require_season

_log = logging.getLogger(__name__)

ALL_SEASONS = "all"
INDEPENDENT_BRANCHES = ("team_stats", "standings", "comparison", "venue")
OVERVIEW_SOURCES = ("results", "schedule", "standings")


class BuildState(str, Enum):
    PENDING = "PENDING"
    FETCHING_INDEPENDENT = "FETCHING_INDEPENDENT"
    FETCHING_MATCH_LIST = "FETCHING_MATCH_LIST"
    FETCHING_MATCH_REPORTS = "FETCHING_MATCH_REPORTS"
    FILTERING = "FILTERING"
    FETCHING_AVERAGES = "FETCHING_AVERAGES"
    ASSEMBLED = "ASSEMBLED"
    FAILED = "FAILED"


@dataclass
class _Build:
    """Mutable bookkeeping of one build; never shared between builds."""

    label: str
    history: List[BuildState] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    errors: Dict[str, BaseException] = field(default_factory=dict)

    def enter(self, state: BuildState) -> None:
        _log.debug("%s: %s", self.label, state.value)
        self.history.append(state)

    async def branch(self, name: str, awaitable: Awaitable[Any], default: Any) -> Any:
        started = time.perf_counter()
        try:
            return await awaitable
        except FetchError as e:
            _log.warning("%s: branch %s failed: %s", self.label, name, e)
            self.failed.append(name)
            self.errors[name] = e
            return default
        finally:
            _log.debug("%s: branch %s took %.2fs", self.label, name, time.perf_counter() - started)


@asynccontextmanager
async def _session(client: Optional[httpx.AsyncClient]) -> AsyncIterator[FetchFn]:
    """Yield a fetcher over ``client``, or over a client owned by this call."""
    if client is not None:
        yield Fetcher(client)
        return
    async with create_client() as owned:
        yield Fetcher(owned)


async def build_team_view(
    team_name: str,
    season: str = settings.DEFAULT_SEASON,
    *,
    client: Optional[httpx.AsyncClient] = None,
    today: Optional[date] = None,
) -> TeamView:
    """Assemble everything known about one team for one season (or ``"all"``)."""
    team_name = require("team_name", team_name)
    season = require_season(season, allow=(ALL_SEASONS,))
    async with _session(client) as fetch:
        if season == ALL_SEASONS:
            return await _build_all_seasons(fetch, team_name, today)
        return await _build_season(fetch, team_name, season, today)


async def _build_season(
    fetch: FetchFn, team: str, season: str, today: Optional[date]
) -> TeamView:
    build = _Build(label=f"{team} {season}")
    build.enter(BuildState.PENDING)

    build.enter(BuildState.FETCHING_INDEPENDENT)
    page, standings, comparison, venue = await asyncio.gather(
        build.branch(
            "team_stats",
            team_scraper.fetch_team_page(fetch, team, season),
            TeamPage(team_stats=TeamStats(team=team)),
        ),
        build.branch("standings", team_scraper.fetch_standings(fetch, season), []),
        build.branch("comparison", team_scraper.fetch_comparison(fetch, team, season), []),
        build.branch("venue", team_scraper.fetch_club_venue(fetch, team, season), None),
    )
    if all(name in build.errors for name in INDEPENDENT_BRANCHES):
        build.enter(BuildState.FAILED)
        raise TeamViewError(team, dict(build.errors))

    build.enter(BuildState.FETCHING_MATCH_LIST)
    match_ids: List[str] = await build.branch(
        "match_list", match_scraper.fetch_match_ids(fetch, team, season, today), []
    )

    build.enter(BuildState.FETCHING_MATCH_REPORTS)
    raw_reports = await asyncio.gather(
        *(
            build.branch(
                f"match_report:{match_id}",
                match_scraper.fetch_match_report(fetch, match_id, team, season),
                None,
            )
            for match_id in match_ids
        )
    )

    build.enter(BuildState.FILTERING)
    reports = validation.filter_valid(raw_reports)

    build.enter(BuildState.FETCHING_AVERAGES)
    averages = await _fetch_averages(build, fetch, reports, team, season)

    build.enter(BuildState.ASSEMBLED)
    rows: Sequence[StandingRow] = standings
    return TeamView(
        team_name=team,
        season=season,
        last_updated=datetime.now(timezone.utc),
        players=page.players,
        team_stats=page.team_stats,
        match_reports=reports,
        league_position=league_parser.league_position(rows, team),
        club_venue=venue,
        comparison_data=comparison,
        team_standings=league_parser.team_standings(rows, team),
        match_averages=averages,
        running_averages=_running_averages(averages),
        best_checkouts=mapping.best_checkouts(reports, lineup_only=True),
        one_eighties=page.special.one_eighties,
        high_finishes=page.special.high_finishes,
        failed_branches=list(build.failed),
        state_history=[state.value for state in build.history],
    )


async def _fetch_averages(
    build: _Build, fetch: FetchFn, reports: Sequence[MatchReport], team: str, season: str
) -> List[MatchAverages]:
    """Averages for validated reports only, keyed by each report's own match id."""
    results = await asyncio.gather(
        *(
            build.branch(
                f"match_averages:{report.match_id}",
                match_scraper.fetch_match_averages(fetch, report.match_id, team, season),
                None,
            )
            for report in reports
        )
    )
    averages = [a for a in results if a is not None]
    return renumber(averages)


def _running_averages(averages: Sequence[MatchAverages]) -> List[float]:
    return mapping.running_averages([a.team_average for a in averages])


def renumber(averages: Sequence[MatchAverages], start: int = 1) -> List[MatchAverages]:
    for offset, item in enumerate(averages):
        item.matchday = start + offset
    return list(averages)


async def _build_all_seasons(fetch: FetchFn, team: str, today: Optional[date]) -> TeamView:
    """Older seasons contribute reports, averages and special stats; the rest is current."""
    seasons = list(settings.KNOWN_SEASONS)
    outcomes = await asyncio.gather(
        *(_build_season(fetch, team, s, today) for s in seasons), return_exceptions=True
    )
    views: List[TeamView] = []
    failed: List[str] = []
    errors: Dict[str, BaseException] = {}
    for season, outcome in zip(seasons, outcomes):
        if isinstance(outcome, TeamViewError):
            _log.warning("Season %s unavailable for %s: %s", season, team, outcome)
            failed.append(season)
            errors[season] = outcome
            continue
        if isinstance(outcome, BaseException):
            raise outcome
        failed.extend(f"{season}:{name}" for name in outcome.failed_branches)
        views.append(outcome)
    if seasons[-1] in errors:
        raise TeamViewError(team, errors)

    current = views[-1]
    current.season = ALL_SEASONS
    current.match_reports = [r for v in views for r in v.match_reports]
    current.match_averages = renumber([a for v in views for a in v.match_averages])
    current.running_averages = _running_averages(current.match_averages)
    current.best_checkouts = mapping.best_checkouts(current.match_reports, lineup_only=True)
    current.one_eighties = [o for v in views for o in v.one_eighties]
    current.high_finishes = [h for v in views for h in v.high_finishes]
    current.failed_branches = failed
    return current


async def build_league_overview(
    season: str = settings.DEFAULT_SEASON,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> LeagueOverview:
    """League-wide results, schedule, cup, per-team stats and leaderboards."""
    season = require_season(season)
    async with _session(client) as fetch:
        return await _build_overview(fetch, season)


async def _build_overview(fetch: FetchFn, season: str) -> LeagueOverview:
    build = _Build(label=f"league {season}")
    build.enter(BuildState.FETCHING_INDEPENDENT)
    results, schedule, standings, venues = await asyncio.gather(
        build.branch("results", league_scraper.fetch_results(fetch, season), []),
        build.branch("schedule", league_scraper.fetch_schedule(fetch, season), []),
        build.branch("standings", team_scraper.fetch_standings(fetch, season), []),
        build.branch("venues", league_scraper.fetch_venues(fetch, season), {}),
    )
    if all(name in build.errors for name in OVERVIEW_SOURCES):
        build.enter(BuildState.FAILED)
        raise LeagueOverviewError(season, dict(build.errors))
    schedule = league_parser.with_venues(schedule, venues)
    teams = [row.team for row in standings] or _teams_in(results)

    cup_matches, pages, details = await asyncio.gather(
        build.branch("cup", league_scraper.fetch_cup_matches(fetch, season, teams), []),
        asyncio.gather(
            *(
                build.branch(
                    f"team_stats:{team}",
                    team_scraper.fetch_team_page(fetch, team, season),
                    None,
                )
                for team in teams
            )
        ),
        _matchday_details(build, fetch, results, season),
    )
    pages = [p for p in pages if p is not None]

    latest_round = max((d.matchday for d in details), default=None)
    return LeagueOverview(
        season=season,
        results=results,
        schedule=schedule,
        cup_matches=cup_matches,
        team_stats=[p.team_stats for p in pages],
        player_stats=[player for p in pages for player in p.players],
        standings=mapping.calculate_standings(results),
        latest_matches=[d for d in details if d.matchday == latest_round],
        statistics=league_statistics_service.compute(details),
        failed_branches=list(build.failed),
    )


def _teams_in(results) -> List[str]:
    seen: Dict[str, None] = {}
    for matchday in results:
        for m in matchday.matches:
            seen.setdefault(m.home_team, None)
            seen.setdefault(m.away_team, None)
    return list(seen)


async def _matchday_details(
    build: _Build, fetch: FetchFn, results, season: str
) -> List[MatchdayDetail]:
    """Singles/doubles of every played fixture with a known report id."""
    fixtures = [(md, m) for md in results for m in md.matches]
    if any(not m.match_id for _, m in fixtures):
        index = await build.branch(
            "report_index", match_scraper.fetch_league_report_index(fetch, season), []
        )
        ids = {(link.home_team, link.away_team): link.match_id for link in index}
        fixtures = [
            (md, m if m.match_id else replace(m, match_id=ids.get((m.home_team, m.away_team), "")))
            for md, m in fixtures
        ]
    fixtures = [(md, m) for md, m in fixtures if m.match_id]

    all_details = await asyncio.gather(
        *(
            build.branch(
                f"match_details:{m.match_id}",
                match_scraper.fetch_match_details(fetch, m.match_id, season),
                None,
            )
            for _, m in fixtures
        )
    )
    out: List[MatchdayDetail] = []
    for (md, m), details in zip(fixtures, all_details):
        if details is None:
            continue
        out.append(
            MatchdayDetail(
                matchday=md.round,
                date=md.date,
                home_team=m.home_team,
                away_team=m.away_team,
                score=f"{m.home_sets}-{m.away_sets}",
                singles=details.singles,
                doubles=details.doubles,
            )
        )
    return out


def run_team_view(team_name: str, season: str = settings.DEFAULT_SEASON) -> TeamView:
    """Synchronous entry point for the CLI."""
    return asyncio.run(build_team_view(team_name, season))


def run_league_overview(season: str = settings.DEFAULT_SEASON) -> LeagueOverview:
    return asyncio.run(build_league_overview(season))
