"""League-wide page scraping (results, schedule, cup)."""

from __future__ import annotations

from typing import Dict, Iterable, List

from config import settings
from core.async_http import FetchFn
from domain.models import ClubVenue, CupMatch, LeagueMatchday, ScheduleMatch
from parsing import league_parser
from scraping import urls


async def fetch_results(fetch: FetchFn, season: str) -> List[LeagueMatchday]:
    html = await fetch(urls.results_url(season))
    return league_parser.extract_results(html)


async def fetch_schedule(fetch: FetchFn, season: str) -> List[ScheduleMatch]:
    html = await fetch(urls.schedule_url(season))
    return league_parser.extract_schedule(html)


async def fetch_venues(fetch: FetchFn, season: str) -> Dict[str, ClubVenue]:
    html = await fetch(urls.venues_url(season))
    return league_parser.extract_venues(html)


async def fetch_cup_matches(
    fetch: FetchFn,
    season: str,
    league_teams: Iterable[str],
    round_label: str = settings.CUP_ROUND_LABEL,
) -> List[CupMatch]:
    html = await fetch(urls.cup_url(season))
    return league_parser.extract_cup_matches(html, league_teams, round_label=round_label)
