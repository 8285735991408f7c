"""Per-team page scraping (statistics, comparison, venue, standings)."""

from __future__ import annotations

from typing import List, Optional

from core.async_http import FetchFn
from domain.models import ClubVenue, ComparisonRow, StandingRow, TeamPage
from parsing import league_parser, team_stats_parser
from scraping import urls


async def fetch_team_page(fetch: FetchFn, team: str, season: str) -> TeamPage:
    html = await fetch(urls.team_stats_url(team, season))
    return team_stats_parser.parse_team_page(html, team=team)


async def fetch_standings(fetch: FetchFn, season: str) -> List[StandingRow]:
    html = await fetch(urls.standings_url(season))
    return league_parser.extract_standings(html)


async def fetch_comparison(fetch: FetchFn, team: str, season: str) -> List[ComparisonRow]:
    html = await fetch(urls.comparison_url(team, season))
    return league_parser.extract_comparison(html, team)


async def fetch_club_venue(fetch: FetchFn, team: str, season: str) -> Optional[ClubVenue]:
    html = await fetch(urls.venues_url(season))
    return league_parser.extract_club_venue(html, team)
