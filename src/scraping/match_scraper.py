"""Match report discovery and per-report scraping."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from core.async_http import FetchFn
from domain.models import MatchAverages, MatchDetails, MatchReport, MatchReportLink
from parsing import link_extractor, match_report_parser
from scraping import urls

_log = logging.getLogger(__name__)


async def fetch_report_index(fetch: FetchFn, season: str) -> List[MatchReportLink]:
    """Follow the statistics index to the season's report index and read every row."""
    index_html = await fetch(urls.stats_index_url(season))
    href = link_extractor.extract_report_index_link(index_html, season)
    if href is None:
        return []
    html = await fetch(urls.resolve_stats_link(href))
    return link_extractor.extract_report_index(html)


async def fetch_league_report_index(fetch: FetchFn, season: str) -> List[MatchReportLink]:
    """All reports of the season straight from the report menu page."""
    html = await fetch(urls.report_index_url(season))
    return link_extractor.extract_report_index(html)


async def fetch_match_ids(
    fetch: FetchFn, team: str, season: str, today: Optional[date] = None
) -> List[str]:
    links = await fetch_report_index(fetch, season)
    ids = link_extractor.links_for_team(links, team, today)
    _log.debug("Found %s match reports for %s in %s", len(ids), team, season)
    return ids


async def fetch_match_report(
    fetch: FetchFn, match_id: str, team: str, season: str
) -> Optional[MatchReport]:
    html = await fetch(urls.match_report_url(match_id, season))
    return match_report_parser.parse_match_report(html, match_id=match_id, team=team)


async def fetch_match_averages(
    fetch: FetchFn, match_id: str, team: str, season: str
) -> MatchAverages:
    html = await fetch(urls.match_report_url(match_id, season))
    return match_report_parser.extract_match_averages(html, match_id=match_id, team=team)


async def fetch_match_details(fetch: FetchFn, match_id: str, season: str) -> MatchDetails:
    html = await fetch(urls.match_report_url(match_id, season))
    return match_report_parser.parse_match_details(html, match_id=match_id)
