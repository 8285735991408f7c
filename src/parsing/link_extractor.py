"""Link extraction for the match report index (spielberichtmenue.php)."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

from domain.models import MatchReportLink
from parsing.locator import Document, parse_document
from parsing.page_shapes import PageShape
from utils import html_utils
from utils.html_utils import dedupe

_log = logging.getLogger(__name__)

REPORTS_MARKER = "Sonstiges 1/2 ({season}):"


def extract_report_index_link(html: Document, season: str) -> Optional[str]:
    """Href of the report index, linked from the ``li`` after the season's "Sonstiges" entry."""
    soup = parse_document(html)
    marker = REPORTS_MARKER.format(season=season)
    for li in soup.find_all("li"):
        if marker not in li.get_text(" ", strip=True):
            continue
        following = li.find_next_sibling("li")
        link = following.find("a", href=True) if following is not None else None
        if link is not None:
            return link["href"]
    _log.warning("No report index link for season %s", season)
    return None


def extract_report_index(html: Document) -> List[MatchReportLink]:
    """Every report row; the match id comes from the row's ``onclick``."""
    soup = parse_document(html)
    cols = PageShape.REPORT_INDEX.columns
    links: List[MatchReportLink] = []
    for tr in soup.find_all("tr", class_="ranking"):
        tds = html_utils.cells(tr)
        if len(tds) < PageShape.REPORT_INDEX.value.min_columns:
            continue
        match_id = html_utils.extract_id(tr.get("onclick"))
        day = html_utils.cell_text(tds[cols["date"]])
        home = html_utils.cell_text(tds[cols["home"]])
        away = html_utils.cell_text(tds[cols["away"]])
        if match_id and day and home and away:
            links.append(MatchReportLink(date=day, home_team=home, away_team=away, match_id=match_id))
    return links


def _played_on(text: str) -> Optional[date]:
    try:
        return datetime.strptime(text, "%d.%m.%Y").date()
    except ValueError:
        return None


def links_for_team(
    links: Iterable[MatchReportLink], team: str, today: Optional[date] = None
) -> List[str]:
    """Match ids of ``team``'s reports dated on or before ``today``, in page order."""
    today = today or date.today()
    ids: List[str] = []
    for link in links:
        if team not in (link.home_team, link.away_team):
            continue
        played = _played_on(link.date)
        if played is None or played > today:
            continue
        ids.append(link.match_id)
    return dedupe(ids)
