"""Parsing of league-wide pages: standings, venues, fixtures, results, cup rounds."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

from config import settings
from domain.models import (
    ClubVenue,
    ComparisonRow,
    CupMatch,
    LeagueMatch,
    LeagueMatchday,
    ScheduleMatch,
    StandingRow,
    TeamStandings,
)
from parsing.locator import Document, iter_sections, own_rows, parse_document
from parsing.page_shapes import PageShape
from utils import html_utils

_log = logging.getLogger(__name__)


def _texts(row: Tag) -> List[str]:
    return [html_utils.cell_text(td) for td in html_utils.cells(row)]


def extract_standings(html: Document) -> List[StandingRow]:
    """Rows of the first ``div.ranking`` table on the standings page."""
    soup = parse_document(html)
    block = soup.find("div", class_="ranking")
    table = block.find("table") if block is not None else None
    if table is None:
        return []
    cols = PageShape.STANDINGS.columns
    rows: List[StandingRow] = []
    for tr in own_rows(table):
        values = _texts(tr)
        if len(values) < PageShape.STANDINGS.value.min_columns:
            continue
        team = values[cols["team"]]
        position = html_utils.parse_int_or_none(values[cols["position"]])
        if not team or position is None:
            continue
        rows.append(
            StandingRow(
                position=position,
                team=team,
                played=html_utils.parse_int(values[cols["played"]]),
                wins=html_utils.parse_int(values[cols["wins"]]),
                draws=html_utils.parse_int(values[cols["draws"]]),
                losses=html_utils.parse_int(values[cols["losses"]]),
            )
        )
    return rows


def league_position(rows: Iterable[StandingRow], team: str) -> Optional[int]:
    rows = list(rows)
    for row in rows:
        if row.team == team:
            return row.position
    for row in rows:
        if team in row.team:
            return row.position
    return None


def team_standings(rows: Iterable[StandingRow], team: str) -> Optional[TeamStandings]:
    for row in rows:
        if row.team == team:
            return TeamStandings(wins=row.wins, draws=row.draws, losses=row.losses)
    return None


def _iter_venues(soup: BeautifulSoup) -> Iterator[ClubVenue]:
    cols = PageShape.VENUES.columns
    for table in soup.find_all("table", class_="ranking"):
        for tr in own_rows(table):
            values = _texts(tr)
            if len(values) < PageShape.VENUES.value.min_columns or not values[cols["team"]]:
                continue
            yield ClubVenue(
                rank=values[cols["rank"]],
                team_name=values[cols["team"]],
                club_name=values[cols["club"]],
                venue=values[cols["venue"]],
                address=values[cols["address"]],
                city=values[cols["city"]],
                phone=values[cols["phone"]],
            )


def extract_venues(html: Document) -> Dict[str, ClubVenue]:
    return {venue.team_name: venue for venue in _iter_venues(parse_document(html))}


def extract_club_venue(html: Document, team: str) -> Optional[ClubVenue]:
    for venue in _iter_venues(parse_document(html)):
        if venue.team_name == team:
            return venue
    return None


def extract_comparison(
    html: Document, team: str, *, rounds_per_half: int = settings.ROUNDS_PER_HALF
) -> List[ComparisonRow]:
    """First-half vs second-half score per opponent, from ``team``'s side."""
    soup = parse_document(html)
    cols = PageShape.COMPARISON.columns
    by_opponent: Dict[str, ComparisonRow] = {}
    for tr in soup.select("table.ranking tr.ranking"):
        tds = html_utils.cells(tr)
        if len(tds) < PageShape.COMPARISON.value.min_columns:
            continue
        rnd = html_utils.parse_int(html_utils.cell_text(tds[cols["round"]]))
        home = html_utils.cell_text(tds[cols["home"]])
        away = html_utils.cell_text(tds[cols["away"]])
        home_sets = html_utils.parse_int(html_utils.bold_text(tds[cols["home_sets"]]))
        away_sets = html_utils.parse_int(html_utils.bold_text(tds[cols["away_sets"]]))
        is_home = home == team
        opponent = away if is_home else home
        if not opponent:
            continue
        score = f"{home_sets}-{away_sets}" if is_home else f"{away_sets}-{home_sets}"
        row = by_opponent.setdefault(opponent, ComparisonRow(opponent=opponent))
        if rnd <= rounds_per_half and row.first_round is None:
            row.first_round = score
        else:
            row.second_round = score
    return list(by_opponent.values())


def extract_schedule(html: Document) -> List[ScheduleMatch]:
    """Fixtures grouped under "Runde N - DD.MM.YYYY" headings, oldest first."""
    cols = PageShape.SCHEDULE_ROUND.columns
    schedule: List[ScheduleMatch] = []
    for section in iter_sections(html, PageShape.SCHEDULE_ROUND):
        rnd, date = int(section.match.group(1)), section.match.group(2)
        for tr in section.rows():
            values = _texts(tr)
            if len(values) < PageShape.SCHEDULE_ROUND.value.min_columns:
                continue
            home, away = values[cols["home"]], values[cols["away"]]
            if home and away:
                schedule.append(ScheduleMatch(round=rnd, date=date, home_team=home, away_team=away))
    return sort_schedule(schedule)


def sort_schedule(matches: Iterable[ScheduleMatch]) -> List[ScheduleMatch]:
    return sorted(matches, key=lambda m: (m.sort_date, m.round))


def with_venues(
    matches: Iterable[ScheduleMatch], venues: Dict[str, ClubVenue]
) -> List[ScheduleMatch]:
    """Attach the home team's venue/address for the presentation layer."""
    out: List[ScheduleMatch] = []
    for m in matches:
        venue = venues.get(m.home_team)
        if venue is None:
            out.append(m)
            continue
        out.append(
            ScheduleMatch(
                round=m.round,
                date=m.date,
                home_team=m.home_team,
                away_team=m.away_team,
                venue=venue.venue or venue.club_name,
                address=" ".join(p for p in (venue.address, venue.city) if p),
            )
        )
    return out


def extract_results(html: Document) -> List[LeagueMatchday]:
    """Played fixtures per round; unplayed fixtures and empty rounds are left out."""
    cols = PageShape.RESULT_ROUND.columns
    matchdays: List[LeagueMatchday] = []
    for section in iter_sections(html, PageShape.RESULT_ROUND):
        matchday = LeagueMatchday(round=int(section.match.group(1)), date=section.match.group(2))
        for tr in section.rows():
            tds = html_utils.cells(tr)
            if len(tds) < PageShape.RESULT_ROUND.value.min_columns:
                continue
            home = html_utils.cell_text(tds[cols["home"]])
            away = html_utils.cell_text(tds[cols["away"]])
            numbers = [
                html_utils.parse_int_or_none(html_utils.cell_text(tds[cols["home_legs"]])),
                html_utils.parse_int_or_none(html_utils.cell_text(tds[cols["away_legs"]])),
                html_utils.parse_int_or_none(html_utils.bold_text(tds[cols["home_sets"]])),
                html_utils.parse_int_or_none(html_utils.bold_text(tds[cols["away_sets"]])),
            ]
            if not home or not away or any(n is None for n in numbers):
                continue
            link = tr.find("a", href=True)
            matchday.matches.append(
                LeagueMatch(
                    home_team=home,
                    away_team=away,
                    home_legs=numbers[0],
                    away_legs=numbers[1],
                    home_sets=numbers[2],
                    away_sets=numbers[3],
                    match_id=html_utils.extract_id(link["href"] if link else None) or "",
                )
            )
        if matchday.matches:
            matchdays.append(matchday)
    return matchdays


def extract_cup_matches(
    html: Document,
    league_teams: Iterable[str],
    *,
    round_label: str = settings.CUP_ROUND_LABEL,
) -> List[CupMatch]:
    """Fixtures of one cup round where at least one side plays in the league."""
    members = {t.lower() for t in league_teams}
    cols = PageShape.CUP_ROUND.columns
    out: List[CupMatch] = []
    for section in iter_sections(html, PageShape.CUP_ROUND):
        if f"Runde {section.match.group(1)}" != round_label:
            continue
        date_match = PageShape.SCHEDULE_ROUND.heading.search(section.heading)
        date = date_match.group(2) if date_match else None
        for tr in section.rows():
            values = _texts(tr)
            if len(values) < PageShape.CUP_ROUND.value.min_columns:
                continue
            home, away = values[cols["home"]], values[cols["away"]]
            if not home or not away:
                continue
            if home.lower() in members or away.lower() in members:
                out.append(CupMatch(home_team=home, away_team=away, date=date, round=f"Cup {round_label}"))
    _log.debug("Found %s cup matches for %s", len(out), round_label)
    return out
