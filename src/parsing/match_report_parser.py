"""Parsing of a single match report page (spielbericht.php).

Layout of ``table.spielbericht``:
    thead   th[1] "Heim: <team>", th[3] "Gast: <team>"
    tbody   one ``tr.spielbericht`` per game; td[0] holds the set number (bold),
            td[1] the home ``table.set`` and td[3] the away ``table.set``.
            Set rows: 0 names + score (home: players..., score / away: score,
            players...), 1 darts per leg, 2 rest per leg ("-" = leg not played).
            The last tbody row carries the leg totals in td[1] / td[3].
    tfoot   td[1] / td[3] hold the set totals in ``h3``.
Games with set number 1, 2, 5 or 6 are singles, all others doubles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from bs4 import Tag

from domain.models import (
    Checkout,
    DoubleGame,
    HomeAway,
    MatchAverages,
    MatchDetails,
    MatchReport,
    PlayerMatchAverage,
    SingleGame,
)
from parsing.locator import Document, own_rows, parse_document
from utils import html_utils

_log = logging.getLogger(__name__)

SINGLES_SETS = frozenset({1, 2, 5, 6})
HOME_PREFIX = "Heim: "
AWAY_PREFIX = "Gast: "

START_SCORE = 501
MIN_LEGS = 3
MAX_LEGS = 5
MAX_DARTS_PER_LEG = 145
FALLBACK_AVERAGE = 35.0
PLAUSIBLE_AVERAGE = (5.0, 150.0)


@dataclass
class _Side:
    players: List[str] = field(default_factory=list)
    score_text: str = ""
    legs: List[Tuple[str, str]] = field(default_factory=list)  # (darts, rest) per played leg

    @property
    def label(self) -> str:
        return ", ".join(self.players)

    def checkout_values(self) -> List[int]:
        out: List[int] = []
        for darts, rest in self.legs:
            if rest == "0":
                value = html_utils.parse_int_or_none(darts)
                if value is not None:
                    out.append(value)
        return out


def _report_table(doc: Document) -> Optional[Tag]:
    return parse_document(doc).find("table", class_="spielbericht")


def teams(doc: Document) -> Tuple[str, str]:
    table = _report_table(doc)
    if table is None:
        return "", ""
    ths = table.select("thead tr th")
    home = html_utils.cell_text(ths[1]) if len(ths) > 1 else ""
    away = html_utils.cell_text(ths[3]) if len(ths) > 3 else ""
    return home.replace(HOME_PREFIX, "").strip(), away.replace(AWAY_PREFIX, "").strip()


def side_of(team: str, home_team: str, away_team: str) -> Optional[str]:
    """Return "home"/"away" for ``team``; exact names win over substring matches."""
    if not team:
        return None
    if team == home_team:
        return "home"
    if team == away_team:
        return "away"
    if team in home_team:
        return "home"
    if team in away_team:
        return "away"
    return None


def _cell_values(row: Optional[Tag]) -> List[str]:
    if row is None:
        return []
    return [html_utils.cell_text(td) for td in row.find_all("td")]


def _parse_side(cell: Optional[Tag], *, home: bool) -> _Side:
    side = _Side()
    if cell is None:
        return side
    set_table = cell.find("table", class_="set")
    if set_table is None:
        return side
    rows = [tr for tr in set_table.find_all("tr") if tr.find_parent("table") is set_table]
    if not rows:
        return side
    head = [html_utils.bold_text(td) for td in rows[0].find_all("td")]
    if head:
        if home:
            side.players, side.score_text = head[:-1], head[-1]
        else:
            side.score_text, side.players = head[0], head[1:]
    darts = _cell_values(rows[1] if len(rows) > 1 else None)
    rests = _cell_values(rows[2] if len(rows) > 2 else None)
    for idx, d in enumerate(darts):
        if d in ("", "-"):
            continue
        r = rests[idx] if idx < len(rests) else "-"
        side.legs.append((d, "0" if r == "-" else r))
    return side


def _game_rows(table: Tag) -> List[Tag]:
    return [tr for tr in own_rows(table) if "spielbericht" in (tr.get("class") or [])]


def _set_number(row: Tag, position: int) -> int:
    tds = html_utils.cells(row)
    number = html_utils.parse_int_or_none(html_utils.bold_text(tds[0])) if tds else None
    return number if number is not None else position


def _sides(row: Tag) -> Tuple[_Side, _Side]:
    tds = html_utils.cells(row)
    home = _parse_side(tds[1] if len(tds) > 1 else None, home=True)
    away = _parse_side(tds[3] if len(tds) > 3 else None, home=False)
    return home, away


def format_checkouts(player: str, values: List[int]) -> str:
    return f"{player}: {', '.join(str(v) for v in values) if values else '-'}"


def parse_match_report(html: Document, *, match_id: str, team: str) -> Optional[MatchReport]:
    """Parse one report from the perspective of ``team``.

    Returns None when the page has no report table or ``team`` did not play in it.
    Scores that are not numeric are kept as None so validation can reject the report.
    """
    soup = parse_document(html)
    table = _report_table(soup)
    if table is None:
        _log.info("Match report %s has no report table", match_id)
        return None
    home_team, away_team = teams(soup)
    side = side_of(team, home_team, away_team)
    if side is None:
        _log.info("Team %s not found in match report %s", team, match_id)
        return None
    is_home = side == "home"

    report = MatchReport(
        match_id=match_id,
        opponent=away_team if is_home else home_team,
        is_home_match=is_home,
    )
    details = report.details
    for position, row in enumerate(_game_rows(table), start=1):
        home, away = _sides(row)
        home_score = html_utils.parse_int_or_none(home.score_text)
        away_score = html_utils.parse_int_or_none(away.score_text)
        ours = home if is_home else away
        if _set_number(row, position) in SINGLES_SETS:
            details.singles.append(
                SingleGame(
                    home_player=home.label,
                    away_player=away.label,
                    home_score=home_score,
                    away_score=away_score,
                    home_average=side_average(home),
                    away_average=side_average(away),
                    home_checkouts=home.checkout_values(),
                    away_checkouts=away.checkout_values(),
                )
            )
            if ours.label:
                report.lineup.append(ours.label)
        else:
            details.doubles.append(
                DoubleGame(
                    home_players=list(home.players),
                    away_players=list(away.players),
                    home_score=home_score,
                    away_score=away_score,
                )
            )
            report.lineup.append(ours.label)
        for player_side in (home, away):
            if player_side.legs and player_side.label:
                report.checkouts.append(
                    Checkout(scores=format_checkouts(player_side.label, player_side.checkout_values()))
                )

    details.total_legs = _leg_totals(table)
    details.total_sets = _set_totals(table)
    sets = details.total_sets
    report.score = f"{sets.home}-{sets.away}" if is_home else f"{sets.away}-{sets.home}"
    return report


def _leg_totals(table: Tag) -> HomeAway:
    rows = own_rows(table)
    if not rows or "spielbericht" in (rows[-1].get("class") or []):
        return HomeAway()
    tds = html_utils.cells(rows[-1])
    if len(tds) < 4:
        return HomeAway()
    return HomeAway(
        home=html_utils.parse_int(html_utils.bold_text(tds[1])),
        away=html_utils.parse_int(html_utils.bold_text(tds[3])),
    )


def _set_totals(table: Tag) -> HomeAway:
    rows = own_rows(table, part="tfoot")
    if not rows:
        return HomeAway()
    tds = html_utils.cells(rows[0])
    if len(tds) < 4:
        return HomeAway()

    def _h3(td: Tag) -> int:
        h3 = td.find("h3")
        return html_utils.parse_int(html_utils.cell_text(h3 if h3 is not None else td))

    return HomeAway(home=_h3(tds[1]), away=_h3(tds[3]))


def calculate_leg_average(darts: List[int], rests: List[int], player: str = "") -> float:
    """3-dart average over legs: ``(501 * n - sum(rest)) / sum(darts) * 3``.

    Falls back to ``FALLBACK_AVERAGE`` when fewer than three plausible legs exist
    or the result is implausible.
    """
    if len(darts) != len(rests) or not MIN_LEGS <= len(darts) <= MAX_LEGS:
        _log.warning("Invalid leg data for %s: %s / %s", player, darts, rests)
        return FALLBACK_AVERAGE
    pairs = [
        (d, r)
        for d, r in zip(darts, rests)
        if 0 < d <= MAX_DARTS_PER_LEG and 0 <= r <= START_SCORE
    ]
    if len(pairs) < MIN_LEGS:
        _log.warning("Need at least %s valid legs for %s", MIN_LEGS, player)
        return FALLBACK_AVERAGE
    n = len(pairs)
    sum_darts = sum(d for d, _ in pairs)
    sum_rests = sum(r for _, r in pairs)
    average = (START_SCORE * n - sum_rests) / sum_darts * 3
    low, high = PLAUSIBLE_AVERAGE
    if not low <= average <= high:
        _log.warning("Implausible average %.2f for %s", average, player)
        return FALLBACK_AVERAGE
    return round(average, 2)


def side_average(side: _Side) -> Optional[float]:
    """Leg-based average of one side of a game; None below three tallied legs."""
    darts: List[int] = []
    rests: List[int] = []
    for d, r in side.legs:
        d_val = html_utils.parse_int_or_none(d)
        if d_val is None:
            continue
        darts.append(d_val)
        rests.append(html_utils.parse_int(r))
    if len(darts) < MIN_LEGS:
        return None
    return calculate_leg_average(darts, rests, side.label)


def extract_match_averages(html: Document, *, match_id: str, team: str) -> MatchAverages:
    """Per-player singles averages of ``team`` in one match; players with < 3 legs are left out."""
    soup = parse_document(html)
    result = MatchAverages(match_id=match_id)
    table = _report_table(soup)
    if table is None:
        return result
    home_team, away_team = teams(soup)
    side_name = side_of(team, home_team, away_team)
    if side_name is None:
        _log.warning("Team %s not found in match %s", team, match_id)
        return result
    is_home = side_name == "home"
    result.opponent = away_team if is_home else home_team

    for position, row in enumerate(_game_rows(table), start=1):
        if _set_number(row, position) not in SINGLES_SETS:
            continue
        home, away = _sides(row)
        side = home if is_home else away
        average = side_average(side)
        if average is None or not side.label:
            continue
        result.player_averages.append(PlayerMatchAverage(player_name=side.label, average=average))
    if result.player_averages:
        total = sum(p.average for p in result.player_averages)
        result.team_average = round(total / len(result.player_averages), 2)
    return result


def parse_match_details(html: Document, *, match_id: str) -> MatchDetails:
    """Singles/doubles of a report without a requesting team (league overview)."""
    home_team, _ = teams(html)
    report = parse_match_report(html, match_id=match_id, team=home_team)
    return report.details if report is not None else MatchDetails()
