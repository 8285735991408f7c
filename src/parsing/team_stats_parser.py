"""Parsing of the team statistics page (mannschaft.php).

The page holds several ``h4`` sections: "Average", "Einzel", "Doppel",
"180s" and "High Finish". Each is parsed independently into partial player
records which the reconciler merges by ``(name, team)``.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Optional, Tuple

from bs4 import Tag

from domain import mapping
from domain.models import (
    HighFinish,
    OneEighty,
    PartialPlayerStats,
    SpecialStats,
    TeamPage,
    TeamStats,
    WinLoss,
)
from parsing.locator import Document, locate_section, parse_document, require_section
from parsing.page_shapes import PageShape
from utils import html_utils

_log = logging.getLogger(__name__)

# Site conventions without documented derivation: the stats page shows a per-dart
# average (x3 gives the 3-dart scoring average) and counts each doubles pair twice
# in the team totals.
AVERAGE_FACTOR = 3
DOUBLES_DIVISOR = 2
MIN_LEGS = 3


def _row_cells(row: Tag, shape: PageShape) -> Optional[List[Tag]]:
    tds = html_utils.cells(row)
    if len(tds) < shape.value.min_columns:
        return None
    return tds


def scale_average(raw: float) -> float:
    return round(raw * AVERAGE_FACTOR, 2)


def halve_doubles(raw: WinLoss) -> WinLoss:
    return WinLoss(won=raw.won // DOUBLES_DIVISOR, lost=raw.lost // DOUBLES_DIVISOR)


def extract_player_averages(doc: Document, *, team: str) -> List[PartialPlayerStats]:
    """Players from the "Average" section with at least ``MIN_LEGS`` legs."""
    section = locate_section(doc, PageShape.TEAM_AVERAGE)
    if section is None:
        return []
    cols = PageShape.TEAM_AVERAGE.columns
    out: List[PartialPlayerStats] = []
    for row in section.rows():
        tds = _row_cells(row, PageShape.TEAM_AVERAGE)
        if tds is None:
            continue
        name = html_utils.resolve_name(tds[cols["name"]])
        if not name:
            continue
        legs = html_utils.parse_int(html_utils.cell_text(tds[cols["legs"]]))
        if legs < MIN_LEGS:
            _log.debug("Skipping average of %s (%s legs)", name, legs)
            continue
        raw = html_utils.parse_decimal(html_utils.cell_text(tds[cols["average"]]))
        out.append(PartialPlayerStats(name=name, team=team, average=scale_average(raw)))
    return out


def extract_team_average(doc: Document) -> float:
    section = locate_section(doc, PageShape.TEAM_AVERAGE)
    if section is None:
        return 0.0
    idx = PageShape.TEAM_AVERAGE.footer["average"]
    for row in section.footer_rows():
        tds = html_utils.cells(row)
        if len(tds) > idx:
            return scale_average(html_utils.parse_decimal(html_utils.cell_text(tds[idx])))
    return 0.0


def _footer_record(rows: List[Tag], shape: PageShape) -> WinLoss:
    won_idx, lost_idx = shape.footer["won"], shape.footer["lost"]
    for row in rows:
        tds = html_utils.cells(row)
        if len(tds) > lost_idx:
            return WinLoss(
                won=html_utils.parse_int(html_utils.cell_text(tds[won_idx])),
                lost=html_utils.parse_int(html_utils.cell_text(tds[lost_idx])),
            )
    return WinLoss()


def extract_win_loss(
    doc: Document, shape: PageShape, *, team: str
) -> Tuple[List[PartialPlayerStats], WinLoss]:
    """Parse an "Einzel" or "Doppel" section into player partials and the team total.

    Doubles team totals are halved (floor).
    """
    if shape not in (PageShape.SINGLES, PageShape.DOUBLES):
        raise ValueError(f"{shape.name} is not a win/loss table")
    section = locate_section(doc, shape)
    if section is None:
        return [], WinLoss()
    cols = shape.columns
    partials: List[PartialPlayerStats] = []
    for row in section.rows():
        tds = _row_cells(row, shape)
        if tds is None:
            continue
        name = html_utils.resolve_name(tds[cols["name"]])
        if not name:
            continue
        record = WinLoss(
            won=html_utils.parse_int(html_utils.cell_text(tds[cols["won"]])),
            lost=html_utils.parse_int(html_utils.cell_text(tds[cols["lost"]])),
        )
        if shape is PageShape.SINGLES:
            partials.append(PartialPlayerStats(name=name, team=team, singles=record))
        else:
            partials.append(PartialPlayerStats(name=name, team=team, doubles=record))
    total = _footer_record(section.footer_rows(), shape)
    if shape is PageShape.DOUBLES:
        total = halve_doubles(total)
    return partials, total


def extract_one_eighties(doc: Document) -> List[OneEighty]:
    section = locate_section(doc, PageShape.ONE_EIGHTY)
    if section is None:
        return []
    cols = PageShape.ONE_EIGHTY.columns
    out: List[OneEighty] = []
    for row in section.rows():
        tds = _row_cells(row, PageShape.ONE_EIGHTY)
        if tds is None:
            continue
        name = html_utils.resolve_name(tds[cols["name"]])
        count = html_utils.parse_int_or_none(html_utils.cell_text(tds[cols["count"]]))
        if name and count is not None:
            out.append(OneEighty(player_name=name, count=count))
    return out


def extract_high_finishes(doc: Document) -> List[HighFinish]:
    """One tally record per distinct finish value and player."""
    section = locate_section(doc, PageShape.HIGH_FINISH)
    if section is None:
        return []
    cols = PageShape.HIGH_FINISH.columns
    out: List[HighFinish] = []
    for row in section.rows():
        tds = _row_cells(row, PageShape.HIGH_FINISH)
        if tds is None:
            continue
        name = html_utils.resolve_name(tds[cols["name"]])
        if not name:
            continue
        values = [
            html_utils.parse_int_or_none(part)
            for part in html_utils.cell_text(tds[cols["finishes"]]).split(",")
        ]
        tally = Counter(v for v in values if v is not None)
        for finish in sorted(tally):
            out.append(HighFinish(player_name=name, finish=finish, count=tally[finish]))
    return out


def extract_special_stats(doc: Document) -> SpecialStats:
    soup = parse_document(doc)
    return SpecialStats(
        one_eighties=extract_one_eighties(soup), high_finishes=extract_high_finishes(soup)
    )


def parse_team_page(html: Document, *, team: str, strict: bool = False) -> TeamPage:
    """Extract team totals, merged player stats and special stats from one page.

    With ``strict`` a page without an "Average" section raises ``MissingSectionError``
    instead of yielding an empty team.
    """
    soup = parse_document(html)
    if strict:
        require_section(soup, PageShape.TEAM_AVERAGE)
    averages = extract_player_averages(soup, team=team)
    singles, singles_total = extract_win_loss(soup, PageShape.SINGLES, team=team)
    doubles, doubles_total = extract_win_loss(soup, PageShape.DOUBLES, team=team)

    players = mapping.merge_all([*averages, *singles, *doubles])

    stats = TeamStats(
        team=team,
        average=extract_team_average(soup),
        singles=singles_total,
        doubles=doubles_total,
    )
    return TeamPage(team_stats=stats, players=players, special=extract_special_stats(soup))
