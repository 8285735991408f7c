"""Reconciliation of partial extraction results into consistent records.

``merge`` is a field-level union keyed by ``(name, team)``: averages, singles
and doubles may arrive from separate passes over the same page in any order
and the final state is the same. Derived values are computed once by
``finalize`` after all partials are merged.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence

from domain.models import (
    ComputedStanding,
    LeagueMatchday,
    MatchReport,
    PartialPlayerStats,
    PlayerStats,
)


def percentage(won: int, lost: int) -> float:
    total = won + lost
    if total <= 0:
        return 0.0
    return round(won / total * 100, 2)


def _apply(record: PlayerStats, partial: PartialPlayerStats) -> PlayerStats:
    changes: dict = {}
    if partial.average is not None:
        changes["average"] = partial.average
    if partial.singles is not None:
        changes["singles_won"] = partial.singles.won
        changes["singles_lost"] = partial.singles.lost
    if partial.doubles is not None:
        changes["doubles_won"] = partial.doubles.won
        changes["doubles_lost"] = partial.doubles.lost
    return replace(record, **changes) if changes else record


def merge(existing: Sequence[PlayerStats], incoming: PartialPlayerStats) -> List[PlayerStats]:
    """Find-or-create ``incoming.key`` in ``existing`` and return the new list.

    Only the fields the partial carries are updated; a new record starts zeroed.
    """
    merged = list(existing)
    for idx, record in enumerate(merged):
        if record.key == incoming.key:
            merged[idx] = _apply(record, incoming)
            return merged
    merged.append(_apply(PlayerStats(name=incoming.name, team=incoming.team), incoming))
    return merged


def merge_all(partials: Iterable[PartialPlayerStats]) -> List[PlayerStats]:
    players: List[PlayerStats] = []
    for partial in partials:
        players = merge(players, partial)
    return finalize(players)


def finalize(players: Iterable[PlayerStats]) -> List[PlayerStats]:
    out: List[PlayerStats] = []
    for p in players:
        out.append(
            replace(
                p,
                singles_percentage=percentage(p.singles_won, p.singles_lost),
                doubles_percentage=percentage(p.doubles_won, p.doubles_lost),
                combined_percentage=percentage(
                    p.singles_won + p.doubles_won, p.singles_lost + p.doubles_lost
                ),
            )
        )
    return out


def running_averages(averages: Sequence[float]) -> List[float]:
    """Prefix means of a chronological average sequence, 2 decimals."""
    out: List[float] = []
    for i in range(len(averages)):
        window = averages[: i + 1]
        out.append(round(sum(window) / len(window), 2))
    return out


def parse_checkout_string(scores: str) -> List[int]:
    """``"Hans: 132, 96"`` -> ``[132, 96]``; ``"Hans: -"`` -> ``[]``."""
    _, sep, values = scores.partition(": ")
    if not sep:
        return []
    values = values.strip()
    if not values or values == "-":
        return []
    out: List[int] = []
    for part in values.split(", "):
        try:
            out.append(int(part.strip()))
        except ValueError:
            continue
    return out


def checkout_player(scores: str) -> str:
    return scores.partition(": ")[0]


def best_checkouts(
    reports: Iterable[MatchReport],
    player: Optional[str] = None,
    count: int = 5,
    *,
    lineup_only: bool = False,
) -> List[int]:
    """Lowest checkout values across reports (every side when ``player`` is None).

    ``lineup_only`` keeps the checkouts of each report's own lineup entries.
    """
    values: List[int] = []
    for report in reports:
        for checkout in report.checkouts:
            name = checkout_player(checkout.scores)
            if player is not None and name != player:
                continue
            if lineup_only and name not in report.lineup:
                continue
            values.extend(parse_checkout_string(checkout.scores))
    return sorted(values)[:count]


def calculate_standings(matchdays: Iterable[LeagueMatchday]) -> List[ComputedStanding]:
    """League table from played results: points are sets won, ties broken by leg difference."""
    table: Dict[str, dict] = {}

    def _row(team: str) -> dict:
        return table.setdefault(
            team, {"played": 0, "points": 0, "legs_for": 0, "legs_against": 0}
        )

    for matchday in matchdays:
        for m in matchday.matches:
            home, away = _row(m.home_team), _row(m.away_team)
            home["played"] += 1
            away["played"] += 1
            home["legs_for"] += m.home_legs
            home["legs_against"] += m.away_legs
            away["legs_for"] += m.away_legs
            away["legs_against"] += m.home_legs
            home["points"] += m.home_sets
            away["points"] += m.away_sets

    ordered = sorted(
        table.items(),
        key=lambda item: (-item[1]["points"], -(item[1]["legs_for"] - item[1]["legs_against"])),
    )
    return [
        ComputedStanding(position=idx, team=team, **values)
        for idx, (team, values) in enumerate(ordered, start=1)
    ]
