"""League-wide leaderboards computed from played matchday details.

All leaderboards are top 5. Players are keyed by display name; a player's team
is the one they were first seen with.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from domain.models import LeagueStatistics, MatchdayDetail

TOP_N = 5


def _sides(
    match: MatchdayDetail,
) -> Iterator[Tuple[str, str, Optional[int], Optional[int], Optional[float], List[int]]]:
    """Yield ``(player, team, score, opponent_score, average, checkouts)`` per singles side."""
    for game in match.singles:
        yield (
            game.home_player,
            match.home_team,
            game.home_score,
            game.away_score,
            game.home_average,
            game.home_checkouts,
        )
        yield (
            game.away_player,
            match.away_team,
            game.away_score,
            game.home_score,
            game.away_average,
            game.away_checkouts,
        )


def best_legs(matches: Iterable[MatchdayDetail], top: int = TOP_N) -> List[dict]:
    """Lowest checkouts (darts needed), one entry per player and value with its count."""
    tally: Dict[Tuple[str, int], dict] = {}
    for match in matches:
        for player, team, _, _, _, checkouts in _sides(match):
            for value in checkouts:
                if not player or value <= 0:
                    continue
                entry = tally.setdefault(
                    (player, value), {"player": player, "team": team, "checkout": value, "count": 0}
                )
                entry["count"] += 1
    return sorted(tally.values(), key=lambda e: e["checkout"])[:top]


def _by_matchday(matches: Iterable[MatchdayDetail]) -> Dict[int, List[MatchdayDetail]]:
    grouped: Dict[int, List[MatchdayDetail]] = defaultdict(list)
    for match in matches:
        grouped[match.matchday].append(match)
    return dict(sorted(grouped.items()))


def weekly_average_wins(matches: Iterable[MatchdayDetail], top: int = TOP_N) -> List[dict]:
    """How often each player had the best single-game average of a matchday."""
    wins: Dict[str, dict] = {}
    for _, day_matches in _by_matchday(matches).items():
        best = ("", "", 0.0)
        for match in day_matches:
            for player, team, _, _, average, _ in _sides(match):
                if player and average is not None and average > best[2]:
                    best = (player, team, average)
        player, team, average = best
        if not player:
            continue
        entry = wins.setdefault(player, {"player": player, "team": team, "count": 0})
        entry["count"] += 1
    return sorted(wins.values(), key=lambda e: -e["count"])[:top]


def highest_matchday_averages(matches: Iterable[MatchdayDetail], top: int = TOP_N) -> List[dict]:
    """Per player and matchday the mean of their singles averages; a player may appear repeatedly."""
    rows: List[dict] = []
    for matchday, day_matches in _by_matchday(matches).items():
        per_player: Dict[str, Tuple[str, List[float]]] = {}
        for match in day_matches:
            for player, team, _, _, average, _ in _sides(match):
                if not player or average is None or average <= 0:
                    continue
                per_player.setdefault(player, (team, []))[1].append(average)
        for player, (team, averages) in per_player.items():
            rows.append(
                {
                    "player": player,
                    "team": team,
                    "average": round(sum(averages) / len(averages), 2),
                    "matchday": matchday,
                }
            )
    return sorted(rows, key=lambda r: -r["average"])[:top]


def winning_streaks(matches: Iterable[MatchdayDetail], top: int = TOP_N) -> List[dict]:
    """Longest run of consecutive singles wins per player, in matchday order."""
    current: Dict[str, int] = defaultdict(int)
    longest: Dict[str, int] = defaultdict(int)
    teams: Dict[str, str] = {}
    for match in sorted(matches, key=lambda m: m.matchday):
        for player, team, score, opponent_score, _, _ in _sides(match):
            if not player:
                continue
            teams.setdefault(player, team)
            if score is not None and opponent_score is not None and score > opponent_score:
                current[player] += 1
                longest[player] = max(longest[player], current[player])
            else:
                current[player] = 0
    ranked = sorted(
        ((p, s) for p, s in longest.items() if s > 0), key=lambda item: -item[1]
    )[:top]
    return [{"player": p, "team": teams[p], "streak": s} for p, s in ranked]


def compute(matches: Iterable[MatchdayDetail]) -> LeagueStatistics:
    matches = list(matches)
    return LeagueStatistics(
        best_legs=best_legs(matches),
        weekly_average_wins=weekly_average_wins(matches),
        highest_matchday_averages=highest_matchday_averages(matches),
        winning_streaks=winning_streaks(matches),
    )
