"""SQLite-backed ``LeagueRepository`` over an explicitly constructed connection.

Uses tables defined in ``db.schema``. Each save replaces the rows of one
team/season inside a single transaction.
"""

from __future__ import annotations

import json
import sqlite3
from dataclasses import asdict
from typing import Optional, Sequence

from domain.models import (
    Checkout,
    DoubleGame,
    HighFinish,
    HomeAway,
    MatchDetails,
    MatchReport,
    OneEighty,
    PlayerStats,
    ScheduleMatch,
    SingleGame,
    SpecialStats,
    TeamStats,
    WinLoss,
)

from ..schema import apply_schema

from .protocols import LeagueRepository

__all__ = ["SqliteLeagueRepository", "create_sqlite_repository"]


class _BaseRepo:
    def __init__(self, conn: sqlite3.Connection):
        conn.row_factory = sqlite3.Row  # name-based access
        self._conn = conn

    def _fetch_all(self, sql: str, *params) -> list[sqlite3.Row]:
        cur = self._conn.execute(sql, params)
        return list(cur.fetchall())

    def _fetch_one(self, sql: str, *params) -> sqlite3.Row | None:
        cur = self._conn.execute(sql, params)
        return cur.fetchone()

    def _replace(self, table: str, team: str, season: str, sql: str, rows: list[tuple]) -> None:
        with self._conn:
            self._conn.execute(f"DELETE FROM {table} WHERE team=? AND season=?", (team, season))
            if rows:
                self._conn.executemany(sql, rows)


def _row_to_team_stats(row: sqlite3.Row) -> TeamStats:
    return TeamStats(
        team=row["team"],
        average=row["average"],
        singles=WinLoss(won=row["singles_won"], lost=row["singles_lost"]),
        doubles=WinLoss(won=row["doubles_won"], lost=row["doubles_lost"]),
    )


def _row_to_player(row: sqlite3.Row) -> PlayerStats:
    return PlayerStats(
        name=row["name"],
        team=row["team"],
        average=row["average"],
        singles_won=row["singles_won"],
        singles_lost=row["singles_lost"],
        singles_percentage=row["singles_percentage"],
        doubles_won=row["doubles_won"],
        doubles_lost=row["doubles_lost"],
        doubles_percentage=row["doubles_percentage"],
        combined_percentage=row["combined_percentage"],
    )


def _details_from_json(text: str) -> MatchDetails:
    data = json.loads(text)
    return MatchDetails(
        singles=[SingleGame(**g) for g in data.get("singles", [])],
        doubles=[DoubleGame(**g) for g in data.get("doubles", [])],
        total_legs=HomeAway(**data.get("total_legs", {})),
        total_sets=HomeAway(**data.get("total_sets", {})),
    )


def _row_to_report(row: sqlite3.Row) -> MatchReport:
    return MatchReport(
        match_id=row["match_id"],
        lineup=json.loads(row["lineup"]),
        checkouts=[Checkout(scores=s) for s in json.loads(row["checkouts"])],
        opponent=row["opponent"],
        score=row["score"],
        is_home_match=bool(row["is_home_match"]),
        details=_details_from_json(row["details"]),
    )


def _row_to_schedule(row: sqlite3.Row) -> ScheduleMatch:
    return ScheduleMatch(
        round=row["round"],
        date=row["match_date"],
        home_team=row["home_team"],
        away_team=row["away_team"],
        venue=row["venue"],
        address=row["address"],
    )


class SqliteLeagueRepository(_BaseRepo, LeagueRepository):  # type: ignore[misc]
    def close(self) -> None:
        self._conn.close()

    def save_team_stats(self, team: str, season: str, stats: TeamStats) -> None:
        self._replace(
            "team_stats",
            team,
            season,
            "INSERT INTO team_stats(team, season, average, singles_won, singles_lost, doubles_won, doubles_lost) VALUES (?,?,?,?,?,?,?)",
            [
                (
                    team,
                    season,
                    stats.average,
                    stats.singles.won,
                    stats.singles.lost,
                    stats.doubles.won,
                    stats.doubles.lost,
                )
            ],
        )

    def find_team_stats(self, team: str, season: str) -> Optional[TeamStats]:
        row = self._fetch_one("SELECT * FROM team_stats WHERE team=? AND season=?", team, season)
        return _row_to_team_stats(row) if row else None

    def save_player_stats(self, team: str, season: str, players: Sequence[PlayerStats]) -> None:
        self._replace(
            "player_stats",
            team,
            season,
            "INSERT OR REPLACE INTO player_stats(team, season, name, average, singles_won, singles_lost, singles_percentage, doubles_won, doubles_lost, doubles_percentage, combined_percentage) VALUES (?,?,?,?,?,?,?,?,?,?,?)",
            [
                (
                    team,
                    season,
                    p.name,
                    p.average,
                    p.singles_won,
                    p.singles_lost,
                    p.singles_percentage,
                    p.doubles_won,
                    p.doubles_lost,
                    p.doubles_percentage,
                    p.combined_percentage,
                )
                for p in players
            ],
        )

    def find_player_stats(self, team: str, season: str) -> Sequence[PlayerStats]:
        rows = self._fetch_all(
            "SELECT * FROM player_stats WHERE team=? AND season=? ORDER BY average DESC, name",
            team,
            season,
        )
        return [_row_to_player(r) for r in rows]

    def save_match_reports(self, team: str, season: str, reports: Sequence[MatchReport]) -> None:
        self._replace(
            "match_report",
            team,
            season,
            "INSERT OR REPLACE INTO match_report(team, season, match_id, position, opponent, score, is_home_match, lineup, checkouts, details) VALUES (?,?,?,?,?,?,?,?,?,?)",
            [
                (
                    team,
                    season,
                    r.match_id,
                    position,
                    r.opponent,
                    r.score,
                    int(r.is_home_match),
                    json.dumps(r.lineup),
                    json.dumps([c.scores for c in r.checkouts]),
                    json.dumps(asdict(r.details)),
                )
                for position, r in enumerate(reports)
            ],
        )

    def find_match_reports(self, team: str, season: str) -> Sequence[MatchReport]:
        rows = self._fetch_all(
            "SELECT * FROM match_report WHERE team=? AND season=? ORDER BY position",
            team,
            season,
        )
        return [_row_to_report(r) for r in rows]

    def save_schedule(self, team: str, season: str, matches: Sequence[ScheduleMatch]) -> None:
        self._replace(
            "schedule_match",
            team,
            season,
            "INSERT OR REPLACE INTO schedule_match(team, season, round, match_date, home_team, away_team, venue, address) VALUES (?,?,?,?,?,?,?,?)",
            [
                (team, season, m.round, m.date, m.home_team, m.away_team, m.venue, m.address)
                for m in matches
            ],
        )

    def find_schedule(self, team: str, season: str) -> Sequence[ScheduleMatch]:
        rows = self._fetch_all(
            "SELECT * FROM schedule_match WHERE team=? AND season=?", team, season
        )
        return sorted((_row_to_schedule(r) for r in rows), key=lambda m: (m.sort_date, m.round))

    def save_special_stats(self, team: str, season: str, special: SpecialStats) -> None:
        with self._conn:
            for table in ("one_eighty", "high_finish"):
                self._conn.execute(
                    f"DELETE FROM {table} WHERE team=? AND season=?", (team, season)
                )
            self._conn.executemany(
                "INSERT OR REPLACE INTO one_eighty(team, season, player_name, count) VALUES (?,?,?,?)",
                [(team, season, o.player_name, o.count) for o in special.one_eighties],
            )
            self._conn.executemany(
                "INSERT OR REPLACE INTO high_finish(team, season, player_name, finish, count) VALUES (?,?,?,?,?)",
                [(team, season, h.player_name, h.finish, h.count) for h in special.high_finishes],
            )

    def find_special_stats(self, team: str, season: str) -> SpecialStats:
        eighties = self._fetch_all(
            "SELECT player_name, count FROM one_eighty WHERE team=? AND season=? ORDER BY count DESC, player_name",
            team,
            season,
        )
        finishes = self._fetch_all(
            "SELECT player_name, finish, count FROM high_finish WHERE team=? AND season=? ORDER BY finish DESC, player_name",
            team,
            season,
        )
        return SpecialStats(
            one_eighties=[OneEighty(player_name=r["player_name"], count=r["count"]) for r in eighties],
            high_finishes=[
                HighFinish(player_name=r["player_name"], finish=r["finish"], count=r["count"])
                for r in finishes
            ],
        )


def create_sqlite_repository(path: str) -> SqliteLeagueRepository:
    """Open ``path``, make sure the schema exists and wrap the connection.

    The caller owns the connection and closes it via ``repo.close()``.
    """
    conn = sqlite3.connect(path)
    apply_schema(conn)
    return SqliteLeagueRepository(conn)
