"""SQLite schema definitions.

Every table is keyed by team name + season string (``"2025/26"``); the league
site exposes no stable ids. Structured report parts (lineup, checkouts, game
details) are stored as JSON text.

Foreign keys are not used: rows of one team/season are replaced as a unit.
Timestamps are ISO-8601 text (UTC).
"""

from __future__ import annotations
import sqlite3

SCHEMA_VERSION = 1

# DDL statements
DDL: list[str] = [
    """
    CREATE TABLE IF NOT EXISTS schema_meta (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    );
    """.strip(),
    """
    CREATE TABLE IF NOT EXISTS team_stats (
        team TEXT NOT NULL,
        season TEXT NOT NULL,
        average REAL NOT NULL DEFAULT 0,
        singles_won INTEGER NOT NULL DEFAULT 0,
        singles_lost INTEGER NOT NULL DEFAULT 0,
        doubles_won INTEGER NOT NULL DEFAULT 0,
        doubles_lost INTEGER NOT NULL DEFAULT 0,
        updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
        PRIMARY KEY (team, season)
    );
    """.strip(),
    """
    CREATE TABLE IF NOT EXISTS player_stats (
        team TEXT NOT NULL,
        season TEXT NOT NULL,
        name TEXT NOT NULL,
        average REAL NOT NULL DEFAULT 0,
        singles_won INTEGER NOT NULL DEFAULT 0,
        singles_lost INTEGER NOT NULL DEFAULT 0,
        singles_percentage REAL NOT NULL DEFAULT 0,
        doubles_won INTEGER NOT NULL DEFAULT 0,
        doubles_lost INTEGER NOT NULL DEFAULT 0,
        doubles_percentage REAL NOT NULL DEFAULT 0,
        combined_percentage REAL NOT NULL DEFAULT 0,
        PRIMARY KEY (team, season, name)
    );
    """.strip(),
    """
    CREATE TABLE IF NOT EXISTS match_report (
        team TEXT NOT NULL,
        season TEXT NOT NULL,
        match_id TEXT NOT NULL,
        position INTEGER NOT NULL,
        opponent TEXT NOT NULL,
        score TEXT NOT NULL,
        is_home_match INTEGER NOT NULL, -- 0/1
        lineup TEXT NOT NULL,    -- JSON list of names
        checkouts TEXT NOT NULL, -- JSON list of "Player: a, b" strings
        details TEXT NOT NULL,   -- JSON singles/doubles/totals
        PRIMARY KEY (team, season, match_id)
    );
    """.strip(),
    """
    CREATE TABLE IF NOT EXISTS schedule_match (
        team TEXT NOT NULL,
        season TEXT NOT NULL,
        round INTEGER NOT NULL,
        match_date TEXT NOT NULL, -- DD.MM.YYYY as shown on the site
        home_team TEXT NOT NULL,
        away_team TEXT NOT NULL,
        venue TEXT,
        address TEXT,
        PRIMARY KEY (team, season, round, home_team, away_team)
    );
    """.strip(),
    """
    CREATE TABLE IF NOT EXISTS one_eighty (
        team TEXT NOT NULL,
        season TEXT NOT NULL,
        player_name TEXT NOT NULL,
        count INTEGER NOT NULL,
        PRIMARY KEY (team, season, player_name)
    );
    """.strip(),
    """
    CREATE TABLE IF NOT EXISTS high_finish (
        team TEXT NOT NULL,
        season TEXT NOT NULL,
        player_name TEXT NOT NULL,
        finish INTEGER NOT NULL,
        count INTEGER NOT NULL DEFAULT 1,
        PRIMARY KEY (team, season, player_name, finish)
    );
    """.strip(),
    "CREATE INDEX IF NOT EXISTS idx_match_report_season ON match_report(season)",
    "CREATE INDEX IF NOT EXISTS idx_schedule_season ON schedule_match(season, round)",
]


def apply_schema(conn: sqlite3.Connection) -> None:
    cur = conn.cursor()
    for stmt in DDL:
        cur.execute(stmt)
    cur.execute(
        "INSERT OR REPLACE INTO schema_meta(key, value) VALUES ('schema_version', ?)",
        (str(SCHEMA_VERSION),),
    )
    conn.commit()


def get_existing_tables(conn: sqlite3.Connection) -> list[str]:
    cur = conn.cursor()
    cur.execute("SELECT name FROM sqlite_master WHERE type='table'")
    return sorted(r[0] for r in cur.fetchall())
