"""Global configuration and constants for the league scraping pipeline."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Final

ROOT_URL: Final = os.environ.get("DARTLEAGUE_ROOT_URL", "https://www.wdv-dart.at/")
STATS_PATH: Final = "_landesliga/_statistik/"
LEAGUE_PATH: Final = "_landesliga/_liga/"
CUP_PATH: Final = "_teamcup/_cup/"

DEFAULT_USER_AGENT: Final = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/115.0 Safari/537.36"
)
DEFAULT_TIMEOUT: Final = float(os.environ.get("DARTLEAGUE_TIMEOUT", "15"))  # seconds
DATA_DIR: Final = os.environ.get("DARTLEAGUE_DATA_DIR", "data")

DEFAULT_SEASON: Final = os.environ.get("DARTLEAGUE_SEASON", "2025/26")
# Seasons combined by the "all" season selector, oldest first
KNOWN_SEASONS: Final = ("2024/25", "2025/26")
DEFAULT_DIVISION: Final = int(os.environ.get("DARTLEAGUE_DIVISION", "5"))
# Stats page filter parameter used by the site for the Landesliga
DARTSLDG: Final = 18
# Rounds 1..13 form the first half of the season
ROUNDS_PER_HALF: Final = 13
CUP_ROUND_LABEL: Final = "Runde 2"


def season_window(season: str) -> tuple[int, int]:
    """Return the (start, ende) epoch window the statistics pages expect.

    A season ``"2025/26"`` runs from 1 August 2025 10:00 UTC to 1 August 2026.
    """
    start_year = int(season.split("/")[0])
    start = datetime(start_year, 8, 1, 10, tzinfo=timezone.utc)
    end = datetime(start_year + 1, 8, 1, 10, tzinfo=timezone.utc)
    return int(start.timestamp()), int(end.timestamp())
