"""Repository interface for persisted league data.

Every method is keyed by team name + season string; the core never depends on
the storage schema, only on this save/find contract. Saving replaces what was
stored for the same team and season.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from domain.models import MatchReport, PlayerStats, ScheduleMatch, SpecialStats, TeamStats

__all__ = ["LeagueRepository"]


@runtime_checkable
class LeagueRepository(Protocol):
    """Persist and query one team's season data.

    Query patterns:
    - Team header (averages, singles/doubles record)
    - Player statistics
    - Validated match reports in scrape order
    - Fixtures and special stats (180s, high finishes)
    """

    def save_team_stats(self, team: str, season: str, stats: TeamStats) -> None: ...  # pragma: no cover

    def find_team_stats(self, team: str, season: str) -> Optional[TeamStats]: ...  # pragma: no cover

    def save_player_stats(
        self, team: str, season: str, players: Sequence[PlayerStats]
    ) -> None: ...  # pragma: no cover

    def find_player_stats(self, team: str, season: str) -> Sequence[PlayerStats]: ...  # pragma: no cover

    def save_match_reports(
        self, team: str, season: str, reports: Sequence[MatchReport]
    ) -> None: ...  # pragma: no cover

    def find_match_reports(self, team: str, season: str) -> Sequence[MatchReport]: ...  # pragma: no cover

    def save_schedule(
        self, team: str, season: str, matches: Sequence[ScheduleMatch]
    ) -> None: ...  # pragma: no cover

    def find_schedule(self, team: str, season: str) -> Sequence[ScheduleMatch]: ...  # pragma: no cover

    def save_special_stats(
        self, team: str, season: str, special: SpecialStats
    ) -> None: ...  # pragma: no cover

    def find_special_stats(self, team: str, season: str) -> SpecialStats: ...  # pragma: no cover
