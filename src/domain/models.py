"""Domain models for the league scraping pipeline.

Players and teams are identified by display name only; the site exposes no
stable ids. ``PlayerStats`` is keyed by ``(name, team)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Tuple

PLACEHOLDER_TOKEN = "[Name]"


@dataclass(slots=True, frozen=True)
class WinLoss:
    won: int = 0
    lost: int = 0

    @property
    def total(self) -> int:
        return self.won + self.lost

    def __str__(self) -> str:
        return f"{self.won}-{self.lost}"


@dataclass(slots=True)
class TeamStats:
    team: str
    average: float = 0.0
    singles: WinLoss = field(default_factory=WinLoss)
    doubles: WinLoss = field(default_factory=WinLoss)


@dataclass(slots=True, frozen=True)
class PartialPlayerStats:
    """One extraction pass' view of a player; ``None`` fields were not on that table."""

    name: str
    team: str
    average: Optional[float] = None
    singles: Optional[WinLoss] = None
    doubles: Optional[WinLoss] = None

    @property
    def key(self) -> Tuple[str, str]:
        return self.name, self.team


@dataclass(slots=True)
class PlayerStats:
    name: str
    team: str
    average: float = 0.0
    singles_won: int = 0
    singles_lost: int = 0
    singles_percentage: float = 0.0
    doubles_won: int = 0
    doubles_lost: int = 0
    doubles_percentage: float = 0.0
    combined_percentage: float = 0.0

    @property
    def key(self) -> Tuple[str, str]:
        return self.name, self.team


@dataclass(slots=True)
class SingleGame:
    home_player: str
    away_player: str
    home_score: Optional[int]
    away_score: Optional[int]
    home_average: Optional[float] = None
    away_average: Optional[float] = None
    home_checkouts: List[int] = field(default_factory=list)
    away_checkouts: List[int] = field(default_factory=list)

    @property
    def players(self) -> List[str]:
        return [self.home_player, self.away_player]


@dataclass(slots=True)
class DoubleGame:
    home_players: List[str]
    away_players: List[str]
    home_score: Optional[int]
    away_score: Optional[int]

    @property
    def players(self) -> List[str]:
        return [*self.home_players, *self.away_players]


@dataclass(slots=True, frozen=True)
class Checkout:
    scores: str  # "Player: 132, 96" or "Player: -"


@dataclass(slots=True, frozen=True)
class HomeAway:
    home: int = 0
    away: int = 0


@dataclass(slots=True)
class MatchDetails:
    singles: List[SingleGame] = field(default_factory=list)
    doubles: List[DoubleGame] = field(default_factory=list)
    total_legs: HomeAway = field(default_factory=HomeAway)
    total_sets: HomeAway = field(default_factory=HomeAway)


@dataclass(slots=True)
class MatchReport:
    match_id: str
    lineup: List[str] = field(default_factory=list)
    checkouts: List[Checkout] = field(default_factory=list)
    opponent: str = ""
    score: str = ""  # "H-A" from the requesting team's side
    is_home_match: bool = False
    details: MatchDetails = field(default_factory=MatchDetails)


@dataclass(slots=True, frozen=True)
class MatchReportLink:
    date: str
    home_team: str
    away_team: str
    match_id: str


@dataclass(slots=True, frozen=True)
class PlayerMatchAverage:
    player_name: str
    average: float


@dataclass(slots=True)
class MatchAverages:
    match_id: str
    matchday: int = 0
    team_average: float = 0.0
    player_averages: List[PlayerMatchAverage] = field(default_factory=list)
    opponent: str = ""


@dataclass(slots=True, frozen=True)
class ScheduleMatch:
    round: int
    date: str  # DD.MM.YYYY as shown on the site
    home_team: str
    away_team: str
    venue: Optional[str] = None
    address: Optional[str] = None

    @property
    def sort_date(self) -> date:
        return datetime.strptime(self.date, "%d.%m.%Y").date()


@dataclass(slots=True, frozen=True)
class LeagueMatch:
    home_team: str
    away_team: str
    home_legs: int
    away_legs: int
    home_sets: int
    away_sets: int
    match_id: str = ""


@dataclass(slots=True)
class LeagueMatchday:
    round: int
    date: str
    matches: List[LeagueMatch] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class CupMatch:
    home_team: str
    away_team: str
    date: Optional[str]
    round: str


@dataclass(slots=True, frozen=True)
class StandingRow:
    position: int
    team: str
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0


@dataclass(slots=True, frozen=True)
class TeamStandings:
    wins: int
    draws: int
    losses: int


@dataclass(slots=True, frozen=True)
class ComputedStanding:
    position: int
    team: str
    played: int
    points: int
    legs_for: int
    legs_against: int

    @property
    def leg_difference(self) -> int:
        return self.legs_for - self.legs_against


@dataclass(slots=True, frozen=True)
class ClubVenue:
    rank: str
    team_name: str
    club_name: str
    venue: str
    address: str
    city: str
    phone: str


@dataclass(slots=True)
class ComparisonRow:
    opponent: str
    first_round: Optional[str] = None
    second_round: Optional[str] = None


@dataclass(slots=True, frozen=True)
class OneEighty:
    player_name: str
    count: int


@dataclass(slots=True, frozen=True)
class HighFinish:
    player_name: str
    finish: int
    count: int = 1


@dataclass(slots=True)
class SpecialStats:
    one_eighties: List[OneEighty] = field(default_factory=list)
    high_finishes: List[HighFinish] = field(default_factory=list)


@dataclass(slots=True)
class TeamPage:
    """Everything extracted from one team statistics page."""

    team_stats: TeamStats
    players: List[PlayerStats] = field(default_factory=list)
    special: SpecialStats = field(default_factory=SpecialStats)


@dataclass(slots=True)
class TeamView:
    team_name: str
    season: str
    last_updated: datetime
    players: List[PlayerStats] = field(default_factory=list)
    team_stats: Optional[TeamStats] = None
    match_reports: List[MatchReport] = field(default_factory=list)
    league_position: Optional[int] = None
    club_venue: Optional[ClubVenue] = None
    comparison_data: List[ComparisonRow] = field(default_factory=list)
    team_standings: Optional[TeamStandings] = None
    match_averages: List[MatchAverages] = field(default_factory=list)
    running_averages: List[float] = field(default_factory=list)  # chart series over match_averages
    best_checkouts: List[int] = field(default_factory=list)
    one_eighties: List[OneEighty] = field(default_factory=list)
    high_finishes: List[HighFinish] = field(default_factory=list)
    failed_branches: List[str] = field(default_factory=list)
    state_history: List[str] = field(default_factory=list)


@dataclass(slots=True)
class MatchdayDetail:
    matchday: int
    date: str
    home_team: str
    away_team: str
    score: str
    singles: List[SingleGame] = field(default_factory=list)
    doubles: List[DoubleGame] = field(default_factory=list)


@dataclass(slots=True)
class LeagueStatistics:
    best_legs: List[dict] = field(default_factory=list)
    weekly_average_wins: List[dict] = field(default_factory=list)
    highest_matchday_averages: List[dict] = field(default_factory=list)
    winning_streaks: List[dict] = field(default_factory=list)


@dataclass(slots=True)
class LeagueOverview:
    season: str
    results: List[LeagueMatchday] = field(default_factory=list)
    schedule: List[ScheduleMatch] = field(default_factory=list)
    cup_matches: List[CupMatch] = field(default_factory=list)
    team_stats: List[TeamStats] = field(default_factory=list)
    player_stats: List[PlayerStats] = field(default_factory=list)
    standings: List[ComputedStanding] = field(default_factory=list)
    latest_matches: List[MatchdayDetail] = field(default_factory=list)
    statistics: LeagueStatistics = field(default_factory=LeagueStatistics)
    failed_branches: List[str] = field(default_factory=list)
