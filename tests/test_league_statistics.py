from domain.models import MatchdayDetail, SingleGame
from services import league_statistics_service as stats


def _day(matchday, games, home="Home", away="Away"):
    return MatchdayDetail(
        matchday=matchday, date="01.01.2026", home_team=home, away_team=away, score="", singles=games
    )


MATCHES = [
    _day(
        1,
        [
            SingleGame("Anna", "Xaver", 3, 0, 80.0, 50.0, [15, 18, 21], []),
            SingleGame("Ben", "Yvonne", 1, 3, 45.0, 60.0, [30], [24, 27, 18]),
        ],
    ),
    _day(
        2,
        [
            SingleGame("Anna", "Yvonne", 3, 2, 70.0, 72.0, [15, 30, 33], [21, 24]),
            SingleGame("Ben", "Xaver", 3, 1, 55.0, 52.0, [19, 20, 22], [40]),
        ],
    ),
    _day(3, [SingleGame("Anna", "Xaver", 0, 3, 40.0, 66.0, [], [16, 17, 18])]),
]


def test_best_legs_counts_repeat_checkouts():
    legs = stats.best_legs(MATCHES)
    assert len(legs) == stats.TOP_N
    assert legs[0] == {"player": "Anna", "team": "Home", "checkout": 15, "count": 2}
    assert [e["checkout"] for e in legs] == sorted(e["checkout"] for e in legs)


def test_weekly_average_wins():
    wins = stats.weekly_average_wins(MATCHES)
    counts = {w["player"]: w["count"] for w in wins}
    assert counts == {"Anna": 1, "Yvonne": 1, "Xaver": 1}


def test_highest_matchday_averages():
    rows = stats.highest_matchday_averages(MATCHES)
    assert rows[0] == {"player": "Anna", "team": "Home", "average": 80.0, "matchday": 1}
    assert len(rows) == stats.TOP_N
    assert all(rows[i]["average"] >= rows[i + 1]["average"] for i in range(len(rows) - 1))


def test_winning_streaks():
    streaks = {s["player"]: s["streak"] for s in stats.winning_streaks(MATCHES)}
    assert streaks["Anna"] == 2
    assert streaks["Yvonne"] == 1
    assert streaks["Ben"] == 1
    assert streaks["Xaver"] == 1


def test_compute_on_empty_input():
    result = stats.compute([])
    assert result.best_legs == []
    assert result.winning_streaks == []
