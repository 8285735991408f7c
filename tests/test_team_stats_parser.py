import pytest

from domain.models import HighFinish, OneEighty, WinLoss
from parsing import team_stats_parser
from parsing.errors import MissingSectionError
from parsing.page_shapes import PageShape

AVERAGE_ONLY = """
<h4>Average</h4>
<div class="ranking"><table class="ranking"><tbody>
<tr class="ranking"><td>1</td><td><a href="#">PlayerA</a></td><td>5</td><td></td><td></td><td></td><td>8,00</td></tr>
<tr class="ranking"><td>2</td><td><a href="#">PlayerB</a></td><td>2</td><td></td><td></td><td></td><td>9,00</td></tr>
</tbody></table></div>
"""


def test_average_section_excludes_players_below_three_legs():
    page = team_stats_parser.parse_team_page(AVERAGE_ONLY, team="T")
    assert len(page.players) == 1
    player = page.players[0]
    assert player.name == "PlayerA"
    assert player.team == "T"
    assert player.average == pytest.approx(24.00)


def test_full_team_page(load_fixture):
    page = team_stats_parser.parse_team_page(load_fixture("team_page.html"), team="DC Patron")

    assert page.team_stats.team == "DC Patron"
    assert page.team_stats.average == pytest.approx(24.6)
    assert page.team_stats.singles == WinLoss(6, 5)
    # raw doubles footer 7-3 is halved with floor
    assert page.team_stats.doubles == WinLoss(3, 1)

    by_name = {p.name: p for p in page.players}
    assert set(by_name) == {"PlayerA", "PlayerC"}

    a = by_name["PlayerA"]
    assert (a.singles_won, a.singles_lost) == (5, 2)
    assert a.singles_percentage == pytest.approx(71.43)
    assert (a.doubles_won, a.doubles_lost) == (4, 2)
    assert a.combined_percentage == pytest.approx(69.23)

    c = by_name["PlayerC"]
    # never had enough legs for an average; the unparseable doubles loss cell defaults to 0
    assert c.average == 0
    assert (c.doubles_won, c.doubles_lost) == (3, 0)
    assert c.combined_percentage == pytest.approx(57.14)


def test_special_stats(load_fixture):
    special = team_stats_parser.extract_special_stats(load_fixture("team_page.html"))
    assert special.one_eighties == [OneEighty("PlayerA", 2), OneEighty("PlayerC", 1)]
    assert special.high_finishes == [
        HighFinish("PlayerA", 104, 1),
        HighFinish("PlayerA", 121, 2),
    ]


def test_missing_sections_yield_empty_team():
    page = team_stats_parser.parse_team_page("<html><body></body></html>", team="T")
    assert page.players == []
    assert page.team_stats.average == 0.0
    assert page.team_stats.doubles == WinLoss()


def test_strict_mode_requires_average_section():
    with pytest.raises(MissingSectionError):
        team_stats_parser.parse_team_page("<h4>Einzel</h4>", team="T", strict=True)


def test_win_loss_rejects_other_shapes():
    with pytest.raises(ValueError):
        team_stats_parser.extract_win_loss(AVERAGE_ONLY, PageShape.ONE_EIGHTY, team="T")


def test_unit_conversions():
    assert team_stats_parser.scale_average(8.5) == pytest.approx(25.5)
    assert team_stats_parser.halve_doubles(WinLoss(7, 3)) == WinLoss(3, 1)
