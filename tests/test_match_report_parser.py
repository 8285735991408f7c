import pytest

from domain.models import HomeAway
from parsing import match_report_parser as mrp


def test_report_from_home_perspective(load_fixture):
    report = mrp.parse_match_report(load_fixture("match_report.html"), match_id="101", team="DC Patron")
    assert report is not None
    assert report.match_id == "101"
    assert report.is_home_match is True
    assert report.opponent == "TC Aspern 1"
    assert report.score == "2-1"
    assert report.lineup == ["PlayerA", "PlayerB", "PlayerA, PlayerB"]

    details = report.details
    assert len(details.singles) == 2
    assert len(details.doubles) == 1
    assert details.total_legs == HomeAway(7, 4)
    assert details.total_sets == HomeAway(2, 1)

    first = details.singles[0]
    assert (first.home_player, first.away_player) == ("PlayerA", "PlayerX")
    assert (first.home_score, first.away_score) == (3, 0)
    assert first.home_checkouts == [18, 21, 15]
    assert first.away_checkouts == []
    assert first.home_average == pytest.approx(83.5)
    assert first.away_average == pytest.approx(73.94)

    double = details.doubles[0]
    assert double.home_players == ["PlayerA", "PlayerB"]
    assert double.away_players == ["PlayerX", "PlayerY"]
    assert (double.home_score, double.away_score) == (3, 1)


def test_checkout_strings(load_fixture):
    report = mrp.parse_match_report(load_fixture("match_report.html"), match_id="101", team="DC Patron")
    assert [c.scores for c in report.checkouts] == [
        "PlayerA: 18, 21, 15",
        "PlayerX: -",
        "PlayerB: 24",
        "PlayerY: 24, 27, 18",
        "PlayerA, PlayerB: 20, 25, 19",
        "PlayerX, PlayerY: 22",
    ]


def test_report_from_away_perspective(load_fixture):
    report = mrp.parse_match_report(load_fixture("match_report.html"), match_id="101", team="TC Aspern 1")
    assert report.is_home_match is False
    assert report.opponent == "DC Patron"
    assert report.score == "1-2"
    assert report.lineup == ["PlayerX", "PlayerY", "PlayerX, PlayerY"]


def test_team_not_in_report_or_no_table(load_fixture):
    assert mrp.parse_match_report(load_fixture("match_report.html"), match_id="1", team="Other") is None
    assert mrp.parse_match_report("<html></html>", match_id="1", team="DC Patron") is None


def test_non_numeric_score_is_kept_as_none(load_fixture):
    html = load_fixture("match_report.html").replace("<b>3</b></td></tr>\n<tr><td>18</td>", "<b>?</b></td></tr>\n<tr><td>18</td>", 1)
    report = mrp.parse_match_report(html, match_id="101", team="DC Patron")
    assert report.details.singles[0].home_score is None


def test_side_of_prefers_exact_names():
    assert mrp.side_of("DC Patron", "DC Patron II", "DC Patron") == "away"
    assert mrp.side_of("DC Patron", "DC Patron II", "TC Aspern 1") == "home"
    assert mrp.side_of("", "A", "B") is None


def test_match_averages(load_fixture):
    averages = mrp.extract_match_averages(load_fixture("match_report.html"), match_id="101", team="DC Patron")
    assert averages.match_id == "101"
    assert averages.opponent == "TC Aspern 1"
    assert [(p.player_name, p.average) for p in averages.player_averages] == [
        ("PlayerA", pytest.approx(83.5)),
        ("PlayerB", pytest.approx(57.65)),
    ]
    assert averages.team_average == pytest.approx(70.58, abs=0.01)


@pytest.mark.parametrize(
    "darts,rests,expected",
    [
        ([18, 21, 15], [0, 0, 0], 83.5),
        # two legs only
        ([18, 21], [0, 0], mrp.FALLBACK_AVERAGE),
        # mismatched lengths
        ([18, 21, 15], [0, 0], mrp.FALLBACK_AVERAGE),
        # implausibly high
        ([3, 3, 3], [0, 0, 0], mrp.FALLBACK_AVERAGE),
        # invalid legs dropped below the minimum
        ([18, 200, 15], [0, 0, 0], mrp.FALLBACK_AVERAGE),
    ],
)
def test_calculate_leg_average(darts, rests, expected):
    assert mrp.calculate_leg_average(darts, rests) == pytest.approx(expected)


def test_match_details_without_team(load_fixture):
    details = mrp.parse_match_details(load_fixture("match_report.html"), match_id="101")
    assert len(details.singles) == 2
    assert mrp.parse_match_details("<p></p>", match_id="x").singles == []
