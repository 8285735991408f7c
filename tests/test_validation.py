from domain.models import DoubleGame, MatchDetails, MatchReport, SingleGame
from services import validation


def _report(match_id="1", lineup=None, singles=None, doubles=None) -> MatchReport:
    return MatchReport(
        match_id=match_id,
        lineup=lineup if lineup is not None else ["Anna", "Ben", "Anna, Ben"],
        opponent="Other",
        score="2-1",
        details=MatchDetails(
            singles=singles if singles is not None else [SingleGame("Anna", "Xaver", 3, 1)],
            doubles=doubles if doubles is not None else [DoubleGame(["Anna", "Ben"], ["Xaver", "Yvonne"], 3, 0)],
        ),
    )


def test_complete_report_is_valid():
    assert validation.explain(_report()) is None
    assert validation.is_valid(_report())


def test_placeholder_in_lineup_rejects():
    failure = validation.explain(_report(lineup=["Anna", "[Name]"]))
    assert failure is not None
    assert failure.match_id == "1"
    assert "lineup" in failure.reason


def test_placeholder_in_opponent_single_rejects():
    report = _report(singles=[SingleGame("Anna", "[Name]", 3, 0)])
    assert not validation.is_valid(report)


def test_placeholder_in_double_rejects():
    report = _report(doubles=[DoubleGame(["Anna", "Ben"], ["[Name]", "Yvonne"], 3, 2)])
    failure = validation.explain(report)
    assert failure is not None and "double 1" in failure.reason


def test_missing_score_rejects():
    report = _report(singles=[SingleGame("Anna", "Xaver", None, 3)])
    failure = validation.explain(report)
    assert failure is not None and "score" in failure.reason


def test_filter_valid_keeps_order_and_skips_none():
    good_a = _report("a")
    good_b = _report("b")
    bad = _report("c", lineup=["[Name]"])
    kept = validation.filter_valid([good_a, None, bad, good_b])
    assert [r.match_id for r in kept] == ["a", "b"]
