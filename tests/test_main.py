import json
from datetime import datetime, timezone

from db.repositories import create_sqlite_repository
from domain.models import LeagueOverview, MatchReport, TeamStats, TeamView
import main


def _view(team, season):
    return TeamView(
        team_name=team,
        season=season,
        last_updated=datetime(2025, 12, 31, tzinfo=timezone.utc),
        team_stats=TeamStats(team=team, average=24.6),
        match_reports=[MatchReport(match_id="101", lineup=["Anna"], opponent="X", score="2-1")],
    )


def test_team_view_writes_json(monkeypatch, tmp_path):
    monkeypatch.setattr(main.pipeline, "run_team_view", _view)
    assert main.main(["team-view", "--team", "DC Patron", "--season", "2025/26", "--out", str(tmp_path)]) == 0
    data = json.loads((tmp_path / "team_view_DC_Patron_2025_26.json").read_text(encoding="utf-8"))
    assert data["team_name"] == "DC Patron"
    assert data["match_reports"][0]["match_id"] == "101"


def test_team_view_persists_to_db(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(main.pipeline, "run_team_view", _view)
    db_path = str(tmp_path / "league.db")
    main.main(["team-view", "--team", "DC Patron", "--season", "2025/26", "--db", db_path])
    out = json.loads(capsys.readouterr().out)
    assert out["season"] == "2025/26"
    repo = create_sqlite_repository(db_path)
    try:
        assert [r.match_id for r in repo.find_match_reports("DC Patron", "2025/26")] == ["101"]
    finally:
        repo.close()


def test_league_overview_prints_json(monkeypatch, capsys):
    monkeypatch.setattr(main.pipeline, "run_league_overview", lambda season: LeagueOverview(season=season))
    main.main(["league-overview", "--season", "2024/25"])
    data = json.loads(capsys.readouterr().out)
    assert data["season"] == "2024/25"
    assert data["results"] == []
