import asyncio
from datetime import date

import pytest

from conftest import CUP, LEAGUE, STATS
from services import pipeline
from services.errors import InvalidParameterError, LeagueOverviewError, MissingParameterError, TeamViewError

TODAY = date(2025, 12, 31)


def _team_view(site, team="DC Patron", season="2025/26"):
    async def _run():
        async with site.client() as client:
            return await pipeline.build_team_view(team, season, client=client, today=TODAY)

    return asyncio.run(_run())


def _overview(site, season="2025/26"):
    async def _run():
        async with site.client() as client:
            return await pipeline.build_league_overview(season, client=client)

    return asyncio.run(_run())


def test_team_view_assembles_all_branches(fake_site):
    view = _team_view(fake_site())
    assert view.team_name == "DC Patron"
    assert view.season == "2025/26"
    assert view.failed_branches == []
    assert view.state_history == [
        "PENDING",
        "FETCHING_INDEPENDENT",
        "FETCHING_MATCH_LIST",
        "FETCHING_MATCH_REPORTS",
        "FILTERING",
        "FETCHING_AVERAGES",
        "ASSEMBLED",
    ]
    # 102 carries a placeholder name and is discarded
    assert [r.match_id for r in view.match_reports] == ["101"]
    assert [(a.match_id, a.matchday) for a in view.match_averages] == [("101", 1)]
    assert view.running_averages == [pytest.approx(70.58, abs=0.01)]
    # own lineup only: PlayerA 18, 21, 15, PlayerB 24, the pair 20, 25, 19
    assert view.best_checkouts == [15, 18, 19, 20, 21]
    assert view.league_position == 3
    assert (view.team_standings.wins, view.team_standings.losses) == (1, 1)
    assert view.club_venue.venue == "Cafe Patron"
    assert {row.opponent for row in view.comparison_data} == {"TC Aspern 1", "PSV Wien Darts 1"}
    assert view.team_stats.average == pytest.approx(24.6)
    assert "PlayerA" in [p.name for p in view.players]
    assert view.one_eighties


def test_failed_branch_is_recorded(fake_site):
    view = _team_view(fake_site(failing=[LEAGUE + "tabakt.php"]))
    assert view.failed_branches == ["standings"]
    assert view.league_position is None
    assert view.team_standings is None
    assert [r.match_id for r in view.match_reports] == ["101"]


def test_failed_report_is_skipped(fake_site):
    site = fake_site(failing=[STATS + "spielbericht.php?id=101"])
    view = _team_view(site)
    assert view.match_reports == []
    assert "match_report:101" in view.failed_branches


def test_all_independent_branches_failing_aborts(fake_site):
    site = fake_site(
        failing=[
            STATS + "mannschaft.php",
            LEAGUE + "tabakt.php",
            LEAGUE + "ergmann1.php",
            LEAGUE + "teams.php",
        ]
    )
    with pytest.raises(TeamViewError) as exc:
        _team_view(site)
    assert set(exc.value.errors) == set(pipeline.INDEPENDENT_BRANCHES)
    assert exc.value.team == "DC Patron"


@pytest.mark.parametrize("team,season", [("", "2025/26"), ("   ", "2025/26"), ("DC Patron", "")])
def test_blank_parameters_rejected_before_fetching(fake_site, team, season):
    site = fake_site()
    with pytest.raises(MissingParameterError):
        _team_view(site, team=team, season=season)
    assert site.requests == []


def test_all_seasons_concatenates_and_renumbers(fake_site):
    site = fake_site()
    view = _team_view(site, season=pipeline.ALL_SEASONS)
    assert view.season == pipeline.ALL_SEASONS
    assert len(view.match_reports) == 2
    assert [a.matchday for a in view.match_averages] == [1, 2]
    assert view.running_averages == [pytest.approx(70.58, abs=0.01)] * 2
    assert view.best_checkouts == [15, 15, 18, 18, 19]
    seasons = {r.url.params.get("saison") for r in site.requests}
    assert {"2024/25", "2025/26"} <= seasons


def test_league_overview(fake_site):
    overview = _overview(fake_site())
    assert overview.failed_branches == []
    assert [d.round for d in overview.results] == [1, 2]
    assert [s.team for s in overview.standings] == [
        "DC Patron",
        "DC Patron II",
        "TC Aspern 1",
        "PSV Wien Darts 1",
    ]
    assert overview.standings[0].points == 11
    # round 2 only has PSV - DC Patron, resolved to report 102 through the report index
    assert [(m.matchday, m.home_team, m.score) for m in overview.latest_matches] == [
        (2, "PSV Wien Darts 1", "2-6")
    ]
    assert len(overview.cup_matches) == 2
    assert len(overview.team_stats) == 4
    assert overview.schedule[0].venue == "Cafe Patron"
    assert overview.statistics.best_legs[0]["checkout"] == 15


def test_league_overview_survives_missing_cup(fake_site):
    overview = _overview(fake_site(failing=[CUP + "index.php"]))
    assert overview.failed_branches == ["cup"]
    assert overview.cup_matches == []
    assert len(overview.results) == 2


@pytest.mark.parametrize("season", ["abc", "2025", "25/26"])
def test_malformed_season_rejected_before_fetching(fake_site, season):
    site = fake_site()
    with pytest.raises(InvalidParameterError):
        _team_view(site, season=season)
    with pytest.raises(InvalidParameterError):
        _overview(site, season=season)
    assert site.requests == []


def test_league_overview_rejects_all_seasons_selector(fake_site):
    with pytest.raises(InvalidParameterError):
        _overview(fake_site(), season=pipeline.ALL_SEASONS)


def test_league_overview_all_sources_failing_aborts(fake_site):
    site = fake_site(
        failing=[
            LEAGUE + "ergebnisse.php",
            LEAGUE + "termine.php",
            LEAGUE + "tabakt.php",
            LEAGUE + "teams.php",
            CUP + "index.php",
        ]
    )
    with pytest.raises(LeagueOverviewError) as exc:
        _overview(site)
    assert set(pipeline.OVERVIEW_SOURCES) <= set(exc.value.errors)
    assert exc.value.season == "2025/26"
    # nothing past the first round of requests
    assert not any(r.url.path.endswith("index.php") for r in site.requests)


def test_league_overview_keeps_schedule_without_venues(fake_site):
    overview = _overview(fake_site(failing=[LEAGUE + "teams.php"]))
    assert overview.failed_branches == ["venues"]
    assert len(overview.schedule) == 4
    assert all(m.venue is None for m in overview.schedule)
