import os

import pytest

from config import settings
from scraping import urls
from utils import naming


def test_season_window():
    assert settings.season_window("2025/26") == (1754042400, 1785578400)


def test_filenames():
    assert naming.team_view_filename("DC Patron", "2025/26") == "team_view_DC_Patron_2025_26.json"
    assert naming.league_overview_filename("all") == "league_overview_all.json"
    assert naming.sanitize("TC Aspern 1!") == "TC_Aspern_1"


def test_output_path(tmp_path):
    assert naming.output_path(None, "x.json") is None
    assert naming.output_path(str(tmp_path), "x.json") == os.path.join(str(tmp_path), "x.json")
    assert naming.output_path("out.json", "x.json") == "out.json"
    assert naming.output_path("-", "x.json") == os.path.join(settings.DATA_DIR, "x.json")


@pytest.mark.parametrize(
    "url,expected",
    [
        (
            urls.team_stats_url("DC Patron", "2025/26"),
            "_landesliga/_statistik/mannschaft.php?start=1754042400&ende=1785578400"
            "&saison=2025/26&dartsldg=18&mannschaft=DC+Patron",
        ),
        (urls.match_report_url("101", "2025/26"), "_landesliga/_statistik/spielbericht.php?id=101&saison=2025/26"),
        (urls.cup_url("2025/26"), "_teamcup/_cup/index.php?saison=2025/26"),
        (urls.stats_index_url("2025/26"), "_landesliga/_statistik/index.php?saison=2025/26&div=all"),
    ],
)
def test_urls(url, expected):
    assert url == settings.ROOT_URL + expected


def test_resolve_stats_link():
    assert urls.resolve_stats_link("spielberichtmenue.php?saison=2025/26") == (
        settings.ROOT_URL + "_landesliga/_statistik/spielberichtmenue.php?saison=2025/26"
    )
