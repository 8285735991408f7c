"""URL builders for the league site pages."""

from __future__ import annotations

from urllib.parse import urlencode, urljoin

from config import settings


def _url(path: str, page: str, **params) -> str:
    query = urlencode(params, safe="/")
    return f"{urljoin(settings.ROOT_URL, path)}{page}?{query}"


def stats_base() -> str:
    return urljoin(settings.ROOT_URL, settings.STATS_PATH)


def stats_index_url(season: str) -> str:
    return _url(settings.STATS_PATH, "index.php", saison=season, div="all")


def team_stats_url(team: str, season: str) -> str:
    start, end = settings.season_window(season)
    return _url(
        settings.STATS_PATH,
        "mannschaft.php",
        start=start,
        ende=end,
        saison=season,
        dartsldg=settings.DARTSLDG,
        mannschaft=team,
    )


def report_index_url(season: str) -> str:
    start, end = settings.season_window(season)
    return _url(settings.STATS_PATH, "spielberichtmenue.php", start=start, ende=end, saison=season)


def resolve_stats_link(href: str) -> str:
    """Links on the statistics index are relative to the statistics directory."""
    return urljoin(stats_base(), href)


def match_report_url(match_id: str, season: str) -> str:
    return _url(settings.STATS_PATH, "spielbericht.php", id=match_id, saison=season)


def standings_url(season: str, division: int = settings.DEFAULT_DIVISION) -> str:
    return _url(settings.LEAGUE_PATH, "tabakt.php", div=division, saison=season)


def venues_url(season: str, division: int = settings.DEFAULT_DIVISION) -> str:
    return _url(settings.LEAGUE_PATH, "teams.php", div=division, saison=season)


def schedule_url(season: str, division: int = settings.DEFAULT_DIVISION) -> str:
    return _url(settings.LEAGUE_PATH, "termine.php", div=division, saison=season)


def results_url(season: str, division: int = settings.DEFAULT_DIVISION) -> str:
    return _url(settings.LEAGUE_PATH, "ergebnisse.php", div=division, saison=season)


def comparison_url(team: str, season: str, division: int = settings.DEFAULT_DIVISION) -> str:
    return _url(settings.LEAGUE_PATH, "ergmann1.php", div=division, saison=season, mannschaft=team)


def cup_url(season: str) -> str:
    return _url(settings.CUP_PATH, "index.php", saison=season)
