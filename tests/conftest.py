# Shared fixtures: static HTML pages under tests/fixtures and a fake league site
# served through httpx.MockTransport.

from pathlib import Path
from typing import Callable, Dict, Iterable

import httpx
import pytest

FIXTURES = Path(__file__).parent / "fixtures"

STATS = "/_landesliga/_statistik/"
LEAGUE = "/_landesliga/_liga/"
CUP = "/_teamcup/_cup/"


def read_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def load_fixture() -> Callable[[str], str]:
    return read_fixture


@pytest.fixture
def site_pages() -> Dict[str, str]:
    """Path (optionally ``?id=N``) -> page body, mirroring the league site."""
    report = read_fixture("match_report.html")
    return {
        STATS + "mannschaft.php": read_fixture("team_page.html"),
        STATS + "index.php": read_fixture("stats_index.html"),
        STATS + "spielberichtmenue.php": read_fixture("report_index.html"),
        STATS + "spielbericht.php?id=101": report,
        STATS + "spielbericht.php?id=102": report.replace("PlayerB", "[Name]"),
        LEAGUE + "tabakt.php": read_fixture("standings.html"),
        LEAGUE + "teams.php": read_fixture("venues.html"),
        LEAGUE + "ergmann1.php": read_fixture("comparison.html"),
        LEAGUE + "termine.php": read_fixture("schedule.html"),
        LEAGUE + "ergebnisse.php": read_fixture("results.html"),
        CUP + "index.php": read_fixture("cup.html"),
    }


class FakeSite:
    """Request log plus the MockTransport handler serving ``pages``."""

    def __init__(self, pages: Dict[str, str], failing: Iterable[str] = ()):
        self.pages = pages
        self.failing = set(failing)
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        match_id = request.url.params.get("id")
        key = f"{path}?id={match_id}" if match_id else path
        if key in self.failing or path in self.failing:
            return httpx.Response(500, text="boom")
        body = self.pages.get(key)
        if body is None:
            return httpx.Response(404, text="not found")
        return httpx.Response(200, text=body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_site(site_pages) -> Callable[..., FakeSite]:
    def _make(failing: Iterable[str] = ()) -> FakeSite:
        return FakeSite(site_pages, failing)

    return _make
