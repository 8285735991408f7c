"""CLI entry point for the dart league scraper."""

from __future__ import annotations
import argparse
import json
import logging
from dataclasses import asdict
from typing import Any

from config import settings
from core import filesystem
from db.repositories.sqlite_impl import create_sqlite_repository
from services import pipeline, sync
from utils import naming


def _emit(payload: Any, out: str | None, default_name: str) -> None:
    text = json.dumps(asdict(payload), indent=2, ensure_ascii=False, default=str)
    path = naming.output_path(out, default_name)
    if path is None:
        print(text)
        return
    filesystem.write_text(path, text)
    print(json.dumps({"written": path}, ensure_ascii=False))


def cmd_team_view(args: argparse.Namespace) -> None:
    view = pipeline.run_team_view(args.team, args.season)
    if args.db:
        repo = create_sqlite_repository(args.db)
        try:
            summary = sync.persist_team_view(repo, view, args.season)
        finally:
            repo.close()
        logging.getLogger(__name__).info("Saved %s", summary)
    _emit(view, args.out, naming.team_view_filename(view.team_name, view.season))


def cmd_league_overview(args: argparse.Namespace) -> None:
    overview = pipeline.run_league_overview(args.season)
    _emit(overview, args.out, naming.league_overview_filename(overview.season))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="dart-league")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    team_view = sub.add_parser("team-view", help="Scrape one team's season view")
    team_view.add_argument("--team", required=True, help="Team name as shown on the site")
    team_view.add_argument(
        "--season",
        default=settings.DEFAULT_SEASON,
        help=f"Season like 2025/26, or '{pipeline.ALL_SEASONS}' (default: %(default)s)",
    )
    team_view.add_argument("--db", required=False, help="SQLite file to persist validated data")
    team_view.add_argument("--out", required=False, help="Output JSON path or directory")
    team_view.set_defaults(func=cmd_team_view)

    overview = sub.add_parser("league-overview", help="Scrape league-wide results and statistics")
    overview.add_argument("--season", default=settings.DEFAULT_SEASON)
    overview.add_argument("--out", required=False, help="Output JSON path or directory")
    overview.set_defaults(func=cmd_league_overview)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args.func(args)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
