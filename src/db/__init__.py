"""Database package exposing schema application helpers and the repository boundary.

Public API:
"""

from .schema import apply_schema, get_existing_tables  # noqa: F401
from .repositories import (  # noqa: F401
    LeagueRepository,
    SqliteLeagueRepository,
    create_sqlite_repository,
)

__all__ = [
    "apply_schema",
    "get_existing_tables",
    # Repositories
    "LeagueRepository",
    "SqliteLeagueRepository",
    "create_sqlite_repository",
]
