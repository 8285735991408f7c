"""Repository layer.

``LeagueRepository`` is the save/find contract; ``SqliteLeagueRepository``
operates over a provided sqlite3.Connection owned by the caller.
"""

from .protocols import LeagueRepository  # noqa: F401
from .sqlite_impl import SqliteLeagueRepository, create_sqlite_repository  # noqa: F401

__all__ = ["LeagueRepository", "SqliteLeagueRepository", "create_sqlite_repository"]
