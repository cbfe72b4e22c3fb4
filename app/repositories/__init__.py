"""
Repository layer for data access.

The repository pattern provides:
1. Separation of data access logic from GraphQL resolvers
2. Single place for query logic (easier to maintain)
3. Easier testing (can mock repositories)

Usage:
    from app.repositories.football import FixtureRepository, FixtureFilter
    from app.core.database import get_session_factory

    db = get_session_factory()()
    fixtures = FixtureRepository(db).find_filtered(FixtureFilter(live=True))
    db.close()
"""

from app.repositories.base import BaseRepository

# Football Repositories
from app.repositories.football import (
    CountryRepository,
    FixtureFilter,
    FixtureRepository,
    LeagueRepository,
    OddsSnapshotRepository,
    StandingRepository,
    TeamRepository,
)

# User Repositories
from app.repositories.user import (
    AlertRepository,
    FavoriteRepository,
    NoteRepository,
    SavedScreenRepository,
    SelectionRepository,
    UserRepository,
)

__all__ = [
    "BaseRepository",
    "CountryRepository",
    "FixtureFilter",
    "FixtureRepository",
    "LeagueRepository",
    "OddsSnapshotRepository",
    "StandingRepository",
    "TeamRepository",
    "AlertRepository",
    "FavoriteRepository",
    "NoteRepository",
    "SavedScreenRepository",
    "SelectionRepository",
    "UserRepository",
]
