"""
Football Repository module.

Repositories for synced reference data, fixtures and odds snapshots.
"""

from app.repositories.football.fixture_repository import FixtureFilter, FixtureRepository
from app.repositories.football.odds_repository import OddsSnapshotRepository
from app.repositories.football.reference_repository import (
    TOP_LEAGUE_IDS,
    CountryRepository,
    LeagueRepository,
    StandingRepository,
    TeamRepository,
)

__all__ = [
    "FixtureFilter",
    "FixtureRepository",
    "OddsSnapshotRepository",
    "TOP_LEAGUE_IDS",
    "CountryRepository",
    "LeagueRepository",
    "StandingRepository",
    "TeamRepository",
]
