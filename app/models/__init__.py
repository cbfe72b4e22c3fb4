"""
Models module.

Usage:
    from app.models import Fixture, OddsSnapshot

    upcoming = db.query(Fixture).filter(Fixture.status_short.in_(["NS", "TBD"])).all()
"""
from app.models.models import (
    Base,
    team_leagues,
    utcnow,
    Country,
    League,
    Season,
    Team,
    Fixture,
    Standing,
    OddsSnapshot,
    User,
    MatchNote,
    FavoriteTeam,
    FavoriteLeague,
    SavedScreen,
    UserSelection,
    Alert,
    SyncMetadata,
)

__all__ = [
    "Base",
    "team_leagues",
    "utcnow",
    "Country",
    "League",
    "Season",
    "Team",
    "Fixture",
    "Standing",
    "OddsSnapshot",
    "User",
    "MatchNote",
    "FavoriteTeam",
    "FavoriteLeague",
    "SavedScreen",
    "UserSelection",
    "Alert",
    "SyncMetadata",
]
