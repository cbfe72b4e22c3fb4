"""Strawberry types shared by queries and mutations."""
from app.api.graphql.types.auth import AuthResponse, AuthUser
from app.api.graphql.types.match_details import (
    H2HMatch, H2HResult, H2HSummary, MatchEvent, TeamLineup, TeamPlayerStats,
)
from app.api.graphql.types.odds import (
    ConsensusOdds, LiveOdds, OddsMovement, OddsSnapshot, OddsSyncResult,
)
from app.api.graphql.types.reference import (
    Country, Fixture, FixtureFilterInput, League, LiveFixture, LiveLeague, LiveTeam,
    Season, Standing, Team,
)
from app.api.graphql.types.sync import SyncResult, SyncStatus
from app.api.graphql.types.user_content import (
    Alert, AlertConfigInput, MatchNote, NoteInput, SavedScreen, ScreenFiltersInput,
    SelectionResultInput, SelectionStats, UserSelection, input_to_json,
)

__all__ = [
    "AuthResponse", "AuthUser",
    "H2HMatch", "H2HResult", "H2HSummary", "MatchEvent", "TeamLineup", "TeamPlayerStats",
    "ConsensusOdds", "LiveOdds", "OddsMovement", "OddsSnapshot", "OddsSyncResult",
    "Country", "Fixture", "FixtureFilterInput", "League", "LiveFixture", "LiveLeague", "LiveTeam",
    "Season", "Standing", "Team",
    "SyncResult", "SyncStatus",
    "Alert", "AlertConfigInput", "MatchNote", "NoteInput", "SavedScreen", "ScreenFiltersInput",
    "SelectionResultInput", "SelectionStats", "UserSelection", "input_to_json",
]
