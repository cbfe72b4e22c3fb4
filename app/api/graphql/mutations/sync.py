"""
Sync and odds-recording mutations.

Every failure is reported in the result payload rather than as a GraphQL
error; the orchestrator has already recorded it on the sync metadata row.
"""
import logging
from typing import Optional

import strawberry
from strawberry.types import Info

from app.api.graphql.types import OddsSyncResult, SyncResult
from app.services.sync.odds_recorder import OddsSnapshotRecorder
from app.services.sync.orchestrator import SyncOrchestrator

logger = logging.getLogger(__name__)


def _orchestrator(info: Info) -> SyncOrchestrator:
    return SyncOrchestrator(
        info.context.db,
        info.context.football_service,
        info.context.odds_service,
    )


def _failed(action: str, error: Exception) -> SyncResult:
    logger.error(f"Error syncing {action}: {error}")
    return SyncResult(success=False, message=str(error), count=None)


@strawberry.type
class SyncMutation:

    @strawberry.mutation
    async def sync_leagues(self, info: Info, country_code: Optional[str] = None) -> SyncResult:
        try:
            return SyncResult(**await _orchestrator(info).sync_leagues(country_code))
        except Exception as e:
            return _failed("leagues", e)

    @strawberry.mutation
    async def sync_teams(self, info: Info, league_id: int, season: int) -> SyncResult:
        try:
            return SyncResult(**await _orchestrator(info).sync_teams(league_id, season))
        except Exception as e:
            return _failed("teams", e)

    @strawberry.mutation
    async def sync_fixtures(self, info: Info, league_id: int, season: int) -> SyncResult:
        try:
            return SyncResult(**await _orchestrator(info).sync_fixtures(league_id, season))
        except Exception as e:
            return _failed("fixtures", e)

    @strawberry.mutation
    async def sync_standings(self, info: Info, league_id: int, season: int) -> SyncResult:
        try:
            return SyncResult(**await _orchestrator(info).sync_standings(league_id, season))
        except Exception as e:
            return _failed("standings", e)

    @strawberry.mutation
    async def sync_odds(self, info: Info, league_id: int, mark_as_opening: bool = False) -> OddsSyncResult:
        """Record a snapshot of current prices for the league's upcoming fixtures."""
        try:
            return OddsSyncResult(**await _orchestrator(info).sync_odds(league_id, mark_as_opening))
        except Exception as e:
            logger.error(f"Error syncing odds for league {league_id}: {e}")
            return OddsSyncResult(success=False, message=str(e))

    @strawberry.mutation
    def mark_closing_odds(self, info: Info, fixture_id: int) -> OddsSyncResult:
        """
        Flag the latest snapshot per bookmaker and market as the closing line.

        Shares the syncOdds payload; the snapshot and event counts stay null.
        """
        try:
            count = OddsSnapshotRecorder(info.context.db).mark_closing(fixture_id)
        except Exception as e:
            info.context.db.rollback()
            logger.error(f"Error marking closing odds for fixture {fixture_id}: {e}")
            return OddsSyncResult(success=False, message=str(e))
        return OddsSyncResult(success=True, message=f"Marked {count} odds as closing")
