"""
Per-match detail read live from API-Football.

Upstream failures are logged and degrade to empty results so a match page
still renders.
"""
import logging
from typing import List, Optional

import strawberry
from strawberry.scalars import JSON
from strawberry.types import Info

from app.api.graphql.types import H2HResult, MatchEvent, TeamLineup, TeamPlayerStats

logger = logging.getLogger(__name__)


@strawberry.type
class MatchDetailsQuery:

    @strawberry.field
    async def fixture_lineups(self, info: Info, fixture_id: int) -> List[TeamLineup]:
        try:
            lineups = await info.context.football_service.get_fixture_lineups(fixture_id)
        except Exception as e:
            logger.error(f"Error fetching lineups for fixture {fixture_id}: {e}")
            return []
        return [TeamLineup.from_api(item) for item in lineups]

    @strawberry.field
    async def fixture_events(self, info: Info, fixture_id: int) -> List[MatchEvent]:
        try:
            events = await info.context.football_service.get_fixture_events(fixture_id)
        except Exception as e:
            logger.error(f"Error fetching events for fixture {fixture_id}: {e}")
            return []
        return [MatchEvent.from_api(item) for item in events]

    @strawberry.field
    async def h2h_from_api(self, info: Info, team1_id: int, team2_id: int, limit: int = 10) -> H2HResult:
        try:
            meetings = await info.context.football_service.get_head_to_head(team1_id, team2_id, last=limit)
        except Exception as e:
            logger.error(f"Error fetching head-to-head {team1_id} vs {team2_id}: {e}")
            return H2HResult.empty()
        return H2HResult.from_api(meetings, team1_id)

    @strawberry.field
    async def fixture_player_stats(self, info: Info, fixture_id: int) -> List[TeamPlayerStats]:
        try:
            teams = await info.context.football_service.get_fixture_players(fixture_id)
        except Exception as e:
            logger.error(f"Error fetching player stats for fixture {fixture_id}: {e}")
            return []
        return [TeamPlayerStats.from_api(item) for item in teams]

    @strawberry.field
    async def fixture_stats(self, info: Info, fixture_id: int) -> Optional[JSON]:
        """Raw per-team statistics (possession, shots, ...) as returned upstream."""
        try:
            return await info.context.football_service.get_fixture_statistics(fixture_id)
        except Exception as e:
            logger.error(f"Error fetching statistics for fixture {fixture_id}: {e}")
            return None
