"""Odds queries: live prices from The Odds API and the stored snapshot series."""
import logging
from typing import List, Optional

import strawberry
from strawberry.types import Info

from app.api.graphql.types import LiveOdds, OddsMovement, OddsSnapshot
from app.core.exceptions import UnmappedLeagueError
from app.models import Fixture as FixtureRow
from app.repositories import OddsSnapshotRepository
from app.services.sync.matchers.fixture_matcher import FixtureMatcher

logger = logging.getLogger(__name__)

LIVE_ODDS_MARKETS = ["h2h", "totals"]
FIXTURE_ODDS_MARKETS = ["h2h", "totals", "spreads"]


@strawberry.type
class OddsQuery:

    @strawberry.field
    async def live_odds(self, info: Info, league_id: int) -> List[LiveOdds]:
        """Current prices for every upcoming event of a league."""
        try:
            events = await info.context.odds_service.get_odds(league_id, markets=LIVE_ODDS_MARKETS)
        except UnmappedLeagueError:
            raise
        except Exception as e:
            logger.error(f"Error fetching live odds for league {league_id}: {e}")
            return []
        return [LiveOdds.from_event(event) for event in events]

    @strawberry.field
    async def fixture_odds(self, info: Info, fixture_id: int) -> Optional[LiveOdds]:
        """Live prices for one stored fixture, found by team-name matching."""
        fixture = info.context.db.get(FixtureRow, fixture_id)
        if fixture is None:
            return None

        league_id = fixture.season.league_id
        try:
            events = await info.context.odds_service.get_odds(league_id, markets=FIXTURE_ODDS_MARKETS)
        except UnmappedLeagueError:
            raise
        except Exception as e:
            logger.error(f"Error fetching odds for fixture {fixture_id}: {e}")
            return None

        event = FixtureMatcher().find_event(fixture, events)
        if event is None:
            logger.info(f"No odds event matches fixture {fixture_id}")
            return None
        return LiveOdds.from_event(event)

    @strawberry.field
    def odds_history(self, info: Info, fixture_id: int, market: Optional[str] = None) -> List[OddsSnapshot]:
        return OddsSnapshotRepository(info.context.db).find_history(fixture_id, market)

    @strawberry.field
    def odds_movement(
        self,
        info: Info,
        fixture_id: int,
        market: str,
        bookmaker: str = "consensus",
    ) -> Optional[OddsMovement]:
        """Opening against latest stored price; null without snapshots."""
        opening, current = OddsSnapshotRepository(info.context.db).find_opening_and_current(
            fixture_id, market, bookmaker
        )
        if opening is None:
            return None
        return OddsMovement.between(market, opening, current)
