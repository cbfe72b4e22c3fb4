"""Fixture queries: stored fixtures plus the live feed from API-Football."""
import logging
from typing import Dict, List, Optional

import strawberry
from strawberry.types import Info

from app.api.graphql.types import Fixture, FixtureFilterInput, LiveFixture, LiveLeague, LiveTeam
from app.models import Fixture as FixtureRow
from app.repositories import FixtureFilter, FixtureRepository
from app.utils.timezone import isoformat_utc, to_naive_utc

logger = logging.getLogger(__name__)

# Fallback when a stored league has no country row loaded
DEFAULT_COUNTRY = "England"


def _to_filter(value: Optional[FixtureFilterInput]) -> FixtureFilter:
    if value is None:
        return FixtureFilter()
    return FixtureFilter(
        league_ids=value.league_ids,
        season_ids=value.season_ids,
        team_ids=value.team_ids,
        date_from=to_naive_utc(value.date_from),
        date_to=to_naive_utc(value.date_to),
        status=value.status,
        live=bool(value.live),
        upcoming=bool(value.upcoming),
        finished=bool(value.finished),
    )


def _live_team(team: Dict) -> LiveTeam:
    return LiveTeam(id=team["id"], name=team["name"], logo=team.get("logo") or None)


def live_fixture_from_api(item: Dict) -> LiveFixture:
    """Build a LiveFixture from a mapped API-Football fixture."""
    league = item.get("league", {})
    return LiveFixture(
        id=item["id"],
        date=item["date"],
        timestamp=item["timestamp"],
        status=item["status"]["long"],
        status_short=item["status"]["short"],
        elapsed=item["status"].get("elapsed"),
        round=item.get("round"),
        home_team=_live_team(item["home_team"]),
        away_team=_live_team(item["away_team"]),
        goals_home=item["goals"].get("home"),
        goals_away=item["goals"].get("away"),
        league=LiveLeague(
            id=league.get("id"),
            name=league.get("name"),
            logo=league.get("logo"),
            country=league.get("country") or DEFAULT_COUNTRY,
        ),
    )


def live_fixture_from_row(fixture: FixtureRow) -> LiveFixture:
    league = fixture.season.league
    return LiveFixture(
        id=fixture.id,
        date=isoformat_utc(fixture.date),
        timestamp=fixture.timestamp,
        status=fixture.status,
        status_short=fixture.status_short,
        elapsed=fixture.elapsed,
        round=fixture.round,
        home_team=LiveTeam(id=fixture.home_team.id, name=fixture.home_team.name, logo=fixture.home_team.logo),
        away_team=LiveTeam(id=fixture.away_team.id, name=fixture.away_team.name, logo=fixture.away_team.logo),
        goals_home=fixture.goals_home,
        goals_away=fixture.goals_away,
        league=LiveLeague(
            id=league.id,
            name=league.name,
            logo=league.logo,
            country=league.country.name if league.country else DEFAULT_COUNTRY,
        ),
    )


@strawberry.type
class FixtureQuery:

    @strawberry.field
    def fixtures(
        self,
        info: Info,
        filter: Optional[FixtureFilterInput] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Fixture]:
        return FixtureRepository(info.context.db).find_filtered(_to_filter(filter), limit=limit, offset=offset)

    @strawberry.field
    def fixture(self, info: Info, id: int) -> Optional[Fixture]:
        return info.context.db.get(FixtureRow, id)

    @strawberry.field
    def today_fixtures(self, info: Info, league_ids: Optional[List[int]] = None) -> List[Fixture]:
        return FixtureRepository(info.context.db).find_today(league_ids)

    @strawberry.field
    def live_fixtures(self, info: Info) -> List[Fixture]:
        return FixtureRepository(info.context.db).find_live()

    @strawberry.field
    def upcoming_fixtures(
        self,
        info: Info,
        hours: int = 24,
        league_ids: Optional[List[int]] = None,
    ) -> List[Fixture]:
        return FixtureRepository(info.context.db).find_upcoming(hours, league_ids)

    @strawberry.field
    def head_to_head(self, info: Info, team1_id: int, team2_id: int, limit: int = 10) -> List[Fixture]:
        return FixtureRepository(info.context.db).find_head_to_head(team1_id, team2_id, limit)

    @strawberry.field
    def team_fixtures(self, info: Info, team_id: int, last: int = 5) -> List[Fixture]:
        return FixtureRepository(info.context.db).find_team_recent(team_id, last)

    @strawberry.field
    async def live_fixtures_from_api(self, info: Info) -> List[LiveFixture]:
        """
        Fixtures in play right now.

        Reads API-Football first. When the feed fails or returns nothing,
        falls back to stored fixtures with a live status, latest kick-off first.
        """
        try:
            fixtures = await info.context.football_service.get_live_fixtures()
            if fixtures:
                return [live_fixture_from_api(item) for item in fixtures]
        except Exception as e:
            logger.error(f"Error fetching live fixtures from API: {e}")

        rows = FixtureRepository(info.context.db).find_live_latest_first()
        logger.info(f"Falling back to {len(rows)} stored live fixtures")
        return [live_fixture_from_row(row) for row in rows]
