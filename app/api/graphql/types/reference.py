"""
GraphQL types for synced reference data.

Resolvers return ORM rows and strawberry reads the attributes by name, so
each field here mirrors a column or relationship on the model. Computed
fields receive the row as ``self``.
"""
from datetime import date, datetime
from typing import TYPE_CHECKING, Annotated, List, Optional

import strawberry
from strawberry.types import Info

from app.core.config import settings
from app.repositories.user import FavoriteRepository, NoteRepository
from app.utils import fixture_status

if TYPE_CHECKING:
    from app.api.graphql.types.user_content import MatchNote


@strawberry.type
class Country:
    id: int
    name: str
    code: Optional[str]
    flag: Optional[str]
    leagues: List["League"]


@strawberry.type
class League:
    id: int
    name: str
    type: str
    logo: Optional[str]
    country_id: int
    country: Country
    seasons: List["Season"]
    teams: List["Team"]

    @strawberry.field
    def is_favorite(self, info: Info) -> bool:
        if not info.context.user_id:
            return False
        return FavoriteRepository(info.context.db).is_league_favorite(info.context.user_id, self.id)


@strawberry.type
class Season:
    id: int
    year: int
    start_date: Optional[date]
    end_date: Optional[date]
    current: bool
    league_id: int
    league: League
    fixtures: List["Fixture"]


@strawberry.type
class Team:
    id: int
    name: str
    code: Optional[str]
    logo: Optional[str]
    venue: Optional[str]
    venue_capacity: Optional[int]
    country_id: Optional[int]
    country: Optional[Country]
    leagues: List[League]
    home_fixtures: List["Fixture"]
    away_fixtures: List["Fixture"]

    @strawberry.field
    def is_favorite(self, info: Info) -> bool:
        if not info.context.user_id:
            return False
        return FavoriteRepository(info.context.db).is_team_favorite(info.context.user_id, self.id)


@strawberry.type
class Fixture:
    id: int
    date: datetime
    timestamp: int
    timezone: str
    status: str
    status_short: str
    elapsed: Optional[int]
    round: Optional[str]
    venue: Optional[str]
    referee: Optional[str]
    season_id: int
    home_team_id: int
    away_team_id: int
    goals_home: Optional[int]
    goals_away: Optional[int]
    xg_home: Optional[float]
    xg_away: Optional[float]
    season: Season
    home_team: Team
    away_team: Team

    @strawberry.field
    def notes(
        self, info: Info
    ) -> List[Annotated["MatchNote", strawberry.lazy("app.api.graphql.types.user_content")]]:
        """The requesting user's notes on this fixture."""
        user_id = info.context.user_id or settings.DEFAULT_USER_ID
        if not user_id:
            return []
        return NoteRepository(info.context.db).find_for_fixture(self.id, user_id)

    @strawberry.field
    def is_live(self) -> bool:
        return fixture_status.is_live(self.status_short)

    @strawberry.field
    def is_finished(self) -> bool:
        return fixture_status.is_finished(self.status_short)

    @strawberry.field
    def is_upcoming(self) -> bool:
        return fixture_status.is_upcoming(self.status_short)

    @strawberry.field
    def status_text(self) -> str:
        return fixture_status.status_text(self.status_short, self.elapsed)


@strawberry.type
class Standing:
    id: int
    season_id: int
    team_id: int
    rank: int
    points: int
    goals_diff: int
    group: Optional[str]
    form: Optional[str]
    status: Optional[str]
    description: Optional[str]
    played: int
    win: int
    draw: int
    lose: int
    goals_for: int
    goals_against: int
    home_played: int
    home_win: int
    home_draw: int
    home_lose: int
    home_goals_for: int
    home_goals_against: int
    away_played: int
    away_win: int
    away_draw: int
    away_lose: int
    away_goals_for: int
    away_goals_against: int
    season: Season
    team: Team


@strawberry.input
class FixtureFilterInput:
    league_ids: Optional[List[int]] = None
    season_ids: Optional[List[int]] = None
    team_ids: Optional[List[int]] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    status: Optional[List[str]] = None
    live: Optional[bool] = None
    upcoming: Optional[bool] = None
    finished: Optional[bool] = None


@strawberry.type
class LiveTeam:
    id: int
    name: str
    logo: Optional[str]


@strawberry.type
class LiveLeague:
    id: int
    name: str
    logo: Optional[str]
    country: str


@strawberry.type
class LiveFixture:
    """A live fixture straight from API-Football, or the stored fallback."""
    id: int
    date: str
    timestamp: int
    status: str
    status_short: str
    elapsed: Optional[int]
    round: Optional[str]
    home_team: LiveTeam
    away_team: LiveTeam
    goals_home: Optional[int]
    goals_away: Optional[int]
    league: LiveLeague
