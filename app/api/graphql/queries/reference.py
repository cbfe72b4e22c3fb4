"""Queries over synced countries, leagues, teams and standings."""
from typing import List, Optional

import strawberry
from strawberry.types import Info

from app.api.graphql.context import content_user_id
from app.api.graphql.types import Country, League, Standing, Team
from app.models import Country as CountryRow
from app.models import League as LeagueRow
from app.models import Team as TeamRow
from app.repositories import (
    CountryRepository, LeagueRepository, StandingRepository, TeamRepository,
)


@strawberry.type
class ReferenceQuery:

    @strawberry.field
    def countries(self, info: Info, search: Optional[str] = None) -> List[Country]:
        return CountryRepository(info.context.db).search(search)

    @strawberry.field
    def country(self, info: Info, id: int) -> Optional[Country]:
        return info.context.db.get(CountryRow, id)

    @strawberry.field
    def leagues(
        self,
        info: Info,
        country_id: Optional[int] = None,
        search: Optional[str] = None,
        type: Optional[str] = None,
        favorite_only: Optional[bool] = None,
    ) -> List[League]:
        favorite_of = content_user_id(info) if favorite_only else None
        return LeagueRepository(info.context.db).search(
            country_id=country_id,
            search=search,
            league_type=type,
            favorite_of=favorite_of,
        )

    @strawberry.field
    def league(self, info: Info, id: int) -> Optional[League]:
        return info.context.db.get(LeagueRow, id)

    @strawberry.field
    def top_leagues(self, info: Info) -> List[League]:
        return LeagueRepository(info.context.db).find_top()

    @strawberry.field
    def teams(
        self,
        info: Info,
        league_id: Optional[int] = None,
        country_id: Optional[int] = None,
        search: Optional[str] = None,
        favorite_only: Optional[bool] = None,
        limit: Optional[int] = None,
    ) -> List[Team]:
        favorite_of = content_user_id(info) if favorite_only else None
        return TeamRepository(info.context.db).search(
            league_id=league_id,
            country_id=country_id,
            search=search,
            favorite_of=favorite_of,
            limit=limit,
        )

    @strawberry.field
    def team(self, info: Info, id: int) -> Optional[Team]:
        return info.context.db.get(TeamRow, id)

    @strawberry.field
    def standings(
        self,
        info: Info,
        season_id: Optional[int] = None,
        league_id: Optional[int] = None,
        group: Optional[str] = None,
    ) -> List[Standing]:
        """League table. Given only a league, the latest season with standings is used."""
        return StandingRepository(info.context.db).find_table(
            season_id=season_id, league_id=league_id, group=group
        )

    @strawberry.field
    def team_standings(self, info: Info, season_id: int, team_id: int) -> Optional[Standing]:
        return StandingRepository(info.context.db).find_team_entry(season_id, team_id)
