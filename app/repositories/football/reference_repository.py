"""
Repositories for synced reference data: countries, leagues, teams, standings.

All list queries order by name (rank for standings). Name search is a
case-sensitive substring match, as the GraphQL ``search`` arguments expect.
"""
from typing import List, Optional

from app.models import (
    Country, FavoriteLeague, FavoriteTeam, League, Season, Standing, Team, team_leagues,
)
from app.repositories.base import BaseRepository

# Premier League, La Liga, Serie A, Bundesliga, Ligue 1
TOP_LEAGUE_IDS = [39, 140, 135, 78, 61]


class CountryRepository(BaseRepository[Country]):

    def __init__(self, db):
        super().__init__(Country, db)

    def search(self, search: Optional[str] = None) -> List[Country]:
        criterion = [Country.name.contains(search)] if search else []
        return self.where(*criterion, order_by="name")


class LeagueRepository(BaseRepository[League]):

    def __init__(self, db):
        super().__init__(League, db)

    def search(
        self,
        country_id: Optional[int] = None,
        search: Optional[str] = None,
        league_type: Optional[str] = None,
        favorite_of: Optional[int] = None,
    ) -> List[League]:
        """
        Filter leagues.

        Args:
            country_id: Only leagues of this country
            search: Substring of the league name
            league_type: "League" or "Cup"
            favorite_of: Only leagues this user has favorited
        """
        query = self.query()
        if country_id:
            query = query.filter(League.country_id == country_id)
        if search:
            query = query.filter(League.name.contains(search))
        if league_type:
            query = query.filter(League.type == league_type)
        if favorite_of is not None:
            query = query.join(FavoriteLeague, FavoriteLeague.league_id == League.id).filter(
                FavoriteLeague.user_id == favorite_of
            )
        return query.order_by(League.name.asc()).all()

    def find_top(self) -> List[League]:
        return self.where(League.id.in_(TOP_LEAGUE_IDS), order_by="name")


class TeamRepository(BaseRepository[Team]):

    def __init__(self, db):
        super().__init__(Team, db)

    def search(
        self,
        league_id: Optional[int] = None,
        country_id: Optional[int] = None,
        search: Optional[str] = None,
        favorite_of: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Team]:
        query = self.query()
        if league_id:
            query = query.join(team_leagues, team_leagues.c.team_id == Team.id).filter(
                team_leagues.c.league_id == league_id
            )
        if country_id:
            query = query.filter(Team.country_id == country_id)
        if search:
            query = query.filter(Team.name.contains(search))
        if favorite_of is not None:
            query = query.join(FavoriteTeam, FavoriteTeam.team_id == Team.id).filter(
                FavoriteTeam.user_id == favorite_of
            )
        query = query.order_by(Team.name.asc())
        if limit:
            query = query.limit(limit)
        return query.all()


class StandingRepository(BaseRepository[Standing]):

    def __init__(self, db):
        super().__init__(Standing, db)

    def resolve_season_id(self, league_id: int) -> Optional[int]:
        """
        Season to show for a league when none is given.

        The most recent season that already has standings, otherwise the
        league's current season.
        """
        latest = (
            self.db.query(Standing.season_id)
            .join(Season, Standing.season_id == Season.id)
            .filter(Season.league_id == league_id)
            .order_by(Season.year.desc())
            .first()
        )
        if latest:
            return latest[0]

        current = self.db.query(Season.id).filter(
            Season.league_id == league_id,
            Season.current.is_(True),
        ).first()
        return current[0] if current else None

    def find_table(
        self,
        season_id: Optional[int] = None,
        league_id: Optional[int] = None,
        group: Optional[str] = None,
    ) -> List[Standing]:
        if not season_id and league_id:
            season_id = self.resolve_season_id(league_id)
        if not season_id:
            return []

        criterion = [Standing.season_id == season_id]
        if group:
            criterion.append(Standing.group == group)
        return self.where(*criterion, order_by="rank")

    def find_team_entry(self, season_id: int, team_id: int) -> Optional[Standing]:
        return self.where_first(Standing.season_id == season_id, Standing.team_id == team_id)
