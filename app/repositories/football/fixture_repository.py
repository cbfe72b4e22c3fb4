"""
Fixture Repository for football match data access.

Usage:
    repo = FixtureRepository(db)
    fixtures = repo.find_filtered(FixtureFilter(league_ids=[39], upcoming=True))
    today = repo.find_today()
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import and_, or_

from app.models import Fixture, Season, utcnow
from app.repositories.base import BaseRepository
from app.utils.fixture_status import (
    COMPLETED_STATUSES, FINISHED_STATUSES, LIVE_STATUSES, UPCOMING_STATUSES,
)


@dataclass
class FixtureFilter:
    """
    Optional fixture criteria; unset fields are ignored.

    ``status`` is overridden by the live/upcoming/finished flags, and when
    several flags are set the last one applied (finished) wins.
    """
    league_ids: Optional[List[int]] = None
    season_ids: Optional[List[int]] = None
    team_ids: Optional[List[int]] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    status: Optional[List[str]] = None
    live: bool = False
    upcoming: bool = False
    finished: bool = False

    def statuses(self) -> Optional[List[str]]:
        statuses = self.status or None
        if self.live:
            statuses = list(LIVE_STATUSES)
        if self.upcoming:
            statuses = list(UPCOMING_STATUSES)
        if self.finished:
            statuses = list(FINISHED_STATUSES)
        return statuses


class FixtureRepository(BaseRepository[Fixture]):
    """Repository for fixture data access."""

    def __init__(self, db):
        super().__init__(Fixture, db)

    def _in_leagues(self, query, league_ids: Optional[List[int]]):
        if league_ids:
            query = query.join(Season, Fixture.season_id == Season.id).filter(
                Season.league_id.in_(league_ids)
            )
        return query

    def find_filtered(
        self,
        fixture_filter: Optional[FixtureFilter] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Fixture]:
        """
        Find fixtures matching a filter, earliest first.

        Args:
            fixture_filter: Criteria; None returns every fixture
            limit: Page size
            offset: Rows to skip
        """
        query = self.query()
        f = fixture_filter or FixtureFilter()

        query = self._in_leagues(query, f.league_ids)

        if f.season_ids:
            query = query.filter(Fixture.season_id.in_(f.season_ids))

        if f.team_ids:
            query = query.filter(or_(
                Fixture.home_team_id.in_(f.team_ids),
                Fixture.away_team_id.in_(f.team_ids),
            ))

        if f.date_from:
            query = query.filter(Fixture.date >= f.date_from)
        if f.date_to:
            query = query.filter(Fixture.date <= f.date_to)

        statuses = f.statuses()
        if statuses:
            query = query.filter(Fixture.status_short.in_(statuses))

        return query.order_by(Fixture.date.asc()).offset(offset).limit(limit).all()

    def find_today(self, league_ids: Optional[List[int]] = None) -> List[Fixture]:
        """Fixtures from today's midnight (UTC) up to tomorrow's."""
        today = utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
        tomorrow = today + timedelta(days=1)

        query = self.query().filter(Fixture.date >= today, Fixture.date < tomorrow)
        query = self._in_leagues(query, league_ids)
        return query.order_by(Fixture.date.asc()).all()

    def find_live(self) -> List[Fixture]:
        return self.where(Fixture.status_short.in_(LIVE_STATUSES), order_by="date")

    def find_live_latest_first(self) -> List[Fixture]:
        return self.where(Fixture.status_short.in_(LIVE_STATUSES), order_by="-timestamp")

    def find_upcoming(self, hours: int = 24, league_ids: Optional[List[int]] = None) -> List[Fixture]:
        """Not-started fixtures kicking off within the next ``hours``."""
        now = utcnow()
        query = self.query().filter(
            Fixture.date >= now,
            Fixture.date <= now + timedelta(hours=hours),
            Fixture.status_short.in_(UPCOMING_STATUSES),
        )
        query = self._in_leagues(query, league_ids)
        return query.order_by(Fixture.date.asc()).all()

    def find_head_to_head(self, team1_id: int, team2_id: int, limit: int = 10) -> List[Fixture]:
        """Completed meetings of two teams in either venue, most recent first."""
        return (
            self.query()
            .filter(
                or_(
                    and_(Fixture.home_team_id == team1_id, Fixture.away_team_id == team2_id),
                    and_(Fixture.home_team_id == team2_id, Fixture.away_team_id == team1_id),
                ),
                Fixture.status_short.in_(COMPLETED_STATUSES),
            )
            .order_by(Fixture.date.desc())
            .limit(limit)
            .all()
        )

    def find_team_recent(self, team_id: int, last: int = 5) -> List[Fixture]:
        """A team's last completed fixtures, for form display."""
        return (
            self.query()
            .filter(
                or_(Fixture.home_team_id == team_id, Fixture.away_team_id == team_id),
                Fixture.status_short.in_(COMPLETED_STATUSES),
            )
            .order_by(Fixture.date.desc())
            .limit(last)
            .all()
        )
