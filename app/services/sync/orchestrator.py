"""Sync orchestrator for mirroring API-Football reference data and odds.

This orchestrator coordinates:
- League, season and country upserts from /leagues
- Team upserts (and team-league links) from /teams
- Fixture upserts from /fixtures
- Standings upserts from /standings, keyed by (season, team)
- Odds snapshots for upcoming fixtures via OddsSnapshotRecorder
- Sync metadata tracking

Upserts are issued one record at a time and committed as they go. A failure
partway through leaves the earlier records committed; re-running a sync is
safe because every record is keyed by its upstream ID.

Order matters: seasons come from the league sync, so leagues must be synced
before fixtures or standings for a league and year.
"""
import logging
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.metrics import sync_records_processed_total, sync_runs_total
from app.models import (
    Country, Fixture, League, Season, Standing, SyncMetadata, Team, utcnow,
)
from app.services.core.football_api_service import FootballApiService, country_id_for
from app.services.core.odds_api_service import OddsApiService
from app.services.sync.odds_recorder import OddsSnapshotRecorder
from app.utils.fixture_status import UPCOMING_STATUSES
from app.utils.timezone import parse_iso_utc

logger = logging.getLogger(__name__)

SOURCE_FOOTBALL = "api_football"
SOURCE_ODDS = "odds_api"


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(value[:10])


def _record_split(entry: Dict, key: str) -> Dict:
    split = entry.get(key) or {}
    goals = split.get("goals") or {}
    return {
        "played": split.get("played") or 0,
        "win": split.get("win") or 0,
        "draw": split.get("draw") or 0,
        "lose": split.get("lose") or 0,
        "goals_for": goals.get("for") or 0,
        "goals_against": goals.get("against") or 0,
    }


class SyncOrchestrator:
    """
    Coordinates sync jobs against API-Football and The Odds API.

    Every sync method returns ``{success, message, count}``. Upstream and
    storage errors are recorded on the sync metadata row and re-raised so
    the caller decides how to report them.
    """

    def __init__(
        self,
        db: Session,
        football_service: FootballApiService,
        odds_service: Optional[OddsApiService] = None,
    ):
        self.db = db
        self.football_service = football_service
        self.odds_service = odds_service

    # Reference data

    async def sync_leagues(self, country_code: Optional[str] = None) -> Dict:
        """Upsert leagues with their countries and seasons."""
        metadata = self._start("leagues")
        try:
            leagues = await self.football_service.get_leagues(country_code)

            for league in leagues:
                self._upsert_country(league["country"])
                self._upsert_league(league)
                for season in league["seasons"]:
                    self._upsert_season(league["id"], season)
                self.db.commit()

            return self._finish(metadata, "leagues", len(leagues), f"Synced {len(leagues)} leagues")
        except Exception as e:
            self._fail("leagues", e)
            raise

    async def sync_teams(self, league_id: int, season: int) -> Dict:
        """Upsert a league's teams for a season and link them to the league."""
        metadata = self._start("teams")
        try:
            teams = await self.football_service.get_teams(league_id, season)
            league = self.db.get(League, league_id)

            for payload in teams:
                team = self._upsert_team(payload)
                if league is not None and league not in team.leagues:
                    team.leagues.append(league)
                self.db.commit()

            return self._finish(metadata, "teams", len(teams), f"Synced {len(teams)} teams")
        except Exception as e:
            self._fail("teams", e)
            raise

    async def sync_fixtures(self, league_id: int, season: int) -> Dict:
        """Upsert all fixtures of a league season. The season must already exist."""
        season_record = self._find_season(league_id, season)
        if season_record is None:
            return {"success": False, "message": "Season not found", "count": None}

        metadata = self._start("fixtures")
        try:
            fixtures = await self.football_service.get_fixtures(league_id, season)

            for payload in fixtures:
                self._upsert_fixture(payload, season_record.id)
                self.db.commit()

            return self._finish(metadata, "fixtures", len(fixtures), f"Synced {len(fixtures)} fixtures")
        except Exception as e:
            self._fail("fixtures", e)
            raise

    async def sync_standings(self, league_id: int, season: int) -> Dict:
        """Upsert every standings entry across all groups of a league season."""
        season_record = self._find_season(league_id, season)
        if season_record is None:
            return {"success": False, "message": "Season not found", "count": None}

        metadata = self._start("standings")
        try:
            groups = await self.football_service.get_standings(league_id, season)

            count = 0
            for group in groups:
                for entry in group:
                    self._upsert_standing(entry, season_record.id)
                    self.db.commit()
                    count += 1

            return self._finish(metadata, "standings", count, f"Synced {count} standings entries")
        except Exception as e:
            self._fail("standings", e)
            raise

    # Odds

    async def sync_odds(self, league_id: int, mark_as_opening: bool = False) -> Dict:
        """
        Record odds snapshots for the league's upcoming fixtures.

        Fetches h2h and totals prices, matches events to NS/TBD fixtures by
        team name, and writes one snapshot per bookmaker and market plus the
        consensus rows.

        Returns:
            Dict with success, message, snapshots_created and events_matched
        """
        if self.odds_service is None:
            raise RuntimeError("SyncOrchestrator was created without an odds service")

        metadata = self._start("odds", source=SOURCE_ODDS)
        try:
            events = await self.odds_service.get_odds(league_id, markets=["h2h", "totals"])

            if not events:
                self._finish(metadata, "odds", 0, "No odds data available for this league", source=SOURCE_ODDS)
                return {
                    "success": True,
                    "message": "No odds data available for this league",
                    "snapshots_created": 0,
                    "events_matched": 0,
                }

            fixtures = self.upcoming_league_fixtures(league_id)
            recorder = OddsSnapshotRecorder(self.db)
            result = recorder.record_snapshots(fixtures, events, is_opening=mark_as_opening)

            message = f"Synced odds for {result['events_matched']} events"
            self._finish(metadata, "odds", result["snapshots_created"], message, source=SOURCE_ODDS)
            return {"success": True, "message": message, **result}
        except Exception as e:
            self._fail("odds", e, source=SOURCE_ODDS)
            raise

    def upcoming_league_fixtures(self, league_id: int) -> List[Fixture]:
        return (
            self.db.query(Fixture)
            .join(Season, Fixture.season_id == Season.id)
            .filter(
                Season.league_id == league_id,
                Fixture.status_short.in_(UPCOMING_STATUSES),
            )
            .all()
        )

    # Status

    def get_sync_status(self) -> List[SyncMetadata]:
        return (
            self.db.query(SyncMetadata)
            .order_by(SyncMetadata.source, SyncMetadata.data_type)
            .all()
        )

    # Upserts

    def _upsert_country(self, payload: Dict) -> Country:
        country = self.db.get(Country, payload["id"])
        if country is None:
            country = Country(id=payload["id"])
            self.db.add(country)
        country.name = payload["name"]
        country.code = payload.get("code")
        country.flag = payload.get("flag")
        return country

    def _ensure_country(self, name: str) -> int:
        """ID of the named country, creating a bare row when it is unknown."""
        country_id = country_id_for(name)
        if self.db.get(Country, country_id) is None:
            self.db.add(Country(id=country_id, name=name))
            self.db.flush()
        return country_id

    def _upsert_league(self, payload: Dict) -> League:
        league = self.db.get(League, payload["id"])
        if league is None:
            league = League(id=payload["id"], country_id=payload["country"]["id"])
            self.db.add(league)
        league.name = payload["name"]
        league.type = payload["type"]
        league.logo = payload.get("logo")
        return league

    def _upsert_season(self, league_id: int, payload: Dict) -> Season:
        season = self.db.get(Season, payload["id"])
        if season is None:
            season = Season(id=payload["id"], league_id=league_id)
            self.db.add(season)
        season.year = payload["year"]
        season.start_date = _parse_date(payload.get("start"))
        season.end_date = _parse_date(payload.get("end"))
        season.current = payload["current"]
        return season

    def _upsert_team(self, payload: Dict) -> Team:
        team = self.db.get(Team, payload["id"])
        country_name = payload["country"].get("name")
        # Placeholder teams from fixture or standings syncs arrive without a country
        if (team is None or team.country_id is None) and country_name:
            country_id = self._ensure_country(country_name)
        else:
            country_id = None
        if team is None:
            team = Team(id=payload["id"])
            self.db.add(team)
        if country_id is not None:
            team.country_id = country_id
        team.name = payload["name"]
        team.code = payload.get("code")
        team.logo = payload.get("logo")
        team.venue = payload["venue"].get("name")
        team.venue_capacity = payload["venue"].get("capacity")
        return team

    def _ensure_team(self, payload: Dict) -> None:
        """Fixtures and standings can reference teams that were never synced."""
        if self.db.get(Team, payload["id"]) is None:
            self.db.add(Team(id=payload["id"], name=payload.get("name") or "", logo=payload.get("logo")))
            self.db.flush()

    def _upsert_fixture(self, payload: Dict, season_id: int) -> Fixture:
        status = payload["status"]
        fixture = self.db.get(Fixture, payload["id"])
        if fixture is None:
            self._ensure_team(payload["home_team"])
            self._ensure_team(payload["away_team"])
            fixture = Fixture(
                id=payload["id"],
                timestamp=payload["timestamp"],
                timezone=payload["timezone"],
                round=payload.get("round"),
                season_id=season_id,
                home_team_id=payload["home_team"]["id"],
                away_team_id=payload["away_team"]["id"],
            )
            self.db.add(fixture)

        fixture.date = parse_iso_utc(payload["date"])
        fixture.status = status.get("long") or ""
        fixture.status_short = status.get("short") or ""
        fixture.elapsed = status.get("elapsed")
        fixture.venue = payload["venue"].get("name")
        fixture.referee = payload.get("referee")
        fixture.goals_home = payload["goals"].get("home")
        fixture.goals_away = payload["goals"].get("away")
        return fixture

    def _upsert_standing(self, entry: Dict, season_id: int) -> Standing:
        team_id = entry["team"]["id"]
        standing = self.db.query(Standing).filter(
            Standing.season_id == season_id,
            Standing.team_id == team_id,
        ).first()

        if standing is None:
            self._ensure_team(entry["team"])
            standing = Standing(season_id=season_id, team_id=team_id, group=entry.get("group"))
            self.db.add(standing)

        standing.rank = entry["rank"]
        standing.points = entry.get("points") or 0
        standing.goals_diff = entry.get("goalsDiff") or 0
        standing.form = entry.get("form")
        standing.status = entry.get("status")
        standing.description = entry.get("description")

        for prefix, key in (("", "all"), ("home_", "home"), ("away_", "away")):
            for field, value in _record_split(entry, key).items():
                setattr(standing, f"{prefix}{field}", value)
        return standing

    def _find_season(self, league_id: int, year: int) -> Optional[Season]:
        return self.db.query(Season).filter(
            Season.league_id == league_id,
            Season.year == year,
        ).first()

    # Metadata

    def _start(self, data_type: str, source: str = SOURCE_FOOTBALL) -> SyncMetadata:
        logger.info(f"Starting {data_type} sync ({source})")
        metadata = self._get_or_create_metadata(source, data_type)
        metadata.last_sync_started_at = utcnow()
        metadata.last_sync_status = "running"
        metadata.error_message = None
        self.db.commit()
        return metadata

    def _finish(
        self,
        metadata: SyncMetadata,
        data_type: str,
        count: int,
        message: str,
        source: str = SOURCE_FOOTBALL,
    ) -> Dict:
        completed = utcnow()
        duration_ms = int((completed - metadata.last_sync_started_at).total_seconds() * 1000)

        metadata.last_sync_completed_at = completed
        metadata.last_sync_status = "success"
        metadata.records_processed = count
        metadata.sync_duration_ms = duration_ms
        self.db.commit()

        sync_runs_total.labels(data_type=data_type, status="success").inc()
        sync_records_processed_total.labels(data_type=data_type).inc(count)
        logger.info(f"{data_type} sync complete ({source}): {count} records ({duration_ms}ms)")

        return {"success": True, "message": message, "count": count}

    def _fail(self, data_type: str, error: Exception, source: str = SOURCE_FOOTBALL) -> None:
        logger.error(f"{data_type} sync failed: {error}")
        self.db.rollback()

        metadata = self._get_or_create_metadata(source, data_type)
        metadata.last_sync_status = "failed"
        metadata.error_message = str(error)
        if metadata.last_sync_started_at is not None:
            metadata.sync_duration_ms = int(
                (utcnow() - metadata.last_sync_started_at).total_seconds() * 1000
            )
        self.db.commit()
        sync_runs_total.labels(data_type=data_type, status="failed").inc()

    def _get_or_create_metadata(self, source: str, data_type: str) -> SyncMetadata:
        """Get or create sync metadata entry."""
        metadata = self.db.query(SyncMetadata).filter(
            SyncMetadata.source == source,
            SyncMetadata.data_type == data_type
        ).first()

        if not metadata:
            metadata = SyncMetadata(source=source, data_type=data_type)
            self.db.add(metadata)
            self.db.flush()

        return metadata
