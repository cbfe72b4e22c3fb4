"""
Database models for the Football Insights API.

Reference data (countries, leagues, seasons, teams, fixtures, standings) is
keyed by the upstream API-Football numeric IDs so every sync is an upsert by
primary key. Odds snapshots and user content use local autoincrement IDs.
"""
from datetime import datetime, timezone
from sqlalchemy import (
    JSON, Boolean, Column, Date, DateTime, Float, ForeignKey, Index, Integer,
    String, Table, Text, UniqueConstraint,
)
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


team_leagues = Table(
    "team_leagues",
    Base.metadata,
    Column("team_id", Integer, ForeignKey("teams.id", ondelete="CASCADE"), primary_key=True),
    Column("league_id", Integer, ForeignKey("leagues.id", ondelete="CASCADE"), primary_key=True),
)


class Country(Base):
    """Country. IDs are derived from the name; see football_api_service.country_id_for."""
    __tablename__ = "countries"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), unique=True, nullable=False, index=True)
    code = Column(String(10), nullable=True)
    flag = Column(String(255), nullable=True)

    leagues = relationship("League", back_populates="country")
    teams = relationship("Team", back_populates="country")


class League(Base):
    __tablename__ = "leagues"

    id = Column(Integer, primary_key=True, autoincrement=False)  # API-Football league ID
    name = Column(String(255), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # League, Cup
    logo = Column(String(255), nullable=True)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=False, index=True)

    country = relationship("Country", back_populates="leagues")
    seasons = relationship("Season", back_populates="league", cascade="all, delete-orphan")
    teams = relationship("Team", secondary=team_leagues, back_populates="leagues")


class Season(Base):
    """League season. ID is league_id * 10000 + year."""
    __tablename__ = "seasons"

    id = Column(Integer, primary_key=True, autoincrement=False)
    year = Column(Integer, nullable=False, index=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    current = Column(Boolean, nullable=False, default=False, index=True)
    league_id = Column(Integer, ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False, index=True)

    league = relationship("League", back_populates="seasons")
    fixtures = relationship("Fixture", back_populates="season")
    standings = relationship("Standing", back_populates="season")

    __table_args__ = (
        Index("ix_seasons_league_year", "league_id", "year"),
    )


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, autoincrement=False)  # API-Football team ID
    name = Column(String(255), nullable=False, index=True)
    code = Column(String(10), nullable=True)
    logo = Column(String(255), nullable=True)
    venue = Column(String(255), nullable=True)
    venue_capacity = Column(Integer, nullable=True)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=True, index=True)

    country = relationship("Country", back_populates="teams")
    leagues = relationship("League", secondary=team_leagues, back_populates="teams")
    home_fixtures = relationship("Fixture", foreign_keys="Fixture.home_team_id", back_populates="home_team")
    away_fixtures = relationship("Fixture", foreign_keys="Fixture.away_team_id", back_populates="away_team")


class Fixture(Base):
    """A single match. status_short drives the live/finished/upcoming buckets."""
    __tablename__ = "fixtures"

    id = Column(Integer, primary_key=True, autoincrement=False)  # API-Football fixture ID
    date = Column(DateTime, nullable=False, index=True)
    timestamp = Column(Integer, nullable=False)
    timezone = Column(String(50), nullable=False, default="UTC")
    status = Column(String(50), nullable=False)  # "Not Started", "Match Finished", ...
    status_short = Column(String(10), nullable=False, index=True)  # NS, 1H, FT, ...
    elapsed = Column(Integer, nullable=True)
    round = Column(String(100), nullable=True)
    venue = Column(String(255), nullable=True)
    referee = Column(String(255), nullable=True)
    season_id = Column(Integer, ForeignKey("seasons.id"), nullable=False, index=True)
    home_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    away_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    goals_home = Column(Integer, nullable=True)
    goals_away = Column(Integer, nullable=True)
    xg_home = Column(Float, nullable=True)
    xg_away = Column(Float, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    season = relationship("Season", back_populates="fixtures")
    home_team = relationship("Team", foreign_keys=[home_team_id], back_populates="home_fixtures")
    away_team = relationship("Team", foreign_keys=[away_team_id], back_populates="away_fixtures")
    odds_snapshots = relationship("OddsSnapshot", back_populates="fixture", cascade="all, delete-orphan")
    notes = relationship("MatchNote", back_populates="fixture", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_fixtures_season_status", "season_id", "status_short"),
    )


class Standing(Base):
    """League table row; one per (season, team)."""
    __tablename__ = "standings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    season_id = Column(Integer, ForeignKey("seasons.id", ondelete="CASCADE"), nullable=False, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    rank = Column(Integer, nullable=False)
    points = Column(Integer, nullable=False, default=0)
    goals_diff = Column(Integer, nullable=False, default=0)
    group = Column(String(100), nullable=True)
    form = Column(String(20), nullable=True)
    status = Column(String(20), nullable=True)
    description = Column(String(255), nullable=True)

    played = Column(Integer, nullable=False, default=0)
    win = Column(Integer, nullable=False, default=0)
    draw = Column(Integer, nullable=False, default=0)
    lose = Column(Integer, nullable=False, default=0)
    goals_for = Column(Integer, nullable=False, default=0)
    goals_against = Column(Integer, nullable=False, default=0)

    home_played = Column(Integer, nullable=False, default=0)
    home_win = Column(Integer, nullable=False, default=0)
    home_draw = Column(Integer, nullable=False, default=0)
    home_lose = Column(Integer, nullable=False, default=0)
    home_goals_for = Column(Integer, nullable=False, default=0)
    home_goals_against = Column(Integer, nullable=False, default=0)

    away_played = Column(Integer, nullable=False, default=0)
    away_win = Column(Integer, nullable=False, default=0)
    away_draw = Column(Integer, nullable=False, default=0)
    away_lose = Column(Integer, nullable=False, default=0)
    away_goals_for = Column(Integer, nullable=False, default=0)
    away_goals_against = Column(Integer, nullable=False, default=0)

    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    season = relationship("Season", back_populates="standings")
    team = relationship("Team")

    __table_args__ = (
        UniqueConstraint("season_id", "team_id", name="uq_standings_season_team"),
    )


class OddsSnapshot(Base):
    """
    Point-in-time bookmaker prices for one fixture and market.

    Rows are append-only apart from is_closing, which mark_closing flips.
    No uniqueness is enforced: repeated syncs append a time series.
    """
    __tablename__ = "odds_snapshots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    fixture_id = Column(Integer, ForeignKey("fixtures.id", ondelete="CASCADE"), nullable=False, index=True)
    bookmaker = Column(String(50), nullable=False)  # bookmaker key or "consensus"
    market = Column(String(20), nullable=False)  # "1X2", "O/U 2.5"

    home_odds = Column(Float, nullable=True)
    draw_odds = Column(Float, nullable=True)
    away_odds = Column(Float, nullable=True)
    over_odds = Column(Float, nullable=True)
    under_odds = Column(Float, nullable=True)
    yes_odds = Column(Float, nullable=True)
    no_odds = Column(Float, nullable=True)
    line = Column(Float, nullable=True)

    is_opening = Column(Boolean, nullable=False, default=False)
    is_closing = Column(Boolean, nullable=False, default=False)
    captured_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    fixture = relationship("Fixture", back_populates="odds_snapshots")

    __table_args__ = (
        Index("ix_odds_snapshots_fixture_market", "fixture_id", "market", "bookmaker"),
    )


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    avatar = Column(String(500), nullable=True)
    password_hash = Column(String(255), nullable=True)  # null for Google-only accounts
    google_id = Column(String(255), unique=True, nullable=True)
    auth_provider = Column(String(20), nullable=False, default="email")  # email, google
    email_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    notes = relationship("MatchNote", back_populates="user", cascade="all, delete-orphan")
    favorite_teams = relationship("FavoriteTeam", back_populates="user", cascade="all, delete-orphan")
    favorite_leagues = relationship("FavoriteLeague", back_populates="user", cascade="all, delete-orphan")


class MatchNote(Base):
    __tablename__ = "match_notes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    fixture_id = Column(Integer, ForeignKey("fixtures.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    fixture = relationship("Fixture", back_populates="notes")
    user = relationship("User", back_populates="notes")


class FavoriteTeam(Base):
    __tablename__ = "favorite_teams"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="favorite_teams")
    team = relationship("Team")

    __table_args__ = (
        UniqueConstraint("user_id", "team_id", name="uq_favorite_teams_user_team"),
    )


class FavoriteLeague(Base):
    __tablename__ = "favorite_leagues"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    league_id = Column(Integer, ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="favorite_leagues")
    league = relationship("League")

    __table_args__ = (
        UniqueConstraint("user_id", "league_id", name="uq_favorite_leagues_user_league"),
    )


class SavedScreen(Base):
    """Named set of fixture filters (league IDs, odds range, markets, ...)."""
    __tablename__ = "saved_screens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    filters = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class UserSelection(Base):
    """A tracked bet. Profit is derived from stake, odds and result; never stored."""
    __tablename__ = "user_selections"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    fixture_id = Column(Integer, ForeignKey("fixtures.id", ondelete="CASCADE"), nullable=False, index=True)
    market = Column(String(50), nullable=False)
    selection = Column(String(100), nullable=False)
    odds = Column(Float, nullable=False)
    opening_odds = Column(Float, nullable=True)
    closing_odds = Column(Float, nullable=True)
    stake = Column(Float, nullable=True)
    result = Column(String(20), nullable=False, default="pending", index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    fixture = relationship("Fixture")


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # lineup, odds_move, value, kickoff
    config = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)
    last_triggered = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class SyncMetadata(Base):
    """Sync job tracking, one row per (source, data_type)."""
    __tablename__ = "sync_metadata"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source = Column(String(32), nullable=False)  # api_football, odds_api
    data_type = Column(String(32), nullable=False)  # leagues, teams, fixtures, standings, odds
    last_sync_started_at = Column(DateTime, nullable=True)
    last_sync_completed_at = Column(DateTime, nullable=True, index=True)
    last_sync_status = Column(String(16), nullable=True, index=True)  # running, success, failed
    records_processed = Column(Integer, nullable=False, default=0)
    error_message = Column(Text, nullable=True)
    sync_duration_ms = Column(Integer, nullable=True)

    __table_args__ = (
        UniqueConstraint("source", "data_type", name="uq_sync_metadata_source_type"),
    )
