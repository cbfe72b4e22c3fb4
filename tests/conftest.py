"""Shared pytest fixtures for football-insights-api tests."""
import os
import sys
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import AsyncGenerator, Generator
from unittest.mock import AsyncMock

# Settings are read at import time; pin the test environment first
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_JSON"] = "false"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create fresh test database session with isolated in-memory database."""
    from app.models import Base

    # One shared connection so every session sees the same in-memory database
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSessionLocal()

    yield session

    session.close()
    engine.dispose()


@pytest.fixture
def football_service() -> AsyncMock:
    """API-Football client double; set return values per test."""
    from app.services.core.football_api_service import FootballApiService

    return AsyncMock(spec=FootballApiService)


@pytest.fixture
def odds_service() -> AsyncMock:
    from app.services.core.odds_api_service import OddsApiService

    return AsyncMock(spec=OddsApiService)


@pytest_asyncio.fixture(scope="function")
async def async_client(
    db_session: Session,
    football_service: AsyncMock,
    odds_service: AsyncMock,
) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for testing the FastAPI app."""
    from app.main import app
    from app.core.database import get_db
    from app.services.core import get_football_service, get_odds_service

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_football_service] = lambda: football_service
    app.dependency_overrides[get_odds_service] = lambda: odds_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def graphql(async_client: AsyncClient):
    """POST a GraphQL document and return the decoded body."""

    async def execute(query: str, variables: dict = None, token: str = None) -> dict:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        response = await async_client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        assert response.status_code == 200, response.text
        return response.json()

    return execute


# =============================================================================
# SAMPLE DATA
# =============================================================================

def create_fixture(
    db: Session,
    fixture_id: int,
    season_id: int,
    home_team_id: int,
    away_team_id: int,
    kickoff: datetime,
    status_short: str = "NS",
    status: str = "Not Started",
    goals_home: int = None,
    goals_away: int = None,
):
    """Helper to add a fixture row."""
    from app.models import Fixture

    fixture = Fixture(
        id=fixture_id,
        date=kickoff,
        timestamp=int((kickoff - datetime(1970, 1, 1)).total_seconds()),
        timezone="UTC",
        status=status,
        status_short=status_short,
        season_id=season_id,
        home_team_id=home_team_id,
        away_team_id=away_team_id,
        goals_home=goals_home,
        goals_away=goals_away,
    )
    db.add(fixture)
    db.commit()
    return fixture


@pytest.fixture
def premier_league(db_session: Session):
    """England, the Premier League 2024 season and four clubs."""
    from app.models import Country, League, Season, Team, utcnow
    from app.services.core.football_api_service import country_id_for, season_id_for

    country = Country(id=country_id_for("England"), name="England", code="GB")
    league = League(id=39, name="Premier League", type="League", country_id=country.id)
    season = Season(
        id=season_id_for(39, 2024),
        year=2024,
        start_date=date(2024, 8, 16),
        end_date=date(2025, 5, 25),
        current=True,
        league_id=39,
    )
    teams = [
        Team(id=33, name="Manchester United", country_id=country.id),
        Team(id=40, name="Liverpool", country_id=country.id),
        Team(id=42, name="Arsenal", country_id=country.id),
        Team(id=49, name="Chelsea", country_id=country.id),
    ]
    db_session.add_all([country, league, season, *teams])
    for team in teams:
        team.leagues.append(league)
    db_session.commit()

    now = utcnow()
    create_fixture(db_session, 1001, season.id, 33, 40, now + timedelta(hours=3))
    create_fixture(db_session, 1002, season.id, 42, 49, now + timedelta(hours=30))
    create_fixture(
        db_session, 1003, season.id, 40, 33, now - timedelta(days=7),
        status_short="FT", status="Match Finished", goals_home=2, goals_away=1,
    )

    return {"country": country, "league": league, "season": season, "teams": teams}


@pytest.fixture
def user(db_session: Session):
    """Email account with password 'Password1'."""
    from app.core.security import hash_password
    from app.models import User

    account = User(
        email="fan@example.com",
        name="Fan",
        password_hash=hash_password("Password1"),
        auth_provider="email",
    )
    db_session.add(account)
    db_session.commit()
    return account


@pytest.fixture
def auth_token(user) -> str:
    from app.core.security import create_access_token

    return create_access_token(user.id, user.email)
