"""
Upstream API clients.

- football_api_service: API-Football v3 (reference data, live match details)
- odds_api_service: The Odds API v4 (bookmaker prices, consensus)

Both clients are module-level singletons created lazily from settings and
closed on application shutdown.
"""
from app.services.core.football_api_service import (
    FootballApiService,
    get_football_service,
    close_football_service,
)
from app.services.core.odds_api_service import (
    OddsApiService,
    get_odds_service,
    close_odds_service,
)

__all__ = [
    "FootballApiService",
    "get_football_service",
    "close_football_service",
    "OddsApiService",
    "get_odds_service",
    "close_odds_service",
]
