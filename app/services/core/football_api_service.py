"""
API-Football (v3) service for football reference and match data.

Endpoints used:
- /leagues, /teams, /fixtures, /standings for reference data sync
- /fixtures?live=all, /fixtures/statistics, /fixtures/lineups,
  /fixtures/events, /fixtures/headtohead, /fixtures/players for live queries

Every response arrives in an envelope ``{errors, results, response}``.
A non-2xx status or a non-empty ``errors`` (dict or list) raises
UpstreamAPIError with the joined upstream message.
"""
import time
import zlib
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import settings
from app.core.exceptions import UpstreamAPIError
from app.core.logging import get_logger
from app.core.metrics import record_upstream_call

logger = get_logger(__name__)

PROVIDER = "api-football"


def country_id_for(name: str) -> int:
    """
    Stable 31-bit ID for a country name.

    API-Football has no country IDs, and team payloads only carry the
    country name, so the ID is a CRC32 of the normalized name. The same
    name maps to the same ID in every process.
    """
    return zlib.crc32(name.strip().lower().encode("utf-8")) & 0x7FFFFFFF


def season_id_for(league_id: int, year: int) -> int:
    return league_id * 10000 + year


def _error_message(errors: Any) -> str:
    if isinstance(errors, dict):
        return ", ".join(str(v) for v in errors.values())
    return ", ".join(str(e) for e in errors)


def _map_fixture(item: Dict) -> Dict:
    fixture = item.get("fixture", {})
    league = item.get("league", {})
    teams = item.get("teams", {})
    return {
        "id": fixture.get("id"),
        "date": fixture.get("date"),
        "timestamp": fixture.get("timestamp"),
        "timezone": fixture.get("timezone") or "UTC",
        "status": fixture.get("status") or {},
        "round": league.get("round"),
        "venue": fixture.get("venue") or {},
        "referee": fixture.get("referee"),
        "home_team": teams.get("home") or {},
        "away_team": teams.get("away") or {},
        "goals": item.get("goals") or {"home": None, "away": None},
        "league": {
            "id": league.get("id"),
            "name": league.get("name"),
            "logo": league.get("logo"),
            "country": league.get("country"),
        },
    }


class FootballApiService:
    """
    API-Football v3 client.

    Authenticates with the x-apisports-key header. No retries and no
    timeout unless one is configured.
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = "https://v3.football.api-sports.io",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"x-apisports-key": self.api_token},
            )
        return self._client

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _fetch(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET an endpoint and unwrap the ``response`` field of its envelope."""
        if not self.api_token:
            raise UpstreamAPIError(PROVIDER, "FOOTBALL_API_TOKEN is not configured")

        client = await self._get_client()
        started = time.perf_counter()
        try:
            response = await client.get(endpoint, params=params or {})
        except httpx.HTTPError as e:
            record_upstream_call(PROVIDER, False, time.perf_counter() - started)
            logger.error(f"API-Football request to {endpoint} failed: {e}")
            raise UpstreamAPIError(PROVIDER, str(e)) from e

        elapsed = time.perf_counter() - started

        if not response.is_success:
            record_upstream_call(PROVIDER, False, elapsed)
            raise UpstreamAPIError(
                PROVIDER,
                f"API request failed: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        data = response.json()
        errors = data.get("errors")
        if errors:
            record_upstream_call(PROVIDER, False, elapsed)
            raise UpstreamAPIError(PROVIDER, f"API error: {_error_message(errors)}")

        record_upstream_call(PROVIDER, True, elapsed)
        logger.debug(
            f"API-Football {endpoint}: {data.get('results', 0)} results",
            extra={"endpoint": endpoint, "params": params},
        )
        return data.get("response", [])

    # Reference data

    async def get_leagues(self, country_code: Optional[str] = None) -> List[Dict]:
        """Leagues with their country and seasons; IDs derived for both."""
        params = {"code": country_code} if country_code else {}
        response = await self._fetch("/leagues", params)

        leagues = []
        for item in response:
            league = item["league"]
            country = item.get("country") or {}
            leagues.append({
                "id": league["id"],
                "name": league["name"],
                "type": league.get("type") or "League",
                "logo": league.get("logo"),
                "country": {
                    "id": country_id_for(country.get("name", "")),
                    "name": country.get("name", ""),
                    "code": country.get("code"),
                    "flag": country.get("flag"),
                },
                "seasons": [
                    {
                        "id": season_id_for(league["id"], s["year"]),
                        "year": s["year"],
                        "start": s.get("start"),
                        "end": s.get("end"),
                        "current": bool(s.get("current")),
                    }
                    for s in item.get("seasons", [])
                ],
            })
        return leagues

    async def get_teams(self, league_id: int, season: int) -> List[Dict]:
        response = await self._fetch("/teams", {"league": league_id, "season": season})

        teams = []
        for item in response:
            team = item["team"]
            country_name = team.get("country")
            venue = item.get("venue") or {}
            teams.append({
                "id": team["id"],
                "name": team["name"],
                "code": team.get("code"),
                "logo": team.get("logo"),
                "country": {
                    "id": country_id_for(country_name) if country_name else None,
                    "name": country_name,
                },
                "venue": {"name": venue.get("name"), "capacity": venue.get("capacity")},
            })
        return teams

    async def get_fixtures(self, league_id: int, season: int) -> List[Dict]:
        response = await self._fetch("/fixtures", {"league": league_id, "season": season})
        return [_map_fixture(item) for item in response]

    async def get_fixtures_by_date(self, date: str) -> List[Dict]:
        """Fixtures on a YYYY-MM-DD date across all leagues."""
        response = await self._fetch("/fixtures", {"date": date})
        return [_map_fixture(item) for item in response]

    async def get_live_fixtures(self) -> List[Dict]:
        response = await self._fetch("/fixtures", {"live": "all"})
        return [_map_fixture(item) for item in response]

    async def get_standings(self, league_id: int, season: int) -> List[List[Dict]]:
        """Standing groups for a season; empty when the competition has none."""
        response = await self._fetch("/standings", {"league": league_id, "season": season})
        if not response:
            return []
        return response[0].get("league", {}).get("standings", [])

    # Match details (raw upstream shapes)

    async def get_fixture_statistics(self, fixture_id: int) -> List[Dict]:
        return await self._fetch("/fixtures/statistics", {"fixture": fixture_id})

    async def get_fixture_lineups(self, fixture_id: int) -> List[Dict]:
        return await self._fetch("/fixtures/lineups", {"fixture": fixture_id})

    async def get_fixture_events(self, fixture_id: int) -> List[Dict]:
        return await self._fetch("/fixtures/events", {"fixture": fixture_id})

    async def get_head_to_head(self, team1_id: int, team2_id: int, last: int = 10) -> List[Dict]:
        return await self._fetch(
            "/fixtures/headtohead", {"h2h": f"{team1_id}-{team2_id}", "last": last}
        )

    async def get_fixture_players(self, fixture_id: int) -> List[Dict]:
        return await self._fetch("/fixtures/players", {"fixture": fixture_id})


# Singleton instance
_football_service: Optional[FootballApiService] = None


def get_football_service() -> FootballApiService:
    """Get or create FootballApiService singleton."""
    global _football_service
    if _football_service is None:
        _football_service = FootballApiService(
            api_token=settings.FOOTBALL_API_TOKEN,
            base_url=settings.FOOTBALL_API_BASE_URL,
            timeout=settings.UPSTREAM_TIMEOUT,
        )
    return _football_service


async def close_football_service():
    global _football_service
    if _football_service is not None:
        await _football_service.close()
        _football_service = None
