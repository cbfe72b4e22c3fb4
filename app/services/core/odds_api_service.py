"""
The Odds API service for football betting odds.

Markets handled:
- h2h (1X2 moneyline)
- spreads (Asian handicap)
- totals (over/under goals)

Leagues are addressed by their API-Football ID and mapped to a sport key
through SPORT_KEYS. An unmapped league raises UnmappedLeagueError before
any request is made.

Quota Tracking: Response headers x-requests-remaining, x-requests-used
"""
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import settings
from app.core.exceptions import UnmappedLeagueError, UpstreamAPIError
from app.core.logging import get_logger
from app.core.metrics import record_upstream_call, update_odds_quota

logger = get_logger(__name__)

PROVIDER = "odds-api"

# API-Football league ID -> The Odds API sport key
SPORT_KEYS: Dict[int, str] = {
    39: "soccer_epl",
    40: "soccer_efl_champ",
    140: "soccer_spain_la_liga",
    135: "soccer_italy_serie_a",
    78: "soccer_germany_bundesliga",
    61: "soccer_france_ligue_one",
    88: "soccer_netherlands_eredivisie",
    94: "soccer_portugal_primeira_liga",
    2: "soccer_uefa_champs_league",
    3: "soccer_uefa_europa_league",
}

DEFAULT_MARKETS = ["h2h", "totals"]
DEFAULT_TOTALS_POINT = 2.5


@dataclass
class H2HPrices:
    home: float
    draw: float
    away: float


@dataclass
class SpreadPrices:
    home: float
    away: float
    home_point: float
    away_point: float


@dataclass
class TotalsPrices:
    over: float
    under: float
    point: float


@dataclass
class BookmakerOdds:
    key: str
    name: str
    last_update: str
    h2h: Optional[H2HPrices] = None
    spreads: Optional[SpreadPrices] = None
    totals: Optional[TotalsPrices] = None


@dataclass
class ConsensusOdds:
    """Mean price per outcome across bookmakers."""
    h2h: Optional[H2HPrices] = None
    totals: Optional[TotalsPrices] = None


@dataclass
class OddsEvent:
    event_id: str
    home_team: str
    away_team: str
    commence_time: str
    bookmakers: List[BookmakerOdds] = field(default_factory=list)
    consensus: ConsensusOdds = field(default_factory=ConsensusOdds)


def _find_outcome(outcomes: List[Dict], name: str) -> Optional[Dict]:
    # Outcomes carry real team names, not IDs
    return next((o for o in outcomes if o.get("name") == name), None)


def _mean(values: List[float]) -> float:
    return round(sum(values) / len(values), 2) if values else 0


def parse_bookmaker(raw: Dict, home_team: str, away_team: str) -> BookmakerOdds:
    """Extract per-market prices; a market missing either side is dropped."""
    bookmaker = BookmakerOdds(
        key=raw.get("key", ""),
        name=raw.get("title", ""),
        last_update=raw.get("last_update", ""),
    )

    for market in raw.get("markets", []):
        outcomes = market.get("outcomes", [])
        key = market.get("key")

        if key == "h2h":
            home = _find_outcome(outcomes, home_team)
            away = _find_outcome(outcomes, away_team)
            draw = _find_outcome(outcomes, "Draw")
            if home and away:
                bookmaker.h2h = H2HPrices(
                    home=home["price"],
                    draw=draw["price"] if draw else 0,
                    away=away["price"],
                )

        elif key == "spreads":
            home = _find_outcome(outcomes, home_team)
            away = _find_outcome(outcomes, away_team)
            if home and away:
                bookmaker.spreads = SpreadPrices(
                    home=home["price"],
                    away=away["price"],
                    home_point=home.get("point") or 0,
                    away_point=away.get("point") or 0,
                )

        elif key == "totals":
            over = _find_outcome(outcomes, "Over")
            under = _find_outcome(outcomes, "Under")
            if over and under:
                bookmaker.totals = TotalsPrices(
                    over=over["price"],
                    under=under["price"],
                    point=over.get("point") or DEFAULT_TOTALS_POINT,
                )

    return bookmaker


def calculate_consensus(bookmakers: List[Dict], home_team: str, away_team: str) -> ConsensusOdds:
    """
    Average every h2h and totals outcome across bookmakers.

    Works on the raw bookmaker payload, so a bookmaker quoting only one
    side of a market still contributes that side. The totals point is the
    last non-zero Over point seen.
    """
    home_prices, draw_prices, away_prices = [], [], []
    over_prices, under_prices = [], []
    point = DEFAULT_TOTALS_POINT

    for bookmaker in bookmakers:
        for market in bookmaker.get("markets", []):
            key = market.get("key")
            for outcome in market.get("outcomes", []):
                name = outcome.get("name")
                price = outcome.get("price")
                if key == "h2h":
                    if name == home_team:
                        home_prices.append(price)
                    elif name == "Draw":
                        draw_prices.append(price)
                    elif name == away_team:
                        away_prices.append(price)
                elif key == "totals":
                    if name == "Over":
                        over_prices.append(price)
                        if outcome.get("point"):
                            point = outcome["point"]
                    elif name == "Under":
                        under_prices.append(price)

    consensus = ConsensusOdds()
    if home_prices:
        consensus.h2h = H2HPrices(
            home=_mean(home_prices), draw=_mean(draw_prices), away=_mean(away_prices)
        )
    if over_prices:
        consensus.totals = TotalsPrices(
            over=_mean(over_prices), under=_mean(under_prices), point=point
        )
    return consensus


def process_odds_response(data: List[Dict]) -> List[OddsEvent]:
    """Convert raw /odds payload events into OddsEvent objects."""
    events = []
    for raw in data:
        home_team = raw.get("home_team", "")
        away_team = raw.get("away_team", "")
        raw_bookmakers = raw.get("bookmakers", [])
        events.append(
            OddsEvent(
                event_id=raw.get("id", ""),
                home_team=home_team,
                away_team=away_team,
                commence_time=raw.get("commence_time", ""),
                bookmakers=[parse_bookmaker(b, home_team, away_team) for b in raw_bookmakers],
                consensus=calculate_consensus(raw_bookmakers, home_team, away_team),
            )
        )
    return events


class OddsApiService:
    """
    The Odds API v4 client.

    One AsyncClient is created lazily and reused; close() releases it.
    No retries: a failed request raises UpstreamAPIError once.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.the-odds-api.com/v4",
        regions: Optional[List[str]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key: The Odds API key (sent as the apiKey query parameter)
            base_url: API root
            regions: Default bookmaker regions
            timeout: Request timeout in seconds; None waits indefinitely
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.regions = regions or ["uk", "eu"]
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        # Quota tracking (from response headers)
        self._requests_remaining: Optional[int] = None
        self._requests_used: Optional[int] = None
        self._quota_last_updated: Optional[datetime] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    def _update_quota_from_headers(self, response: httpx.Response):
        try:
            remaining = response.headers.get("x-requests-remaining")
            used = response.headers.get("x-requests-used")
            if remaining:
                self._requests_remaining = int(float(remaining))
            if used:
                self._requests_used = int(float(used))
            self._quota_last_updated = datetime.now()
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to parse quota headers: {e}")
            return

        logger.info(
            f"The Odds API Quota: {self._requests_remaining} remaining, "
            f"{self._requests_used} used"
        )
        update_odds_quota(self._requests_remaining, self._requests_used)

    def get_quota_status(self) -> Dict:
        return {
            "requests_remaining": self._requests_remaining,
            "requests_used": self._requests_used,
            "last_updated": self._quota_last_updated.isoformat() if self._quota_last_updated else None,
        }

    @staticmethod
    def get_sport_key(league_id: int) -> Optional[str]:
        return SPORT_KEYS.get(league_id)

    def _require_sport_key(self, league_id: int) -> str:
        sport_key = self.get_sport_key(league_id)
        if not sport_key:
            raise UnmappedLeagueError(league_id)
        return sport_key

    async def _request(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        if not self.api_key:
            raise UpstreamAPIError(PROVIDER, "ODDS_API_KEY is not configured")

        query = {"apiKey": self.api_key, **(params or {})}
        client = await self._get_client()
        started = time.perf_counter()

        try:
            response = await client.get(path, params=query)
        except httpx.HTTPError as e:
            record_upstream_call(PROVIDER, False, time.perf_counter() - started)
            logger.error(f"Odds API request to {path} failed: {e}")
            raise UpstreamAPIError(PROVIDER, str(e)) from e

        ok = response.is_success
        record_upstream_call(PROVIDER, ok, time.perf_counter() - started)

        if not ok:
            logger.error(f"Odds API request to {path} returned {response.status_code}")
            raise UpstreamAPIError(
                PROVIDER,
                f"Odds API request failed: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        self._update_quota_from_headers(response)
        return response.json()

    def _odds_params(
        self,
        markets: Optional[List[str]],
        regions: Optional[List[str]],
        odds_format: str = "decimal",
    ) -> Dict[str, str]:
        return {
            "regions": ",".join(regions or self.regions),
            "markets": ",".join(markets or DEFAULT_MARKETS),
            "oddsFormat": odds_format,
        }

    # Endpoints

    async def get_sports(self) -> List[Dict]:
        """Available sports (key, title, active)."""
        return await self._request("/sports")

    async def get_odds(
        self,
        league_id: int,
        markets: Optional[List[str]] = None,
        regions: Optional[List[str]] = None,
        odds_format: str = "decimal",
    ) -> List[OddsEvent]:
        """Current odds for every upcoming event in a league."""
        sport_key = self._require_sport_key(league_id)
        data = await self._request(
            f"/sports/{sport_key}/odds",
            self._odds_params(markets, regions, odds_format),
        )
        events = process_odds_response(data)
        logger.info(
            f"Fetched odds for {len(events)} events",
            extra={"league_id": league_id, "sport_key": sport_key},
        )
        return events

    async def get_event_odds(
        self,
        league_id: int,
        event_id: str,
        markets: Optional[List[str]] = None,
        regions: Optional[List[str]] = None,
    ) -> Optional[OddsEvent]:
        sport_key = self._require_sport_key(league_id)
        params = self._odds_params(markets or ["h2h", "totals", "spreads"], regions)
        params["eventIds"] = event_id
        data = await self._request(f"/sports/{sport_key}/odds", params)
        events = process_odds_response(data)
        return events[0] if events else None

    async def get_historical_odds(
        self,
        league_id: int,
        date: str,
        markets: Optional[List[str]] = None,
        regions: Optional[List[str]] = None,
    ) -> List[OddsEvent]:
        """Odds as of an ISO timestamp (paid plans only)."""
        sport_key = self._require_sport_key(league_id)
        params = self._odds_params(markets, regions)
        params["date"] = date
        data = await self._request(f"/sports/{sport_key}/odds-history", params)
        return process_odds_response(data)

    async def get_upcoming_events(self, league_id: int) -> List[Dict]:
        """Upcoming events without prices (does not count against odds quota)."""
        sport_key = self._require_sport_key(league_id)
        data = await self._request(f"/sports/{sport_key}/events")
        return [
            {
                "id": event.get("id"),
                "home_team": event.get("home_team"),
                "away_team": event.get("away_team"),
                "commence_time": event.get("commence_time"),
            }
            for event in data
        ]


# Singleton instance
_odds_service: Optional[OddsApiService] = None


def get_odds_service() -> OddsApiService:
    """Get or create OddsApiService singleton."""
    global _odds_service
    if _odds_service is None:
        _odds_service = OddsApiService(
            api_key=settings.ODDS_API_KEY,
            base_url=settings.ODDS_API_BASE_URL,
            regions=settings.odds_regions,
            timeout=settings.UPSTREAM_TIMEOUT,
        )
    return _odds_service


async def close_odds_service():
    global _odds_service
    if _odds_service is not None:
        await _odds_service.close()
        _odds_service = None
