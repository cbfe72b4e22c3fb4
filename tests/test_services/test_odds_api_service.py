"""Tests for The Odds API client using httpx.MockTransport."""
import httpx
import pytest

from app.core.exceptions import UnmappedLeagueError, UpstreamAPIError
from app.services.core.odds_api_service import (
    OddsApiService, calculate_consensus, parse_bookmaker, process_odds_response,
)

EVENT = {
    "id": "evt-1",
    "sport_key": "soccer_epl",
    "commence_time": "2024-09-01T15:00:00Z",
    "home_team": "Manchester United",
    "away_team": "Liverpool",
    "bookmakers": [
        {
            "key": "bet365",
            "title": "Bet365",
            "last_update": "2024-09-01T10:00:00Z",
            "markets": [
                {
                    "key": "h2h",
                    "outcomes": [
                        {"name": "Manchester United", "price": 2.5},
                        {"name": "Liverpool", "price": 2.8},
                        {"name": "Draw", "price": 3.4},
                    ],
                },
                {
                    "key": "totals",
                    "outcomes": [
                        {"name": "Over", "price": 1.9, "point": 2.5},
                        {"name": "Under", "price": 1.95, "point": 2.5},
                    ],
                },
            ],
        },
        {
            "key": "williamhill",
            "title": "William Hill",
            "last_update": "2024-09-01T10:05:00Z",
            "markets": [
                {
                    "key": "h2h",
                    "outcomes": [
                        {"name": "Manchester United", "price": 2.4},
                        {"name": "Liverpool", "price": 2.9},
                        {"name": "Draw", "price": 3.5},
                    ],
                },
                {
                    "key": "spreads",
                    "outcomes": [
                        {"name": "Manchester United", "price": 1.9, "point": -0.5},
                        {"name": "Liverpool", "price": 1.95, "point": 0.5},
                    ],
                },
            ],
        },
    ],
}


def make_service(handler):
    return OddsApiService(api_key="test-key", transport=httpx.MockTransport(handler))


class TestParsing:

    def test_parse_bookmaker_markets(self):
        """Should extract h2h and totals by outcome name."""
        bookmaker = parse_bookmaker(EVENT["bookmakers"][0], "Manchester United", "Liverpool")

        assert bookmaker.key == "bet365"
        assert bookmaker.name == "Bet365"
        assert (bookmaker.h2h.home, bookmaker.h2h.draw, bookmaker.h2h.away) == (2.5, 3.4, 2.8)
        assert (bookmaker.totals.over, bookmaker.totals.under, bookmaker.totals.point) == (1.9, 1.95, 2.5)
        assert bookmaker.spreads is None

    def test_parse_spreads(self):
        """Should keep both handicap points."""
        bookmaker = parse_bookmaker(EVENT["bookmakers"][1], "Manchester United", "Liverpool")

        assert bookmaker.spreads.home_point == -0.5
        assert bookmaker.spreads.away_point == 0.5
        assert bookmaker.totals is None

    def test_market_missing_a_side_is_dropped(self):
        """Should drop an h2h market without the away price."""
        raw = {
            "key": "bk",
            "markets": [{"key": "h2h", "outcomes": [{"name": "Manchester United", "price": 2.0}]}],
        }

        assert parse_bookmaker(raw, "Manchester United", "Liverpool").h2h is None

    def test_consensus_is_mean_rounded(self):
        """Should average each outcome across bookmakers to two decimals."""
        consensus = calculate_consensus(EVENT["bookmakers"], "Manchester United", "Liverpool")

        assert consensus.h2h.home == 2.45
        assert consensus.h2h.draw == 3.45
        assert consensus.h2h.away == 2.85
        assert consensus.totals.over == 1.9
        assert consensus.totals.point == 2.5

    def test_consensus_without_prices(self):
        """Should leave both markets empty when no bookmaker prices them."""
        consensus = calculate_consensus([], "A", "B")

        assert consensus.h2h is None
        assert consensus.totals is None

    def test_process_response(self):
        """Should build one OddsEvent per raw event."""
        events = process_odds_response([EVENT])

        assert len(events) == 1
        assert events[0].event_id == "evt-1"
        assert [b.key for b in events[0].bookmakers] == ["bet365", "williamhill"]


class TestOddsApiService:

    @pytest.mark.asyncio
    async def test_get_odds_request_and_quota(self):
        """Should call the league's sport key and read quota headers."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(
                200,
                json=[EVENT],
                headers={"x-requests-remaining": "480", "x-requests-used": "20"},
            )

        service = make_service(handler)
        events = await service.get_odds(39, markets=["h2h", "totals"])
        await service.close()

        assert seen["path"] == "/v4/sports/soccer_epl/odds"
        assert seen["params"]["apiKey"] == "test-key"
        assert seen["params"]["markets"] == "h2h,totals"
        assert seen["params"]["regions"] == "uk,eu"
        assert seen["params"]["oddsFormat"] == "decimal"
        assert events[0].consensus.h2h.home == 2.45

        quota = service.get_quota_status()
        assert quota["requests_remaining"] == 480
        assert quota["requests_used"] == 20

    @pytest.mark.asyncio
    async def test_unmapped_league_makes_no_request(self):
        """Should raise before any request for a league without a sport key."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=[])

        service = make_service(handler)
        with pytest.raises(UnmappedLeagueError) as excinfo:
            await service.get_odds(999)

        assert str(excinfo.value) == "No sport key mapping for league ID 999"
        assert calls == []

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        """Should raise UpstreamAPIError carrying the status and body."""
        service = make_service(lambda request: httpx.Response(401, text="Invalid API key"))

        with pytest.raises(UpstreamAPIError) as excinfo:
            await service.get_odds(39)

        assert excinfo.value.status_code == 401
        assert "Invalid API key" in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_missing_key(self):
        """Should refuse to call upstream without an API key."""
        service = OddsApiService(api_key="")

        with pytest.raises(UpstreamAPIError, match="ODDS_API_KEY"):
            await service.get_odds(39)

    @pytest.mark.asyncio
    async def test_event_odds_filters_by_event(self):
        """Should pass eventIds and return the single event."""
        seen = {}

        def handler(request):
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=[EVENT])

        event = await make_service(handler).get_event_odds(39, "evt-1")

        assert seen["params"]["eventIds"] == "evt-1"
        assert seen["params"]["markets"] == "h2h,totals,spreads"
        assert event.home_team == "Manchester United"

    @pytest.mark.asyncio
    async def test_sports_listing(self):
        """Should call /sports with only the API key."""
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(
                200, json=[{"key": "soccer_epl", "title": "EPL", "active": True}]
            )

        sports = await make_service(handler).get_sports()

        assert seen["path"] == "/v4/sports"
        assert seen["params"] == {"apiKey": "test-key"}
        assert sports[0]["key"] == "soccer_epl"

    @pytest.mark.asyncio
    async def test_historical_odds_passes_date(self):
        """Should call odds-history for the sport key with the requested date."""
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=[EVENT])

        events = await make_service(handler).get_historical_odds(
            140, "2024-09-01T12:00:00Z", markets=["h2h"]
        )

        assert seen["path"] == "/v4/sports/soccer_spain_la_liga/odds-history"
        assert seen["params"]["date"] == "2024-09-01T12:00:00Z"
        assert seen["params"]["markets"] == "h2h"
        assert seen["params"]["regions"] == "uk,eu"
        assert len(events) == 1
        assert events[0].event_id == "evt-1"

    @pytest.mark.asyncio
    async def test_historical_odds_unmapped_league(self):
        """Should fail fast for a league without a sport key."""
        service = make_service(lambda request: httpx.Response(200, json=[]))

        with pytest.raises(UnmappedLeagueError):
            await service.get_historical_odds(999, "2024-09-01T12:00:00Z")

    @pytest.mark.asyncio
    async def test_upcoming_events_without_prices(self):
        """Should call /events and reduce each event to ids, teams and kick-off."""
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=[EVENT])

        events = await make_service(handler).get_upcoming_events(39)

        assert seen["path"] == "/v4/sports/soccer_epl/events"
        assert "markets" not in seen["params"]
        assert events == [
            {
                "id": "evt-1",
                "home_team": "Manchester United",
                "away_team": "Liverpool",
                "commence_time": "2024-09-01T15:00:00Z",
            }
        ]
