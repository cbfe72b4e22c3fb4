"""End-to-end GraphQL tests for odds queries and sync mutations."""
from datetime import timedelta

import pytest

from app.core.exceptions import UnmappedLeagueError, UpstreamAPIError
from app.models import OddsSnapshot, SyncMetadata, utcnow
from app.services.core.odds_api_service import (
    BookmakerOdds, ConsensusOdds, H2HPrices, OddsEvent, TotalsPrices,
)


def odds_event(home="Manchester United", away="Liverpool"):
    h2h = H2HPrices(home=2.0, draw=3.5, away=4.0)
    totals = TotalsPrices(over=1.9, under=1.9, point=2.5)
    return OddsEvent(
        event_id="evt-1",
        home_team=home,
        away_team=away,
        commence_time="2024-09-01T15:00:00Z",
        bookmakers=[BookmakerOdds(key="bet365", name="Bet365", last_update="2024-09-01T10:00:00Z", h2h=h2h, totals=totals)],
        consensus=ConsensusOdds(h2h=h2h, totals=totals),
    )


class TestLiveOdds:

    QUERY = """
        query($leagueId: Int!) {
            liveOdds(leagueId: $leagueId) {
                eventId homeTeam
                bookmakers { key h2h { home draw away } totals { over point } spreads { home } }
                consensus { home draw away over under point }
                impliedProbabilities { home draw away overround }
            }
        }
    """

    @pytest.mark.asyncio
    async def test_flattens_events(self, graphql, odds_service):
        odds_service.get_odds.return_value = [odds_event()]

        body = await graphql(self.QUERY, {"leagueId": 39})

        odds = body["data"]["liveOdds"][0]
        assert odds["eventId"] == "evt-1"
        assert odds["bookmakers"] == [{
            "key": "bet365",
            "h2h": {"home": 2.0, "draw": 3.5, "away": 4.0},
            "totals": {"over": 1.9, "point": 2.5},
            "spreads": None,
        }]
        assert odds["consensus"] == {
            "home": 2.0, "draw": 3.5, "away": 4.0, "over": 1.9, "under": 1.9, "point": 2.5,
        }
        assert odds["impliedProbabilities"] == {
            "home": 0.4828, "draw": 0.2759, "away": 0.2414, "overround": 0.0357,
        }
        odds_service.get_odds.assert_awaited_once_with(39, markets=["h2h", "totals"])

    @pytest.mark.asyncio
    async def test_no_consensus_without_h2h(self, graphql, odds_service):
        """Should leave consensus and probabilities null when no 1X2 price exists."""
        event = odds_event()
        event.consensus = ConsensusOdds(totals=TotalsPrices(over=1.9, under=1.9, point=2.5))
        odds_service.get_odds.return_value = [event]

        body = await graphql(self.QUERY, {"leagueId": 39})

        odds = body["data"]["liveOdds"][0]
        assert odds["consensus"] is None
        assert odds["impliedProbabilities"] is None

    @pytest.mark.asyncio
    async def test_unmapped_league_is_an_error(self, graphql, odds_service):
        odds_service.get_odds.side_effect = UnmappedLeagueError(999)

        body = await graphql(self.QUERY, {"leagueId": 999})

        assert body["errors"][0]["message"] == "No sport key mapping for league ID 999"

    @pytest.mark.asyncio
    async def test_upstream_failure_is_empty(self, graphql, odds_service):
        odds_service.get_odds.side_effect = UpstreamAPIError("odds-api", "quota exceeded", status_code=429)

        body = await graphql(self.QUERY, {"leagueId": 39})

        assert body["data"]["liveOdds"] == []


class TestFixtureOdds:

    QUERY = "query($id: Int!) { fixtureOdds(fixtureId: $id) { eventId homeTeam } }"

    @pytest.mark.asyncio
    async def test_matches_by_team_names(self, graphql, premier_league, odds_service):
        odds_service.get_odds.return_value = [
            odds_event("Arsenal", "Chelsea"),
            odds_event("Manchester United FC", "Liverpool FC"),
        ]

        body = await graphql(self.QUERY, {"id": 1001})

        assert body["data"]["fixtureOdds"]["homeTeam"] == "Manchester United FC"
        odds_service.get_odds.assert_awaited_once_with(39, markets=["h2h", "totals", "spreads"])

    @pytest.mark.asyncio
    async def test_unknown_fixture(self, graphql, premier_league, odds_service):
        body = await graphql(self.QUERY, {"id": 424242})

        assert body["data"]["fixtureOdds"] is None
        odds_service.get_odds.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_matching_event(self, graphql, premier_league, odds_service):
        odds_service.get_odds.return_value = [odds_event("Brentford", "Fulham")]

        body = await graphql(self.QUERY, {"id": 1001})

        assert body["data"]["fixtureOdds"] is None


class TestStoredOdds:

    def _snapshot(self, db_session, captured_at, home_odds, is_opening=False):
        db_session.add(OddsSnapshot(
            fixture_id=1001,
            bookmaker="consensus",
            market="1X2",
            home_odds=home_odds,
            draw_odds=3.4,
            away_odds=3.0,
            is_opening=is_opening,
            captured_at=captured_at,
        ))
        db_session.commit()

    @pytest.mark.asyncio
    async def test_history_ascending(self, graphql, db_session, premier_league):
        now = utcnow()
        self._snapshot(db_session, now, 2.2)
        self._snapshot(db_session, now - timedelta(hours=2), 2.5, is_opening=True)

        body = await graphql("""
            query { oddsHistory(fixtureId: 1001, market: "1X2") { homeOdds isOpening isClosing } }
        """)

        assert body["data"]["oddsHistory"] == [
            {"homeOdds": 2.5, "isOpening": True, "isClosing": False},
            {"homeOdds": 2.2, "isOpening": False, "isClosing": False},
        ]

    @pytest.mark.asyncio
    async def test_movement(self, graphql, db_session, premier_league):
        now = utcnow()
        self._snapshot(db_session, now - timedelta(hours=2), 2.5, is_opening=True)
        self._snapshot(db_session, now, 2.0)

        body = await graphql("""
            query {
                oddsMovement(fixtureId: 1001, market: "1X2") {
                    market
                    opening { home }
                    current { home }
                    movement { home draw over }
                    movementPercent { home draw }
                }
            }
        """)

        assert body["data"]["oddsMovement"] == {
            "market": "1X2",
            "opening": {"home": 2.5},
            "current": {"home": 2.0},
            "movement": {"home": -0.5, "draw": 0.0, "over": None},
            "movementPercent": {"home": -20.0, "draw": 0.0},
        }

    @pytest.mark.asyncio
    async def test_movement_without_snapshots(self, graphql, premier_league):
        body = await graphql('query { oddsMovement(fixtureId: 1001, market: "1X2") { market } }')

        assert body["data"]["oddsMovement"] is None


class TestSyncMutations:

    @pytest.mark.asyncio
    async def test_sync_odds_records_snapshots(self, graphql, db_session, premier_league, odds_service):
        odds_service.get_odds.return_value = [odds_event()]

        body = await graphql("""
            mutation {
                syncOdds(leagueId: 39, markAsOpening: true) {
                    success message snapshotsCreated eventsMatched
                }
            }
        """)

        assert body["data"]["syncOdds"] == {
            "success": True,
            "message": "Synced odds for 1 events",
            "snapshotsCreated": 4,
            "eventsMatched": 1,
        }
        assert db_session.query(OddsSnapshot).filter_by(is_opening=True).count() == 4

    @pytest.mark.asyncio
    async def test_sync_odds_failure_in_payload(self, graphql, premier_league, odds_service):
        odds_service.get_odds.side_effect = UnmappedLeagueError(999)

        body = await graphql("mutation { syncOdds(leagueId: 999) { success message snapshotsCreated } }")

        assert "errors" not in body
        assert body["data"]["syncOdds"] == {
            "success": False,
            "message": "No sport key mapping for league ID 999",
            "snapshotsCreated": None,
        }

    @pytest.mark.asyncio
    async def test_mark_closing(self, graphql, db_session, premier_league):
        now = utcnow()
        for offset, price in ((2, 2.5), (0, 2.2)):
            db_session.add(OddsSnapshot(
                fixture_id=1001, bookmaker="bet365", market="1X2",
                home_odds=price, captured_at=now - timedelta(hours=offset),
            ))
        db_session.commit()

        body = await graphql(
            "mutation { markClosingOdds(fixtureId: 1001) { success message snapshotsCreated eventsMatched } }"
        )

        assert body["data"]["markClosingOdds"] == {
            "success": True,
            "message": "Marked 1 odds as closing",
            "snapshotsCreated": None,
            "eventsMatched": None,
        }
        closing = db_session.query(OddsSnapshot).filter_by(is_closing=True).one()
        assert closing.home_odds == 2.2

    @pytest.mark.asyncio
    async def test_sync_leagues_failure_in_payload(self, graphql, db_session, football_service):
        football_service.get_leagues.side_effect = UpstreamAPIError("api-football", "API error: bad key")

        body = await graphql('mutation { syncLeagues(countryCode: "GB") { success message count } }')

        assert body["data"]["syncLeagues"] == {
            "success": False,
            "message": "api-football error: API error: bad key",
            "count": None,
        }
        status = await graphql("query { syncStatus { source dataType lastSyncStatus errorMessage } }")
        assert status["data"]["syncStatus"] == [{
            "source": "api_football",
            "dataType": "leagues",
            "lastSyncStatus": "failed",
            "errorMessage": "api-football error: API error: bad key",
        }]

    @pytest.mark.asyncio
    async def test_sync_fixtures_season_not_found(self, graphql, football_service):
        body = await graphql("mutation { syncFixtures(leagueId: 39, season: 2030) { success message } }")

        assert body["data"]["syncFixtures"] == {"success": False, "message": "Season not found"}
