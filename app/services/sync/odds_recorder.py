"""Odds snapshot recording and closing-line marking.

Snapshots are a time series: each recording appends rows and nothing is
deduplicated, so two syncs a minute apart store two identical sets of
prices. The only mutation ever made to an existing row is flipping
is_closing in mark_closing.
"""
import logging
from typing import Dict, Iterable, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.metrics import (
    odds_closing_marked_total, odds_events_unmatched_total, odds_snapshots_created_total,
)
from app.models import Fixture, OddsSnapshot
from app.services.core.odds_api_service import H2HPrices, OddsEvent, TotalsPrices
from app.services.sync.matchers.fixture_matcher import FixtureMatcher

logger = logging.getLogger(__name__)

MARKET_1X2 = "1X2"
MARKET_TOTALS = "O/U 2.5"
CONSENSUS_BOOKMAKER = "consensus"


class OddsSnapshotRecorder:
    """Persist bookmaker and consensus prices for matched fixtures."""

    def __init__(self, db: Session, matcher: Optional[FixtureMatcher] = None):
        self.db = db
        self.matcher = matcher or FixtureMatcher()

    def record_snapshot(
        self,
        fixture_id: int,
        bookmaker: str,
        market: str,
        prices: Dict[str, Optional[float]],
        is_opening: bool = False,
    ) -> OddsSnapshot:
        """
        Add one snapshot row.

        Args:
            fixture_id: Fixture the prices belong to
            bookmaker: Bookmaker key, or "consensus"
            market: Market label ("1X2", "O/U 2.5")
            prices: Column values (home_odds, draw_odds, over_odds, line, ...)
            is_opening: Flag the row as an opening price

        Returns:
            The pending snapshot (flushed, so its id is set)
        """
        snapshot = OddsSnapshot(
            fixture_id=fixture_id,
            bookmaker=bookmaker,
            market=market,
            is_opening=is_opening,
            is_closing=False,
            **prices,
        )
        self.db.add(snapshot)
        self.db.flush()
        odds_snapshots_created_total.labels(market=market).inc()
        return snapshot

    def record_event(self, fixture_id: int, event: OddsEvent, is_opening: bool = False) -> int:
        """Snapshot every bookmaker's h2h and totals prices plus consensus. Returns rows created."""
        created = 0

        for bookmaker in event.bookmakers:
            if bookmaker.h2h:
                self.record_snapshot(fixture_id, bookmaker.key, MARKET_1X2, _h2h_columns(bookmaker.h2h), is_opening)
                created += 1
            if bookmaker.totals:
                self.record_snapshot(fixture_id, bookmaker.key, MARKET_TOTALS, _totals_columns(bookmaker.totals), is_opening)
                created += 1

        if event.consensus.h2h:
            self.record_snapshot(fixture_id, CONSENSUS_BOOKMAKER, MARKET_1X2, _h2h_columns(event.consensus.h2h), is_opening)
            created += 1
        if event.consensus.totals:
            self.record_snapshot(fixture_id, CONSENSUS_BOOKMAKER, MARKET_TOTALS, _totals_columns(event.consensus.totals), is_opening)
            created += 1

        return created

    def record_snapshots(
        self,
        fixtures: Sequence[Fixture],
        events: Iterable[OddsEvent],
        is_opening: bool = False,
    ) -> Dict[str, int]:
        """
        Match odds events to fixtures and snapshot each matched event.

        Each event's rows are committed before the next event is handled; a
        failure leaves earlier events recorded.

        Returns:
            Dict with snapshots_created and events_matched
        """
        events = list(events)
        pairs = self.matcher.match(events, fixtures)

        snapshots_created = 0
        for event, fixture in pairs:
            snapshots_created += self.record_event(fixture.id, event, is_opening)
            self.db.commit()

        unmatched = len(events) - len(pairs)
        if unmatched:
            odds_events_unmatched_total.inc(unmatched)

        logger.info(
            f"Recorded {snapshots_created} odds snapshots for {len(pairs)}/{len(events)} events"
        )
        return {"snapshots_created": snapshots_created, "events_matched": len(pairs)}

    def mark_closing(self, fixture_id: int) -> int:
        """
        Flag the latest snapshot of each (bookmaker, market) as closing.

        Latest is by captured_at, ties broken by the higher id. Running it
        again flags the same rows.

        Returns:
            Number of snapshots flagged
        """
        snapshots = (
            self.db.query(OddsSnapshot)
            .filter(OddsSnapshot.fixture_id == fixture_id)
            .order_by(OddsSnapshot.captured_at.desc(), OddsSnapshot.id.desc())
            .all()
        )

        latest: Dict[tuple, OddsSnapshot] = {}
        for snapshot in snapshots:
            latest.setdefault((snapshot.bookmaker, snapshot.market), snapshot)

        for snapshot in latest.values():
            snapshot.is_closing = True
        self.db.commit()
        odds_closing_marked_total.inc(len(latest))

        logger.info(f"Marked {len(latest)} snapshots as closing for fixture {fixture_id}")
        return len(latest)


def _h2h_columns(prices: H2HPrices) -> Dict[str, float]:
    return {"home_odds": prices.home, "draw_odds": prices.draw, "away_odds": prices.away}


def _totals_columns(prices: TotalsPrices) -> Dict[str, float]:
    return {"over_odds": prices.over, "under_odds": prices.under, "line": prices.point}
