"""
Odds Snapshot Repository.

Reads the stored price time series. Writes go through OddsSnapshotRecorder.
"""
from typing import List, Optional, Tuple

from app.models import OddsSnapshot
from app.repositories.base import BaseRepository


class OddsSnapshotRepository(BaseRepository[OddsSnapshot]):
    """Repository for odds snapshot data access."""

    def __init__(self, db):
        super().__init__(OddsSnapshot, db)

    def find_history(self, fixture_id: int, market: Optional[str] = None) -> List[OddsSnapshot]:
        """All snapshots for a fixture in capture order, optionally one market."""
        query = self.query().filter(OddsSnapshot.fixture_id == fixture_id)
        if market:
            query = query.filter(OddsSnapshot.market == market)
        return query.order_by(OddsSnapshot.captured_at.asc(), OddsSnapshot.id.asc()).all()

    def find_opening_and_current(
        self,
        fixture_id: int,
        market: str,
        bookmaker: str = "consensus",
    ) -> Tuple[Optional[OddsSnapshot], Optional[OddsSnapshot]]:
        """
        Opening and latest snapshot for one fixture, market and bookmaker.

        The opening price is the earliest row flagged is_opening, falling
        back to the earliest row when no sync was run with markAsOpening.
        """
        rows = self.query().filter(
            OddsSnapshot.fixture_id == fixture_id,
            OddsSnapshot.market == market,
            OddsSnapshot.bookmaker == bookmaker,
        ).order_by(OddsSnapshot.captured_at.asc(), OddsSnapshot.id.asc()).all()

        if not rows:
            return None, None

        opening = next((r for r in rows if r.is_opening), rows[0])
        return opening, rows[-1]
