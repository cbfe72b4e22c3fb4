"""
Service for tracking user selections (recorded bets) and their results.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.models import UserSelection
from app.repositories.user import SelectionRepository
from app.services.betting.settlement import RESULTS, SelectionStats, summarize_selections

logger = logging.getLogger(__name__)


def _check_result(result: Optional[str]) -> None:
    if result is not None and result not in RESULTS:
        raise ValidationError(f"Invalid result '{result}'. Expected one of: {', '.join(RESULTS)}")


class SelectionService:
    """Create, settle and summarize a user's selections."""

    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.user_id = user_id
        self.repo = SelectionRepository(db)

    def create(
        self,
        fixture_id: int,
        market: str,
        selection: str,
        odds: float,
        stake: Optional[float] = None,
        opening_odds: Optional[float] = None,
    ) -> UserSelection:
        """Record a new pending selection."""
        created = self.repo.create(
            user_id=self.user_id,
            fixture_id=fixture_id,
            market=market,
            selection=selection,
            odds=odds,
            stake=stake,
            opening_odds=opening_odds,
            result="pending",
        )
        logger.info(f"Created selection {created.id} on fixture {fixture_id} ({market}: {selection} @ {odds})")
        return created

    def update(
        self,
        selection_id: int,
        result: Optional[str] = None,
        closing_odds: Optional[float] = None,
        stake: Optional[float] = None,
    ) -> Optional[UserSelection]:
        """Set result, closing odds or stake. Returns None for an unknown selection."""
        _check_result(result)
        selection = self.repo.find_owned(selection_id, self.user_id)
        if selection is None:
            return None
        return self.repo.update(selection, result=result, closing_odds=closing_odds, stake=stake)

    def delete(self, selection_id: int) -> bool:
        selection = self.repo.find_owned(selection_id, self.user_id)
        if selection is None:
            return False
        self.repo.delete(selection)
        return True

    def settle(self, fixture_id: int, results: List[Dict]) -> int:
        """
        Apply results to several selections of one fixture.

        Args:
            fixture_id: Fixture being settled
            results: Dicts with selection_id and result

        Returns:
            Number of selections updated; unknown IDs and selections on
            other fixtures are skipped
        """
        for item in results:
            _check_result(item["result"])

        count = 0
        for item in results:
            selection = self.repo.find_owned(item["selection_id"], self.user_id)
            if selection is None or selection.fixture_id != fixture_id:
                logger.warning(f"Selection {item['selection_id']} not found on fixture {fixture_id}")
                continue
            selection.result = item["result"]
            count += 1

        self.db.commit()
        logger.info(f"Settled {count} selections on fixture {fixture_id}")
        return count

    def list(self, result: Optional[str] = None, market: Optional[str] = None, limit: int = 100) -> List[UserSelection]:
        return self.repo.find_for_user(self.user_id, result=result, market=market, limit=limit)

    def for_fixture(self, fixture_id: int) -> List[UserSelection]:
        return self.repo.find_for_fixture(self.user_id, fixture_id)

    def stats(
        self,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        market: Optional[str] = None,
    ) -> SelectionStats:
        selections = self.repo.find_in_period(self.user_id, date_from, date_to, market)
        return summarize_selections(selections)
