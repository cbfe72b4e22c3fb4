"""Fixture matcher for correlating stored fixtures with The Odds API events.

An odds event matches a fixture when, after normalization, the home names
contain one another and the away names contain one another. The first
fixture in input order wins; there is no scoring or edit distance.

Known gap: nothing stops two odds events from matching the same fixture
within one call. Both pairs are returned.
"""
import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from app.services.sync.utils.name_normalizer import names_overlap

logger = logging.getLogger(__name__)


def _fixture_names(fixture: Any) -> Tuple[str, str]:
    return fixture.home_team.name, fixture.away_team.name


def _event_names(event: Any) -> Tuple[str, str]:
    return event.home_team, event.away_team


class FixtureMatcher:
    """
    Match odds events to fixtures by normalized team-name containment.

    Fixtures are expected to expose ``home_team.name`` / ``away_team.name``
    (the ORM relationships); odds events expose ``home_team`` / ``away_team``
    strings (see OddsEvent).
    """

    @staticmethod
    def teams_match(home_a: str, away_a: str, home_b: str, away_b: str) -> bool:
        """Home overlaps home and away overlaps away; swapped fixtures do not match."""
        return names_overlap(home_a, home_b) and names_overlap(away_a, away_b)

    def find_fixture(self, event: Any, fixtures: Sequence[Any]) -> Optional[Any]:
        """First fixture whose teams match the event, or None."""
        event_home, event_away = _event_names(event)
        for fixture in fixtures:
            home, away = _fixture_names(fixture)
            if self.teams_match(event_home, event_away, home, away):
                return fixture
        return None

    def find_event(self, fixture: Any, events: Sequence[Any]) -> Optional[Any]:
        """First odds event whose teams match the fixture, or None."""
        home, away = _fixture_names(fixture)
        for event in events:
            event_home, event_away = _event_names(event)
            if self.teams_match(event_home, event_away, home, away):
                return event
        return None

    def match(self, events: Iterable[Any], fixtures: Sequence[Any]) -> List[Tuple[Any, Any]]:
        """
        Pair each odds event with at most one fixture.

        Events without a matching fixture are skipped.

        Returns:
            List of (event, fixture) tuples in event order
        """
        pairs = []
        skipped = 0
        for event in events:
            fixture = self.find_fixture(event, fixtures)
            if fixture is None:
                skipped += 1
                continue
            pairs.append((event, fixture))

        if skipped:
            logger.debug(f"{skipped} odds events had no matching fixture")
        return pairs
