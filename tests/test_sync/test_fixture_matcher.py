"""Unit tests for FixtureMatcher.

Fixtures and odds events are simple namespaces carrying the attributes the
matcher reads, so no database is needed.
"""
from types import SimpleNamespace

from app.services.sync.matchers.fixture_matcher import FixtureMatcher


def make_fixture(fixture_id, home, away):
    return SimpleNamespace(
        id=fixture_id,
        home_team=SimpleNamespace(name=home),
        away_team=SimpleNamespace(name=away),
    )


def make_event(event_id, home, away):
    return SimpleNamespace(event_id=event_id, home_team=home, away_team=away)


class TestTeamsMatch:

    def test_suffix_differences_match(self):
        """Should match names that differ only by club tokens."""
        assert FixtureMatcher.teams_match(
            "Manchester United FC", "Liverpool FC", "Manchester United", "Liverpool"
        )

    def test_swapped_sides_do_not_match(self):
        """Should not match when home and away are reversed."""
        assert not FixtureMatcher.teams_match(
            "Liverpool", "Manchester United", "Manchester United", "Liverpool"
        )

    def test_one_side_only_does_not_match(self):
        """Should require both sides to overlap."""
        assert not FixtureMatcher.teams_match("Arsenal", "Chelsea", "Arsenal", "Liverpool")


class TestFindFixture:

    def test_finds_matching_fixture(self):
        """Should return the fixture whose teams match the event."""
        fixtures = [
            make_fixture(1, "Arsenal", "Chelsea"),
            make_fixture(2, "Manchester United", "Liverpool"),
        ]
        event = make_event("e1", "Manchester United FC", "Liverpool FC")

        assert FixtureMatcher().find_fixture(event, fixtures).id == 2

    def test_first_match_wins(self):
        """Should return the first fixture in input order when several match."""
        fixtures = [
            make_fixture(1, "Manchester City", "Everton"),
            make_fixture(2, "Manchester United", "Everton"),
        ]
        event = make_event("e1", "Manchester", "Everton")

        assert FixtureMatcher().find_fixture(event, fixtures).id == 1

    def test_no_match_returns_none(self):
        """Should return None when nothing matches."""
        fixtures = [make_fixture(1, "Arsenal", "Chelsea")]
        event = make_event("e1", "Brighton", "Fulham")

        assert FixtureMatcher().find_fixture(event, fixtures) is None

    def test_empty_fixture_list(self):
        """Should return None with no fixtures."""
        assert FixtureMatcher().find_fixture(make_event("e1", "A", "B"), []) is None


class TestFindEvent:

    def test_finds_matching_event(self):
        """Should return the event whose teams match the fixture."""
        fixture = make_fixture(1, "Arsenal", "Chelsea")
        events = [
            make_event("e1", "Brighton and Hove Albion", "Fulham"),
            make_event("e2", "Arsenal", "Chelsea"),
        ]

        assert FixtureMatcher().find_event(fixture, events).event_id == "e2"

    def test_no_match_returns_none(self):
        """Should return None when no event matches."""
        fixture = make_fixture(1, "Arsenal", "Chelsea")

        assert FixtureMatcher().find_event(fixture, [make_event("e1", "Everton", "Fulham")]) is None


class TestMatch:

    def test_pairs_in_event_order_and_skips_unmatched(self):
        """Should pair matched events and skip the rest."""
        fixtures = [
            make_fixture(1, "Arsenal", "Chelsea"),
            make_fixture(2, "Manchester United", "Liverpool"),
        ]
        events = [
            make_event("e1", "Manchester United", "Liverpool"),
            make_event("e2", "Brentford", "Fulham"),
            make_event("e3", "Arsenal", "Chelsea"),
        ]

        pairs = FixtureMatcher().match(events, fixtures)

        assert [(e.event_id, f.id) for e, f in pairs] == [("e1", 2), ("e3", 1)]

    def test_two_events_can_match_one_fixture(self):
        """Should not deduplicate fixtures across events."""
        fixtures = [make_fixture(1, "Arsenal", "Chelsea")]
        events = [
            make_event("e1", "Arsenal", "Chelsea"),
            make_event("e2", "Arsenal FC", "Chelsea FC"),
        ]

        pairs = FixtureMatcher().match(events, fixtures)

        assert [f.id for _, f in pairs] == [1, 1]

    def test_empty_inputs(self):
        """Should return an empty list for empty inputs."""
        assert FixtureMatcher().match([], []) == []
