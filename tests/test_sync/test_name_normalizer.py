"""Unit tests for name_normalizer utility.

Test Strategy:
1. Test club token removal (FC, AFC, CF, SC, AC)
2. Test lowercase conversion and whitespace collapsing
3. Test substring token removal inside words
4. Test containment check used by the matcher
5. Test edge cases (empty strings, already normalized names)

Each test follows the pattern:
- Given: An input name with specific issues
- When: normalize_team_name() is called
- Then: Output matches expected normalized form
"""
import pytest
from app.services.sync.utils.name_normalizer import names_overlap, normalize_team_name


class TestNormalizeTeamName:
    """Test suite for team name normalization."""

    # Club Token Removal Tests
    # ─────────────────────────────────────────────────────────────

    def test_removes_trailing_fc(self):
        """Should drop 'FC' from the end of a club name."""
        assert normalize_team_name("Manchester United FC") == "manchester united"

    def test_removes_leading_afc(self):
        """Should drop 'AFC' from the start of a club name."""
        assert normalize_team_name("AFC Bournemouth") == "bournemouth"

    def test_removes_cf_and_ac(self):
        """Should drop 'CF' and 'AC' tokens."""
        assert normalize_team_name("Valencia CF") == "valencia"
        assert normalize_team_name("AC Milan") == "milan"

    # Case and Whitespace Tests
    # ─────────────────────────────────────────────────────────────

    def test_lowercases(self):
        """Should lower-case the whole name."""
        assert normalize_team_name("LIVERPOOL") == "liverpool"

    def test_collapses_whitespace(self):
        """Should collapse runs of whitespace and trim the ends."""
        assert normalize_team_name("  Real   Madrid  ") == "real madrid"

    # Substring Removal Tests
    # ─────────────────────────────────────────────────────────────

    def test_removes_tokens_inside_words(self):
        """Should remove token letters even in the middle of a word."""
        assert normalize_team_name("Racing Club") == "ring club"
        assert normalize_team_name("Bracknell") == "brknell"

    # Edge Cases
    # ─────────────────────────────────────────────────────────────

    def test_empty_string(self):
        """Should return an empty string for empty input."""
        assert normalize_team_name("") == ""

    def test_already_normalized(self):
        """Should leave an already normalized name unchanged."""
        assert normalize_team_name("arsenal") == "arsenal"

    def test_is_idempotent(self):
        """Should be stable when applied twice."""
        once = normalize_team_name("Paris Saint Germain FC")
        assert normalize_team_name(once) == once


class TestNamesOverlap:
    """Test suite for normalized containment."""

    @pytest.mark.parametrize("a,b", [
        ("Manchester United", "Manchester United FC"),
        ("Wolves", "Wolverhampton Wanderers Wolves"),
        ("Tottenham Hotspur", "Tottenham"),
    ])
    def test_contained_names_overlap(self, a, b):
        """Should match when either normalized name contains the other."""
        assert names_overlap(a, b)
        assert names_overlap(b, a)

    def test_distinct_names_do_not_overlap(self):
        """Should not match unrelated clubs."""
        assert not names_overlap("Arsenal", "Chelsea")

    def test_shared_prefix_overlaps(self):
        """Should match 'Manchester' against both Manchester clubs."""
        assert names_overlap("Manchester", "Manchester City")
        assert names_overlap("Manchester", "Manchester United")
