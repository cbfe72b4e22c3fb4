"""Unit tests for selection settlement arithmetic."""
from types import SimpleNamespace

import pytest

from app.services.betting.settlement import compute_profit, summarize_selections


def selection(result, stake=100.0, odds=2.0):
    return SimpleNamespace(result=result, stake=stake, odds=odds)


class TestComputeProfit:

    @pytest.mark.parametrize("result,expected", [
        ("win", 150.0),
        ("half_win", 75.0),
        ("lose", -100.0),
        ("half_lose", -50.0),
        ("void", 0.0),
    ])
    def test_settled_results(self, result, expected):
        """Should derive profit from stake, odds and result."""
        assert compute_profit(100, 2.5, result) == pytest.approx(expected)

    def test_pending_has_no_profit(self):
        """Should return None while the selection is pending."""
        assert compute_profit(100, 2.5, "pending") is None

    def test_missing_stake_has_no_profit(self):
        """Should return None without a stake, even when settled."""
        assert compute_profit(None, 2.5, "win") is None
        assert compute_profit(None, 2.5, "void") is None


class TestSummarizeSelections:

    def test_empty(self):
        """Should return zeroed stats with no selections."""
        stats = summarize_selections([])

        assert stats.total_selections == 0
        assert stats.win_rate == 0.0
        assert stats.roi == 0.0

    def test_mixed_results(self):
        """Should aggregate counts, stake, profit, win rate and ROI."""
        stats = summarize_selections([
            selection("win", 100, 2.5),        # +150
            selection("lose", 100, 1.8),       # -100
            selection("half_win", 40, 2.0),    # +20
            selection("half_lose", 40, 2.0),   # -20
            selection("void", 50, 3.0),        # 0
            selection("pending", 10, 4.0),     # staked, no profit
        ])

        assert stats.total_selections == 6
        assert stats.wins == 2
        assert stats.losses == 2
        assert stats.pending == 1
        assert stats.win_rate == pytest.approx(50.0)
        assert stats.total_staked == pytest.approx(340.0)
        assert stats.total_profit == pytest.approx(50.0)
        assert stats.roi == pytest.approx(50.0 / 340.0 * 100)

    def test_unstaked_selections_count_but_add_nothing(self):
        """Should count selections without a stake but leave P&L untouched."""
        stats = summarize_selections([selection("win", None, 3.0), selection("lose", 20, 2.0)])

        assert stats.total_selections == 2
        assert stats.wins == 1
        assert stats.total_staked == pytest.approx(20.0)
        assert stats.total_profit == pytest.approx(-20.0)
        assert stats.roi == pytest.approx(-100.0)

    def test_only_pending(self):
        """Should report zero win rate when nothing is settled."""
        stats = summarize_selections([selection("pending"), selection("pending")])

        assert stats.pending == 2
        assert stats.win_rate == 0.0
        assert stats.total_profit == 0.0
        assert stats.roi == 0.0
