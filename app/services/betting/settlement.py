"""
Selection settlement and P&L aggregation.

Profit is never stored; it is derived from stake, odds and result every time
a selection is read.

| result    | profit                 |
|-----------|------------------------|
| pending   | None                   |
| void      | 0                      |
| win       | stake * (odds - 1)     |
| half_win  | stake * (odds - 1) / 2 |
| lose      | -stake                 |
| half_lose | -stake / 2             |
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

RESULTS = ("pending", "win", "lose", "void", "half_win", "half_lose")
WIN_RESULTS = ("win", "half_win")
LOSS_RESULTS = ("lose", "half_lose")


class SettleableSelection(Protocol):
    stake: Optional[float]
    odds: float
    result: str


def compute_profit(stake: Optional[float], odds: float, result: str) -> Optional[float]:
    """
    Profit of one selection, or None when it cannot be determined yet.

    Examples:
        >>> compute_profit(100, 2.5, "win")
        150.0
        >>> compute_profit(100, 2.5, "half_lose")
        -50.0
        >>> compute_profit(None, 2.5, "win") is None
        True
    """
    if stake is None:
        return None
    if result == "win":
        return stake * (odds - 1)
    if result == "half_win":
        return stake * (odds - 1) / 2
    if result == "lose":
        return -stake
    if result == "half_lose":
        return -stake / 2
    if result == "void":
        return 0.0
    return None


@dataclass
class SelectionStats:
    total_selections: int = 0
    wins: int = 0
    losses: int = 0
    pending: int = 0
    win_rate: float = 0.0
    total_staked: float = 0.0
    total_profit: float = 0.0
    roi: float = 0.0


def summarize_selections(selections: Iterable[SettleableSelection]) -> SelectionStats:
    """
    Aggregate P&L over a set of selections.

    Every non-null stake counts towards total_staked, pending ones included.
    Only settled selections contribute profit. Wins include half wins and
    losses include half losses; void touches neither.
    """
    stats = SelectionStats()

    for selection in selections:
        stats.total_selections += 1
        if selection.stake is not None:
            stats.total_staked += selection.stake

        if selection.result in WIN_RESULTS:
            stats.wins += 1
        elif selection.result in LOSS_RESULTS:
            stats.losses += 1
        elif selection.result == "pending":
            stats.pending += 1

        profit = compute_profit(selection.stake, selection.odds, selection.result)
        if profit is not None:
            stats.total_profit += profit

    settled = stats.wins + stats.losses
    stats.win_rate = stats.wins / settled * 100 if settled else 0.0
    stats.roi = stats.total_profit / stats.total_staked * 100 if stats.total_staked else 0.0
    return stats
