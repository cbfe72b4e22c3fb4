"""
Betting services package.

Selection tracking (bets a user records against fixtures) and the pure
settlement arithmetic behind profit and P&L stats.
"""

from app.services.betting.settlement import compute_profit, summarize_selections, SelectionStats
from app.services.betting.selection_service import SelectionService

__all__ = [
    "compute_profit",
    "summarize_selections",
    "SelectionStats",
    "SelectionService",
]
