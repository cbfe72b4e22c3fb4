"""
Decimal odds arithmetic.

All prices are decimal (European) odds. Non-positive prices mean "no price"
and contribute nothing.
"""
from typing import Optional


def odds_to_implied_probability(odds: float) -> float:
    """1 / odds, or 0 for a missing price."""
    if not odds or odds <= 0:
        return 0.0
    return 1.0 / odds


def probability_to_odds(probability: float) -> float:
    if probability <= 0:
        return 0.0
    return 1.0 / probability


def calculate_overround(*odds: float) -> float:
    """Bookmaker margin: sum of implied probabilities minus one."""
    return sum(odds_to_implied_probability(o) for o in odds) - 1.0


def remove_vig(*odds: float) -> list[float]:
    """
    Normalize implied probabilities so they sum to one.

    Example:
        >>> [round(p, 4) for p in remove_vig(2.0, 3.5, 4.0)]
        [0.4828, 0.2759, 0.2414]
    """
    probs = [odds_to_implied_probability(o) for o in odds]
    total = sum(probs)
    if total <= 0:
        return [0.0 for _ in probs]
    return [p / total for p in probs]


def calculate_implied_probabilities(home: float, draw: float, away: float) -> Optional[dict]:
    """
    Vig-free 1X2 probabilities plus the overround, rounded to 4 places.

    Returns None when no side has a positive price.
    """
    if not any(o and o > 0 for o in (home, draw, away)):
        return None

    home_p, draw_p, away_p = remove_vig(home, draw, away)
    return {
        "home": round(home_p, 4),
        "draw": round(draw_p, 4),
        "away": round(away_p, 4),
        "overround": round(calculate_overround(home, draw, away), 4),
    }


def percent_change(opening: Optional[float], current: Optional[float]) -> Optional[float]:
    """Price movement as a percentage of the opening price."""
    if not opening or current is None:
        return None
    return round((current - opening) / opening * 100, 2)
