"""GraphQL types for stored odds snapshots and live Odds API prices."""
from datetime import datetime
from typing import TYPE_CHECKING, Annotated, List, Optional

import strawberry

from app.services.core.odds_api_service import OddsEvent
from app.utils.odds import calculate_implied_probabilities, percent_change

if TYPE_CHECKING:
    from app.api.graphql.types.reference import Fixture
    from app.models import OddsSnapshot as OddsSnapshotRow


@strawberry.type
class OddsSnapshot:
    id: int
    fixture_id: int
    bookmaker: str
    market: str
    home_odds: Optional[float]
    draw_odds: Optional[float]
    away_odds: Optional[float]
    over_odds: Optional[float]
    under_odds: Optional[float]
    yes_odds: Optional[float]
    no_odds: Optional[float]
    line: Optional[float]
    is_opening: bool
    is_closing: bool
    captured_at: datetime
    fixture: Annotated["Fixture", strawberry.lazy("app.api.graphql.types.reference")]


@strawberry.type
class LiveOddsMarket:
    """One bookmaker market; only the fields of that market are set."""
    home: Optional[float] = None
    draw: Optional[float] = None
    away: Optional[float] = None
    home_point: Optional[float] = None
    away_point: Optional[float] = None
    over: Optional[float] = None
    under: Optional[float] = None
    point: Optional[float] = None


@strawberry.type
class LiveBookmakerOdds:
    key: str
    name: str
    last_update: str
    h2h: Optional[LiveOddsMarket]
    spreads: Optional[LiveOddsMarket]
    totals: Optional[LiveOddsMarket]


@strawberry.type
class ConsensusOdds:
    home: Optional[float] = None
    draw: Optional[float] = None
    away: Optional[float] = None
    over: Optional[float] = None
    under: Optional[float] = None
    point: Optional[float] = None


@strawberry.type
class ImpliedProbabilities:
    home: float
    draw: float
    away: float
    overround: float


@strawberry.type
class LiveOdds:
    event_id: str
    home_team: str
    away_team: str
    commence_time: str
    bookmakers: List[LiveBookmakerOdds]
    consensus: Optional[ConsensusOdds]
    implied_probabilities: Optional[ImpliedProbabilities]

    @classmethod
    def from_event(cls, event: OddsEvent) -> "LiveOdds":
        """
        Flatten a parsed Odds API event.

        Consensus and implied probabilities are only present when the event
        has a consensus 1X2 price; missing totals read as null.
        """
        bookmakers = [
            LiveBookmakerOdds(
                key=b.key,
                name=b.name,
                last_update=b.last_update,
                h2h=LiveOddsMarket(home=b.h2h.home, draw=b.h2h.draw, away=b.h2h.away) if b.h2h else None,
                spreads=LiveOddsMarket(
                    home=b.spreads.home,
                    away=b.spreads.away,
                    home_point=b.spreads.home_point,
                    away_point=b.spreads.away_point,
                ) if b.spreads else None,
                totals=LiveOddsMarket(
                    over=b.totals.over, under=b.totals.under, point=b.totals.point
                ) if b.totals else None,
            )
            for b in event.bookmakers
        ]

        consensus = None
        implied = None
        h2h = event.consensus.h2h
        if h2h:
            totals = event.consensus.totals
            consensus = ConsensusOdds(
                home=h2h.home,
                draw=h2h.draw,
                away=h2h.away,
                over=(totals.over or None) if totals else None,
                under=(totals.under or None) if totals else None,
                point=(totals.point or None) if totals else None,
            )
            probabilities = calculate_implied_probabilities(h2h.home, h2h.draw, h2h.away)
            if probabilities:
                implied = ImpliedProbabilities(**probabilities)

        return cls(
            event_id=event.event_id,
            home_team=event.home_team,
            away_team=event.away_team,
            commence_time=event.commence_time,
            bookmakers=bookmakers,
            consensus=consensus,
            implied_probabilities=implied,
        )


_PRICE_COLUMNS = {
    "home": "home_odds",
    "draw": "draw_odds",
    "away": "away_odds",
    "over": "over_odds",
    "under": "under_odds",
    "point": "line",
}


def _prices(row: "OddsSnapshotRow") -> dict:
    return {name: getattr(row, column) for name, column in _PRICE_COLUMNS.items()}


@strawberry.type
class OddsMovement:
    market: str
    opening: ConsensusOdds
    current: ConsensusOdds
    movement: ConsensusOdds
    movement_percent: ConsensusOdds

    @classmethod
    def between(cls, market: str, opening: "OddsSnapshotRow", current: "OddsSnapshotRow") -> "OddsMovement":
        """Absolute and percentage change per price from opening to current."""
        before = _prices(opening)
        after = _prices(current)

        movement = {}
        movement_percent = {}
        for name in _PRICE_COLUMNS:
            old, new = before[name], after[name]
            movement[name] = round(new - old, 2) if old is not None and new is not None else None
            movement_percent[name] = percent_change(old, new)

        return cls(
            market=market,
            opening=ConsensusOdds(**before),
            current=ConsensusOdds(**after),
            movement=ConsensusOdds(**movement),
            movement_percent=ConsensusOdds(**movement_percent),
        )


@strawberry.type
class OddsSyncResult:
    success: bool
    message: str
    snapshots_created: Optional[int] = None
    events_matched: Optional[int] = None
