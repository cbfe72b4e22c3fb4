"""GraphQL types for per-user content: notes, screens, selections, alerts."""
from datetime import datetime
from typing import TYPE_CHECKING, Annotated, List, Optional

import strawberry
from strawberry.scalars import JSON
from strawberry.utils.str_converters import to_camel_case

from app.services.betting import compute_profit

if TYPE_CHECKING:
    from app.api.graphql.types.reference import Fixture

FixtureRef = Annotated["Fixture", strawberry.lazy("app.api.graphql.types.reference")]


def input_to_json(value) -> dict:
    """Store an input object as camelCase JSON, dropping unset fields."""
    return {
        to_camel_case(name): item
        for name, item in vars(value).items()
        if item is not None
    }


@strawberry.type
class MatchNote:
    id: int
    fixture_id: int
    user_id: int
    content: str
    tags: List[str]
    created_at: datetime
    updated_at: datetime
    fixture: FixtureRef


@strawberry.input
class NoteInput:
    fixture_id: int
    content: str
    tags: Optional[List[str]] = None


@strawberry.type
class SavedScreen:
    id: int
    user_id: int
    name: str
    filters: JSON
    created_at: datetime
    updated_at: datetime


@strawberry.input
class ScreenFiltersInput:
    league_ids: Optional[List[int]] = None
    min_odds: Optional[float] = None
    max_odds: Optional[float] = None
    min_xg_diff: Optional[float] = None
    markets: Optional[List[str]] = None
    form_filter: Optional[str] = None  # good_home, poor_away, ...
    value_threshold: Optional[float] = None  # minimum edge %
    time_window: Optional[str] = None  # today, tomorrow, week


@strawberry.type
class UserSelection:
    id: int
    user_id: int
    fixture_id: int
    market: str
    selection: str
    odds: float
    opening_odds: Optional[float]
    closing_odds: Optional[float]
    stake: Optional[float]
    result: str
    created_at: datetime
    fixture: Optional[FixtureRef]

    @strawberry.field
    def profit(self) -> Optional[float]:
        return compute_profit(self.stake, self.odds, self.result)


@strawberry.input
class SelectionResultInput:
    selection_id: int
    result: str


@strawberry.type
class SelectionStats:
    total_selections: int
    wins: int
    losses: int
    pending: int
    win_rate: float
    total_staked: float
    total_profit: float
    roi: float


@strawberry.type
class Alert:
    id: int
    user_id: int
    type: str
    config: JSON
    is_active: bool
    last_triggered: Optional[datetime]
    created_at: datetime
    updated_at: datetime


@strawberry.input
class AlertConfigInput:
    fixture_id: Optional[int] = None
    team_id: Optional[int] = None
    league_id: Optional[int] = None
    threshold: Optional[float] = None  # odds movement %
    market: Optional[str] = None
    minutes_before: Optional[int] = None  # kickoff alerts
