"""Queries over the caller's notes, favorites, screens, selections and alerts."""
from datetime import datetime
from typing import List, Optional

import strawberry
from strawberry.types import Info

from app.api.graphql.context import content_user_id
from app.api.graphql.types import (
    Alert, League, MatchNote, SavedScreen, SelectionStats, Team, UserSelection,
)
from app.repositories import (
    AlertRepository, FavoriteRepository, NoteRepository, SavedScreenRepository,
)
from app.services.betting import SelectionService
from app.utils.timezone import to_naive_utc


@strawberry.type
class UserContentQuery:

    @strawberry.field
    def match_notes(self, info: Info, fixture_id: int) -> List[MatchNote]:
        return NoteRepository(info.context.db).find_for_fixture(fixture_id, content_user_id(info))

    @strawberry.field
    def user_notes(self, info: Info, tag: Optional[str] = None) -> List[MatchNote]:
        return NoteRepository(info.context.db).find_for_user(content_user_id(info), tag)

    @strawberry.field
    def favorite_teams(self, info: Info) -> List[Team]:
        return FavoriteRepository(info.context.db).teams(content_user_id(info))

    @strawberry.field
    def favorite_leagues(self, info: Info) -> List[League]:
        return FavoriteRepository(info.context.db).leagues(content_user_id(info))

    @strawberry.field
    def saved_screens(self, info: Info) -> List[SavedScreen]:
        return SavedScreenRepository(info.context.db).find_for_user(content_user_id(info))

    @strawberry.field
    def saved_screen(self, info: Info, id: int) -> Optional[SavedScreen]:
        return SavedScreenRepository(info.context.db).find_owned(id, content_user_id(info))

    @strawberry.field
    def selections(
        self,
        info: Info,
        result: Optional[str] = None,
        market: Optional[str] = None,
        limit: int = 100,
    ) -> List[UserSelection]:
        service = SelectionService(info.context.db, content_user_id(info))
        return service.list(result=result, market=market, limit=limit)

    @strawberry.field
    def fixture_selections(self, info: Info, fixture_id: int) -> List[UserSelection]:
        return SelectionService(info.context.db, content_user_id(info)).for_fixture(fixture_id)

    @strawberry.field
    def selection_stats(
        self,
        info: Info,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        market: Optional[str] = None,
    ) -> SelectionStats:
        """P&L summary over selections created in the window."""
        service = SelectionService(info.context.db, content_user_id(info))
        stats = service.stats(to_naive_utc(date_from), to_naive_utc(date_to), market)
        return SelectionStats(**vars(stats))

    @strawberry.field
    def alerts(self, info: Info, type: Optional[str] = None, is_active: Optional[bool] = None) -> List[Alert]:
        return AlertRepository(info.context.db).find_for_user(
            content_user_id(info), alert_type=type, is_active=is_active
        )

    @strawberry.field
    def alert(self, info: Info, id: int) -> Optional[Alert]:
        return AlertRepository(info.context.db).find_owned(id, content_user_id(info))
