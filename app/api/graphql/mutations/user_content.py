"""
Writes to the caller's notes, favorites, screens, selections and alerts.

Rows belonging to another user are treated as missing: updates return null
(or raise NotFoundError where the field is non-null) and deletes return
false.
"""
from typing import List, Optional

import strawberry
from strawberry.types import Info

from app.api.graphql.context import content_user_id
from app.api.graphql.types import (
    Alert, AlertConfigInput, MatchNote, NoteInput, SavedScreen, ScreenFiltersInput,
    SelectionResultInput, UserSelection, input_to_json,
)
from app.core.exceptions import NotFoundError
from app.repositories import (
    AlertRepository, FavoriteRepository, NoteRepository, SavedScreenRepository,
)
from app.services.betting import SelectionService


@strawberry.type
class NoteMutation:

    @strawberry.mutation
    def create_note(self, info: Info, input: NoteInput) -> MatchNote:
        return NoteRepository(info.context.db).create(
            fixture_id=input.fixture_id,
            user_id=content_user_id(info),
            content=input.content,
            tags=input.tags or [],
        )

    @strawberry.mutation
    def update_note(self, info: Info, id: int, input: NoteInput) -> MatchNote:
        """Replace content and tags; omitted tags clear the list."""
        repo = NoteRepository(info.context.db)
        note = repo.find_owned(id, content_user_id(info))
        if note is None:
            raise NotFoundError("Note", id)
        return repo.update(note, content=input.content, tags=input.tags or [])

    @strawberry.mutation
    def delete_note(self, info: Info, id: int) -> bool:
        repo = NoteRepository(info.context.db)
        note = repo.find_owned(id, content_user_id(info))
        if note is None:
            return False
        repo.delete(note)
        return True


@strawberry.type
class FavoriteMutation:

    @strawberry.mutation
    def toggle_favorite_team(self, info: Info, team_id: int) -> bool:
        """True when the team is a favorite after the call."""
        return FavoriteRepository(info.context.db).toggle_team(content_user_id(info), team_id)

    @strawberry.mutation
    def toggle_favorite_league(self, info: Info, league_id: int) -> bool:
        return FavoriteRepository(info.context.db).toggle_league(content_user_id(info), league_id)


@strawberry.type
class ScreenMutation:

    @strawberry.mutation
    def create_saved_screen(self, info: Info, name: str, filters: ScreenFiltersInput) -> SavedScreen:
        return SavedScreenRepository(info.context.db).create(
            user_id=content_user_id(info),
            name=name,
            filters=input_to_json(filters),
        )

    @strawberry.mutation
    def update_saved_screen(
        self,
        info: Info,
        id: int,
        name: Optional[str] = None,
        filters: Optional[ScreenFiltersInput] = None,
    ) -> Optional[SavedScreen]:
        repo = SavedScreenRepository(info.context.db)
        screen = repo.find_owned(id, content_user_id(info))
        if screen is None:
            return None
        return repo.update(
            screen,
            name=name,
            filters=input_to_json(filters) if filters is not None else None,
        )

    @strawberry.mutation
    def delete_saved_screen(self, info: Info, id: int) -> bool:
        repo = SavedScreenRepository(info.context.db)
        screen = repo.find_owned(id, content_user_id(info))
        if screen is None:
            return False
        repo.delete(screen)
        return True


@strawberry.type
class SelectionMutation:

    @strawberry.mutation
    def create_selection(
        self,
        info: Info,
        fixture_id: int,
        market: str,
        selection: str,
        odds: float,
        stake: Optional[float] = None,
        opening_odds: Optional[float] = None,
    ) -> UserSelection:
        return SelectionService(info.context.db, content_user_id(info)).create(
            fixture_id=fixture_id,
            market=market,
            selection=selection,
            odds=odds,
            stake=stake,
            opening_odds=opening_odds,
        )

    @strawberry.mutation
    def update_selection(
        self,
        info: Info,
        id: int,
        result: Optional[str] = None,
        closing_odds: Optional[float] = None,
        stake: Optional[float] = None,
    ) -> Optional[UserSelection]:
        return SelectionService(info.context.db, content_user_id(info)).update(
            id, result=result, closing_odds=closing_odds, stake=stake
        )

    @strawberry.mutation
    def delete_selection(self, info: Info, id: int) -> bool:
        return SelectionService(info.context.db, content_user_id(info)).delete(id)

    @strawberry.mutation
    def settle_selections(self, info: Info, fixture_id: int, results: List[SelectionResultInput]) -> int:
        """Apply results in bulk; returns how many selections were updated."""
        service = SelectionService(info.context.db, content_user_id(info))
        return service.settle(
            fixture_id,
            [{"selection_id": r.selection_id, "result": r.result} for r in results],
        )


@strawberry.type
class AlertMutation:

    @strawberry.mutation
    def create_alert(self, info: Info, type: str, config: AlertConfigInput) -> Alert:
        return AlertRepository(info.context.db).create(
            user_id=content_user_id(info),
            type=type,
            config=input_to_json(config),
            is_active=True,
        )

    @strawberry.mutation
    def update_alert(
        self,
        info: Info,
        id: int,
        type: Optional[str] = None,
        config: Optional[AlertConfigInput] = None,
        is_active: Optional[bool] = None,
    ) -> Optional[Alert]:
        repo = AlertRepository(info.context.db)
        alert = repo.find_owned(id, content_user_id(info))
        if alert is None:
            return None
        return repo.update(
            alert,
            type=type,
            config=input_to_json(config) if config is not None else None,
            is_active=is_active,
        )

    @strawberry.mutation
    def delete_alert(self, info: Info, id: int) -> bool:
        repo = AlertRepository(info.context.db)
        alert = repo.find_owned(id, content_user_id(info))
        if alert is None:
            return False
        repo.delete(alert)
        return True

    @strawberry.mutation
    def toggle_alert(self, info: Info, id: int) -> Optional[Alert]:
        repo = AlertRepository(info.context.db)
        alert = repo.find_owned(id, content_user_id(info))
        if alert is None:
            return None
        return repo.update(alert, is_active=not alert.is_active)
