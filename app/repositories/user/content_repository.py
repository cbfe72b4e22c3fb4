"""
Repositories for user-owned content: notes, favorites, saved screens,
selections and alerts.
"""
from datetime import datetime
from typing import List, Optional

from app.models import (
    Alert, FavoriteLeague, FavoriteTeam, League, MatchNote, SavedScreen, Team, UserSelection,
)
from app.repositories.base import BaseRepository


class NoteRepository(BaseRepository[MatchNote]):

    def __init__(self, db):
        super().__init__(MatchNote, db)

    def find_owned(self, note_id: int, user_id: int) -> Optional[MatchNote]:
        return self.where_first(MatchNote.id == note_id, MatchNote.user_id == user_id)

    def find_for_fixture(self, fixture_id: int, user_id: int) -> List[MatchNote]:
        return self.where(
            MatchNote.fixture_id == fixture_id,
            MatchNote.user_id == user_id,
            order_by="-created_at",
        )

    def find_for_user(self, user_id: int, tag: Optional[str] = None) -> List[MatchNote]:
        """A user's notes, most recently edited first; ``tag`` keeps notes carrying it."""
        notes = self.where(MatchNote.user_id == user_id, order_by="-updated_at")
        if tag:
            # tags is a JSON list; membership is checked here rather than in SQL
            notes = [n for n in notes if tag in (n.tags or [])]
        return notes


class FavoriteRepository:
    """Favorite teams and leagues; both tables share the toggle semantics."""

    def __init__(self, db):
        self.db = db

    def _toggle(self, model, user_id: int, **target) -> bool:
        existing = self.db.query(model).filter_by(user_id=user_id, **target).first()
        if existing:
            self.db.delete(existing)
            self.db.commit()
            return False

        self.db.add(model(user_id=user_id, **target))
        self.db.commit()
        return True

    def toggle_team(self, user_id: int, team_id: int) -> bool:
        """Add or remove a favorite team. Returns True when it is now a favorite."""
        return self._toggle(FavoriteTeam, user_id, team_id=team_id)

    def toggle_league(self, user_id: int, league_id: int) -> bool:
        return self._toggle(FavoriteLeague, user_id, league_id=league_id)

    def teams(self, user_id: int) -> List[Team]:
        favorites = self.db.query(FavoriteTeam).filter(FavoriteTeam.user_id == user_id).all()
        return [f.team for f in favorites]

    def leagues(self, user_id: int) -> List[League]:
        favorites = self.db.query(FavoriteLeague).filter(FavoriteLeague.user_id == user_id).all()
        return [f.league for f in favorites]

    def is_team_favorite(self, user_id: int, team_id: int) -> bool:
        return self.db.query(FavoriteTeam.id).filter_by(user_id=user_id, team_id=team_id).first() is not None

    def is_league_favorite(self, user_id: int, league_id: int) -> bool:
        return self.db.query(FavoriteLeague.id).filter_by(user_id=user_id, league_id=league_id).first() is not None


class SavedScreenRepository(BaseRepository[SavedScreen]):

    def __init__(self, db):
        super().__init__(SavedScreen, db)

    def find_owned(self, screen_id: int, user_id: int) -> Optional[SavedScreen]:
        return self.where_first(SavedScreen.id == screen_id, SavedScreen.user_id == user_id)

    def find_for_user(self, user_id: int) -> List[SavedScreen]:
        return self.where(SavedScreen.user_id == user_id, order_by="-updated_at")


class SelectionRepository(BaseRepository[UserSelection]):

    def __init__(self, db):
        super().__init__(UserSelection, db)

    def find_owned(self, selection_id: int, user_id: int) -> Optional[UserSelection]:
        return self.where_first(UserSelection.id == selection_id, UserSelection.user_id == user_id)

    def find_for_user(
        self,
        user_id: int,
        result: Optional[str] = None,
        market: Optional[str] = None,
        limit: int = 100,
    ) -> List[UserSelection]:
        query = self.query().filter(UserSelection.user_id == user_id)
        if result:
            query = query.filter(UserSelection.result == result)
        if market:
            query = query.filter(UserSelection.market == market)
        return query.order_by(UserSelection.created_at.desc()).limit(limit).all()

    def find_for_fixture(self, user_id: int, fixture_id: int) -> List[UserSelection]:
        return self.where(
            UserSelection.user_id == user_id,
            UserSelection.fixture_id == fixture_id,
            order_by="-created_at",
        )

    def find_in_period(
        self,
        user_id: int,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        market: Optional[str] = None,
    ) -> List[UserSelection]:
        """Selections created within an inclusive window, for P&L stats."""
        query = self.query().filter(UserSelection.user_id == user_id)
        if date_from:
            query = query.filter(UserSelection.created_at >= date_from)
        if date_to:
            query = query.filter(UserSelection.created_at <= date_to)
        if market:
            query = query.filter(UserSelection.market == market)
        return query.all()


class AlertRepository(BaseRepository[Alert]):

    def __init__(self, db):
        super().__init__(Alert, db)

    def find_owned(self, alert_id: int, user_id: int) -> Optional[Alert]:
        return self.where_first(Alert.id == alert_id, Alert.user_id == user_id)

    def find_for_user(
        self,
        user_id: int,
        alert_type: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> List[Alert]:
        criterion = [Alert.user_id == user_id]
        if alert_type:
            criterion.append(Alert.type == alert_type)
        if is_active is not None:
            criterion.append(Alert.is_active.is_(is_active))
        return self.where(*criterion, order_by="-created_at")
