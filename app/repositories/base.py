"""
Shared data access for the football and user-content repositories.

Resolvers and sync jobs never build queries themselves; each model gets a
repository that subclasses ``BaseRepository`` and adds the lookups it needs:

    class TeamRepository(BaseRepository[Team]):
        def search(self, name: str) -> List[Team]:
            return self.where(Team.name.ilike(f"%{name}%"), order_by="name")
"""
from abc import ABC
from typing import TypeVar, Generic, Type, Optional, List, Any
from sqlalchemy import desc
from sqlalchemy.orm import Query, Session

T = TypeVar("T")


class BaseRepository(Generic[T], ABC):
    """Generic lookups and writes over one mapped model."""

    def __init__(self, model_type: Type[T], db: Session):
        self.model_type = model_type
        self.db = db

    def find_by_id(self, id: int) -> Optional[T]:
        return self.db.get(self.model_type, id)

    def create(self, **kwargs) -> T:
        """Insert a row, commit, and reload server-generated columns."""
        instance = self.model_type(**kwargs)
        self.db.add(instance)
        self.db.commit()
        self.db.refresh(instance)
        return instance

    def update(self, instance: T, **kwargs: Any) -> T:
        """
        Apply the non-None keyword arguments to ``instance`` and commit.

        Mutation arguments the client left out arrive as None, so skipping
        them keeps the stored value.
        """
        for key, value in kwargs.items():
            if value is not None and hasattr(instance, key):
                setattr(instance, key, value)
        self.db.commit()
        self.db.refresh(instance)
        return instance

    def delete(self, instance: T) -> None:
        self.db.delete(instance)
        self.db.commit()

    # ========================================================================
    # Query Builders
    # ========================================================================

    def query(self) -> Query:
        return self.db.query(self.model_type)

    def order(self, query: Query, order_by: Optional[str]) -> Query:
        """Order by a column name; a leading '-' sorts descending."""
        if not order_by:
            return query
        if order_by.startswith('-'):
            return query.order_by(desc(getattr(self.model_type, order_by[1:])))
        return query.order_by(getattr(self.model_type, order_by))

    def where(self, *criterion, order_by: Optional[str] = None) -> List[T]:
        return self.order(self.query().filter(*criterion), order_by).all()

    def where_first(self, *criterion) -> Optional[T]:
        return self.query().filter(*criterion).first()
