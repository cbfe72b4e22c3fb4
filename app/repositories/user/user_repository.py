"""User account lookups. Emails are stored lower-cased."""
from typing import Optional

from sqlalchemy import or_

from app.models import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):

    def __init__(self, db):
        super().__init__(User, db)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.where_first(User.email == email.lower())

    def find_by_google_id_or_email(self, google_id: str, email: str) -> Optional[User]:
        return self.where_first(or_(User.google_id == google_id, User.email == email.lower()))
