"""
User Repository module.

Repositories for user accounts and user-owned content. Every content
lookup is scoped to the owning user.
"""

from app.repositories.user.user_repository import UserRepository
from app.repositories.user.content_repository import (
    AlertRepository,
    FavoriteRepository,
    NoteRepository,
    SavedScreenRepository,
    SelectionRepository,
)

__all__ = [
    "UserRepository",
    "AlertRepository",
    "FavoriteRepository",
    "NoteRepository",
    "SavedScreenRepository",
    "SelectionRepository",
]
