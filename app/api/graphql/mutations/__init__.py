from app.api.graphql.mutations.auth import AuthMutation
from app.api.graphql.mutations.sync import SyncMutation
from app.api.graphql.mutations.user_content import (
    AlertMutation, FavoriteMutation, NoteMutation, ScreenMutation, SelectionMutation,
)

__all__ = [
    "AlertMutation",
    "AuthMutation",
    "FavoriteMutation",
    "NoteMutation",
    "ScreenMutation",
    "SelectionMutation",
    "SyncMutation",
]
