"""
GraphQL request context.

The bearer token is decoded once per request. A missing or invalid token
leaves ``user_id`` as None; authorization is decided by each resolver.
"""
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext
from strawberry.types import Info

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import AuthenticationError
from app.core.security import user_id_from_authorization
from app.services.core.football_api_service import FootballApiService, get_football_service
from app.services.core.odds_api_service import OddsApiService, get_odds_service


class GraphQLContext(BaseContext):

    def __init__(
        self,
        db: Session,
        user_id: Optional[int],
        football_service: FootballApiService,
        odds_service: OddsApiService,
    ):
        super().__init__()
        self.db = db
        self.user_id = user_id
        self.football_service = football_service
        self.odds_service = odds_service


async def get_context(
    request: Request,
    db: Session = Depends(get_db),
    football_service: FootballApiService = Depends(get_football_service),
    odds_service: OddsApiService = Depends(get_odds_service),
) -> GraphQLContext:
    """FastAPI dependency building the context for every GraphQL request."""
    user_id = user_id_from_authorization(request.headers.get("Authorization"))
    return GraphQLContext(db, user_id, football_service, odds_service)


def content_user_id(info: Info) -> int:
    """
    User owning notes, favorites, screens, selections and alerts.

    Falls back to DEFAULT_USER_ID when no token was sent and one is
    configured.

    Raises:
        AuthenticationError: No token and no fallback user
    """
    user_id = info.context.user_id or settings.DEFAULT_USER_ID
    if user_id is None:
        raise AuthenticationError()
    return user_id


def authenticated_user_id(info: Info) -> int:
    """Token-authenticated user only; no development fallback."""
    if info.context.user_id is None:
        raise AuthenticationError()
    return info.context.user_id
