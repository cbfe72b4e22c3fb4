"""Account and sync-status queries."""
from typing import List, Optional

import strawberry
from strawberry.types import Info

from app.api.graphql.types import AuthUser, SyncStatus
from app.services.auth_service import AuthService
from app.services.sync.orchestrator import SyncOrchestrator


@strawberry.type
class SystemQuery:

    @strawberry.field
    def me(self, info: Info) -> Optional[AuthUser]:
        """The token's user, or null when the request is anonymous."""
        return AuthService(info.context.db).get_user(info.context.user_id)

    @strawberry.field
    def sync_status(self, info: Info) -> List[SyncStatus]:
        orchestrator = SyncOrchestrator(info.context.db, info.context.football_service)
        return orchestrator.get_sync_status()
