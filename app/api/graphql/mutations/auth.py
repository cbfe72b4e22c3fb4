"""Sign-up, login, Google sign-in and profile mutations."""
from typing import Optional

import strawberry
from strawberry.types import Info

from app.api.graphql.context import authenticated_user_id
from app.api.graphql.types import AuthResponse, AuthUser
from app.services.auth_service import AuthResult, AuthService


def _response(result: AuthResult) -> AuthResponse:
    return AuthResponse(token=result.token, user=result.user)


@strawberry.type
class AuthMutation:

    @strawberry.mutation
    def sign_up(self, info: Info, email: str, password: str, name: Optional[str] = None) -> AuthResponse:
        return _response(AuthService(info.context.db).sign_up(email, password, name))

    @strawberry.mutation
    def login(self, info: Info, email: str, password: str) -> AuthResponse:
        return _response(AuthService(info.context.db).login(email, password))

    @strawberry.mutation
    async def google_auth(self, info: Info, id_token: str) -> AuthResponse:
        """Accepts either a Google ID token or an OAuth access token."""
        return _response(await AuthService(info.context.db).google_auth(id_token))

    @strawberry.mutation
    def update_profile(
        self,
        info: Info,
        name: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> AuthUser:
        user_id = authenticated_user_id(info)
        return AuthService(info.context.db).update_profile(user_id, name=name, avatar=avatar)

    @strawberry.mutation
    def change_password(self, info: Info, current_password: str, new_password: str) -> bool:
        user_id = authenticated_user_id(info)
        return AuthService(info.context.db).change_password(user_id, current_password, new_password)
