from typing import Optional

import strawberry


@strawberry.type
class AuthUser:
    id: int
    email: str
    name: Optional[str]
    avatar: Optional[str]
    auth_provider: str


@strawberry.type
class AuthResponse:
    token: str
    user: AuthUser
