"""
Email and Google sign-in.

Every successful sign-in returns a fresh bearer token together with the
user row. Failures raise ValidationError or AuthenticationError with a
message meant for the end user.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, ValidationError
from app.core.security import (
    create_access_token,
    hash_password,
    validate_email,
    validate_password,
    verify_google_token,
    verify_password,
)
from app.models import User
from app.repositories.user import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    token: str
    user: User


class AuthService:

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)

    def _issue(self, user: User) -> AuthResult:
        return AuthResult(token=create_access_token(user.id, user.email), user=user)

    def sign_up(self, email: str, password: str, name: Optional[str] = None) -> AuthResult:
        """
        Create an email account.

        Raises:
            ValidationError: Bad email, weak password, or the email is taken
        """
        if not validate_email(email):
            raise ValidationError("Invalid email address")

        errors = validate_password(password)
        if errors:
            raise ValidationError(". ".join(errors))

        if self.users.find_by_email(email):
            raise ValidationError("An account with this email already exists")

        user = self.users.create(
            email=email.lower(),
            name=name or None,
            password_hash=hash_password(password),
            auth_provider="email",
            email_verified=False,
        )
        logger.info(f"Created email account {user.id}")
        return self._issue(user)

    def login(self, email: str, password: str) -> AuthResult:
        user = self.users.find_by_email(email)
        if user is None:
            raise AuthenticationError("Invalid email or password")

        if not user.password_hash:
            raise AuthenticationError(
                "This account uses Google Sign-In. Please use the Google button to log in."
            )

        if not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        return self._issue(user)

    async def google_auth(self, token: str) -> AuthResult:
        """
        Sign in with a Google ID token or access token.

        An existing account with the same Google ID or email is reused; an
        email account without a Google ID gets linked (existing avatar kept,
        email marked verified). Otherwise a ``google`` account is created.
        """
        info = await verify_google_token(token)
        if info is None:
            raise AuthenticationError("Invalid Google token")

        user = self.users.find_by_google_id_or_email(info.google_id, info.email)

        if user is None:
            user = self.users.create(
                email=info.email.lower(),
                name=info.name,
                avatar=info.picture,
                google_id=info.google_id,
                auth_provider="google",
                email_verified=True,
            )
            logger.info(f"Created Google account {user.id}")
        elif not user.google_id:
            user = self.users.update(
                user,
                google_id=info.google_id,
                avatar=user.avatar or info.picture,
                email_verified=True,
            )
            logger.info(f"Linked Google sign-in to account {user.id}")

        return self._issue(user)

    def get_user(self, user_id: Optional[int]) -> Optional[User]:
        if not user_id:
            return None
        return self.users.find_by_id(user_id)

    def update_profile(self, user_id: int, name: Optional[str] = None, avatar: Optional[str] = None) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise AuthenticationError()
        return self.users.update(user, name=name, avatar=avatar)

    def change_password(self, user_id: int, current_password: str, new_password: str) -> bool:
        user = self.users.find_by_id(user_id)
        if user is None or not user.password_hash:
            raise ValidationError("Cannot change password for this account")

        if not verify_password(current_password, user.password_hash):
            raise ValidationError("Current password is incorrect")

        errors = validate_password(new_password)
        if errors:
            raise ValidationError(". ".join(errors))

        self.users.update(user, password_hash=hash_password(new_password))
        return True
