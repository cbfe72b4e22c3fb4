"""Tests for email and Google sign-in."""
from unittest.mock import AsyncMock, patch

import pytest

from app.core.exceptions import AuthenticationError, ValidationError
from app.core.security import GoogleUserInfo, decode_access_token, verify_password
from app.models import User
from app.services.auth_service import AuthService


def google_info(email="fan@example.com", google_id="g-123"):
    return GoogleUserInfo(
        email=email,
        name="Google Fan",
        picture="https://lh3.example/photo.jpg",
        google_id=google_id,
        email_verified=True,
    )


class TestSignUp:

    def test_creates_account_and_token(self, db_session):
        """Should store a lower-cased email and return a valid token."""
        result = AuthService(db_session).sign_up("New.Fan@Example.com", "Password1", "New Fan")

        assert result.user.email == "new.fan@example.com"
        assert result.user.auth_provider == "email"
        assert verify_password("Password1", result.user.password_hash)

        claims = decode_access_token(result.token)
        assert claims["userId"] == result.user.id
        assert claims["email"] == "new.fan@example.com"

    def test_rejects_invalid_email(self, db_session):
        """Should reject a malformed email address."""
        with pytest.raises(ValidationError, match="Invalid email address"):
            AuthService(db_session).sign_up("not-an-email", "Password1")

    def test_rejects_weak_password(self, db_session):
        """Should list every password policy violation."""
        with pytest.raises(ValidationError) as excinfo:
            AuthService(db_session).sign_up("fan2@example.com", "short")

        assert "at least 8 characters" in excinfo.value.message
        assert "uppercase" in excinfo.value.message
        assert "number" in excinfo.value.message

    def test_rejects_duplicate_email(self, db_session, user):
        """Should refuse a second account for the same email."""
        with pytest.raises(ValidationError, match="already exists"):
            AuthService(db_session).sign_up("FAN@example.com", "Password1")


class TestLogin:

    def test_valid_credentials(self, db_session, user):
        """Should return a token for the right password."""
        result = AuthService(db_session).login("fan@example.com", "Password1")

        assert result.user.id == user.id
        assert decode_access_token(result.token)["userId"] == user.id

    def test_wrong_password(self, db_session, user):
        """Should reject a wrong password with a generic message."""
        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            AuthService(db_session).login("fan@example.com", "Password2")

    def test_unknown_email(self, db_session):
        """Should reject an unknown email with the same generic message."""
        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            AuthService(db_session).login("nobody@example.com", "Password1")

    def test_google_only_account(self, db_session):
        """Should point Google-only accounts at Google sign-in."""
        db_session.add(User(email="g@example.com", google_id="g-1", auth_provider="google"))
        db_session.commit()

        with pytest.raises(AuthenticationError, match="Google Sign-In"):
            AuthService(db_session).login("g@example.com", "Password1")


class TestGoogleAuth:

    @pytest.mark.asyncio
    async def test_creates_google_account(self, db_session):
        """Should create a verified google account on first sign-in."""
        with patch(
            "app.services.auth_service.verify_google_token",
            AsyncMock(return_value=google_info(email="new@example.com")),
        ):
            result = await AuthService(db_session).google_auth("token")

        assert result.user.auth_provider == "google"
        assert result.user.google_id == "g-123"
        assert result.user.email_verified is True
        assert result.user.password_hash is None

    @pytest.mark.asyncio
    async def test_links_existing_email_account(self, db_session, user):
        """Should attach the Google ID to an existing email account."""
        with patch(
            "app.services.auth_service.verify_google_token",
            AsyncMock(return_value=google_info()),
        ):
            result = await AuthService(db_session).google_auth("token")

        assert result.user.id == user.id
        assert result.user.google_id == "g-123"
        assert result.user.avatar == "https://lh3.example/photo.jpg"
        assert result.user.auth_provider == "email"
        assert db_session.query(User).count() == 1

    @pytest.mark.asyncio
    async def test_invalid_token(self, db_session):
        """Should reject a token Google does not accept."""
        with patch("app.services.auth_service.verify_google_token", AsyncMock(return_value=None)):
            with pytest.raises(AuthenticationError, match="Invalid Google token"):
                await AuthService(db_session).google_auth("bad")


class TestProfile:

    def test_update_profile_keeps_omitted_fields(self, db_session, user):
        """Should only change the fields provided."""
        updated = AuthService(db_session).update_profile(user.id, avatar="https://img.example/a.png")

        assert updated.avatar == "https://img.example/a.png"
        assert updated.name == "Fan"

    def test_change_password(self, db_session, user):
        """Should replace the hash when the current password is right."""
        service = AuthService(db_session)

        assert service.change_password(user.id, "Password1", "Password2") is True
        assert service.login("fan@example.com", "Password2").user.id == user.id

    def test_change_password_wrong_current(self, db_session, user):
        """Should refuse when the current password is wrong."""
        with pytest.raises(ValidationError, match="Current password is incorrect"):
            AuthService(db_session).change_password(user.id, "nope", "Password2")

    def test_get_user_without_id(self, db_session):
        """Should return None when no user ID is given."""
        assert AuthService(db_session).get_user(None) is None
