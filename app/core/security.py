"""
Password hashing, JWT issuance and Google token verification.

Tokens carry ``userId`` and ``email`` claims. Decoding never raises: an
invalid or expired token simply yields ``None`` so the request proceeds
unauthenticated.
"""
import asyncio
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import httpx
import jwt
from google.auth.exceptions import GoogleAuthError
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

BCRYPT_ROUNDS = 12
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class GoogleUserInfo:
    email: str
    name: str
    picture: str
    google_id: str
    email_verified: bool


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(user_id: int, email: str) -> str:
    """Sign a bearer token valid for JWT_EXPIRES_DAYS."""
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "email": email,
        "iat": now,
        "exp": now + timedelta(days=settings.JWT_EXPIRES_DAYS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Return the verified claims, or None for an invalid or expired token."""
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        logger.debug(f"Rejected bearer token: {e}")
        return None


def user_id_from_authorization(header: Optional[str]) -> Optional[int]:
    """Extract the user ID from an ``Authorization: Bearer <token>`` header."""
    if not header or not header.startswith("Bearer "):
        return None
    claims = decode_access_token(header[len("Bearer "):].strip())
    if not claims:
        return None
    user_id = claims.get("userId")
    return int(user_id) if user_id is not None else None


def validate_password(password: str) -> list[str]:
    """Return the list of password policy violations (empty when valid)."""
    errors = []
    if len(password) < 8:
        errors.append("Password must be at least 8 characters long")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        errors.append("Password must contain at least one number")
    return errors


def validate_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def _verify_id_token(token: str) -> dict:
    # google-auth fetches Google's signing certificates with a blocking requests call
    return google_id_token.verify_oauth2_token(
        token, google_requests.Request(), settings.GOOGLE_CLIENT_ID or None
    )


async def verify_google_token(
    token: str, transport: Optional[httpx.AsyncBaseTransport] = None
) -> Optional[GoogleUserInfo]:
    """
    Verify a Google credential.

    Accepts either an ID token (verified against GOOGLE_CLIENT_ID) or an
    OAuth access token from the implicit flow, which is exchanged at the
    userinfo endpoint. Returns None when neither succeeds.
    """
    try:
        # Run blocking verification in thread pool
        loop = asyncio.get_running_loop()
        claims = await loop.run_in_executor(None, _verify_id_token, token)
        if claims.get("email"):
            return GoogleUserInfo(
                email=claims["email"],
                name=claims.get("name") or "",
                picture=claims.get("picture") or "",
                google_id=claims["sub"],
                email_verified=bool(claims.get("email_verified")),
            )
    except (ValueError, GoogleAuthError) as e:
        # Not a usable ID token; try it as an access token
        logger.debug(f"Google ID token verification failed: {e}")

    try:
        async with httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT, transport=transport) as client:
            response = await client.get(
                GOOGLE_USERINFO_URL, headers={"Authorization": f"Bearer {token}"}
            )
    except httpx.HTTPError as e:
        logger.error(f"Google userinfo request failed: {e}")
        return None

    if response.status_code != 200:
        logger.error(f"Google userinfo request failed: {response.status_code}")
        return None

    info = response.json()
    if not info.get("email"):
        return None

    return GoogleUserInfo(
        email=info["email"],
        name=info.get("name") or "",
        picture=info.get("picture") or "",
        google_id=info.get("sub") or "",
        email_verified=bool(info.get("email_verified")),
    )
