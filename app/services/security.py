"""
Password hashing, credential verification and session tokens.

Passwords are hashed with bcrypt (passlib). Session tokens are HS256 JWTs
signed with NEXTAUTH_SECRET and carry the SessionClaims payload.
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from app.config import get_settings
from app.errors import Forbidden, InternalError, InvalidCredentials, Unauthorized
from app.models.user import User
from app.schemas.session import SessionClaims

logger = logging.getLogger(__name__)

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time check of a plain password against a stored bcrypt hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed or foreign hash in the database
        logger.warning("Stored password hash could not be parsed")
        return False


@lru_cache
def _dummy_hash() -> str:
    return pwd_context.hash("not-a-real-password")


async def authenticate_user(email: str, password: str) -> User:
    """
    Return the user whose email matches exactly and whose password hash
    matches. Unknown email and wrong password fail the same way; a dummy
    hash check keeps the timing of both paths alike.
    """
    user = await User.find_one({"email": email})
    if user is None:
        verify_password(password, _dummy_hash())
        logger.info("Login failed: no account for submitted email")
        raise InvalidCredentials()

    if not verify_password(password, user.password):
        logger.info("Login failed: wrong password for user %s", user.id)
        raise InvalidCredentials()

    if get_settings().require_verified_email and user.email_verified is None:
        raise Forbidden("Email not verified")

    logger.info("User %s authenticated", user.id)
    return user


def _signing_secret() -> str:
    secret = get_settings().nextauth_secret
    if not secret:
        raise InternalError("Authentication not configured (NEXTAUTH_SECRET required).")
    return secret


def create_session_token(claims: SessionClaims, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.session_max_age_minutes)
    payload = claims.to_payload()
    payload.update({"sub": claims.user_id, "iat": now, "exp": now + expires_delta})
    return jwt.encode(payload, _signing_secret(), algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> SessionClaims:
    settings = get_settings()
    try:
        payload = jwt.decode(token, _signing_secret(), algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Session has expired")
    except jwt.InvalidTokenError as e:
        logger.warning("Session token verification failed: %s", e)
        raise Unauthorized("Invalid session")
    try:
        return SessionClaims.model_validate(payload)
    except ValidationError:
        raise Unauthorized("Invalid session payload")
