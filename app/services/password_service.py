"""
Password reset by emailed link.

The link carries a random token; the user document stores only its SHA-256
digest and an expiry. A successful reset removes both, so a link works once.
"""

import logging
import secrets
from datetime import timedelta
from urllib.parse import quote

from app.config import get_settings
from app.errors import InvalidOrExpired
from app.models.common import utcnow
from app.models.user import User
from app.services.mail_service import mail_service
from app.services.otp_service import hash_code
from app.services.security import hash_password

logger = logging.getLogger(__name__)


def build_reset_link(token: str, email: str) -> str:
    base = get_settings().app_url.rstrip("/")
    return f"{base}/password-reset?token={token}&email={quote(email)}"


async def request_password_reset(email: str) -> None:
    """Email a reset link when the account exists; silent otherwise."""
    settings = get_settings()
    token = secrets.token_hex(32)
    expires = utcnow() + timedelta(minutes=settings.password_reset_expiry_minutes)

    user = await User.find_one({"email": email})
    if user is None:
        logger.info("Password reset requested for unknown email")
        return

    await User.find_one({"_id": user.id}).update(
        {"$set": {"password_reset_token": hash_code(token), "password_reset_expires": expires}}
    )
    logger.info("Password reset token issued for user %s", user.id)
    await mail_service.send_password_reset_email(
        user.email, build_reset_link(token, user.email), settings.password_reset_expiry_minutes
    )


async def reset_password(email: str, token: str, new_password: str) -> None:
    query = {
        "email": email,
        "password_reset_token": hash_code(token),
        "password_reset_expires": {"$gt": utcnow()},
    }
    user = await User.find_one(query)
    if user is None:
        raise InvalidOrExpired("Invalid or expired token.")

    await User.find_one(query).update(
        {
            "$set": {"password": hash_password(new_password), "updated_at": utcnow()},
            "$unset": {"password_reset_token": "", "password_reset_expires": ""},
        }
    )
    logger.info("Password reset for user %s", user.id)
