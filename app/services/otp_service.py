"""
One-time codes for email verification.

Per user: no code pending -> code pending -> verified (or the code expires).
Only the SHA-256 digest of a code is stored, next to its expiry. Issuing a
new code overwrites the pending one, so only the latest emailed code works.
Both writes are raw updates that skip document validation.
"""

import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timedelta

from app.config import get_settings
from app.errors import InvalidOrExpired, NotFound, ValidationFailed
from app.models.common import utcnow
from app.models.user import User
from app.services.mail_service import mail_service

logger = logging.getLogger(__name__)


def generate_otp() -> str:
    """Six-digit code, uniform over 100000-999999."""
    return str(100000 + secrets.randbelow(900000))


def hash_code(code: str) -> str:
    return hashlib.sha256(code.encode("utf-8")).hexdigest()


async def issue_otp(email: str) -> datetime:
    """Store a fresh code for the user and email it. Returns the expiry."""
    user = await User.find_one({"email": email})
    if user is None:
        raise NotFound("User not found")

    settings = get_settings()
    code = generate_otp()
    expiry = utcnow() + timedelta(minutes=settings.otp_expiry_minutes)
    await User.find_one({"email": email}).update(
        {"$set": {"otp": hash_code(code), "otp_expiry": expiry}}
    )
    logger.info("OTP issued for user %s (expires %s)", user.id, expiry.isoformat())

    await mail_service.send_otp_email(email, code, settings.otp_expiry_minutes)
    return expiry


async def verify_otp(email: str, code: str) -> bool:
    """
    Check a submitted code. Returns True when this call verified the email,
    False when it was already verified (nothing is written in that case).
    """
    code = (code or "").strip()
    if not code:
        raise ValidationFailed("OTP is required")

    user = await User.find_one(
        {"email": email, "otp": hash_code(code), "otp_expiry": {"$gt": utcnow()}}
    )
    if user is None:
        logger.warning("Invalid or expired OTP submitted for %s", email)
        raise InvalidOrExpired()

    if user.email_verified is not None:
        return False

    await User.find_one({"email": email}).update(
        {"$set": {"email_verified": utcnow()}, "$unset": {"otp": "", "otp_expiry": ""}}
    )
    logger.info("Email verified for user %s", user.id)
    return True


# Email two-factor authentication: same code format, its own fields and expiry.
# The code confirms the user can receive mail before email 2FA is switched on.


async def issue_two_factor_code(email: str) -> datetime:
    user = await User.find_one({"email": email})
    if user is None:
        raise NotFound("User not found")

    settings = get_settings()
    code = generate_otp()
    expiry = utcnow() + timedelta(minutes=settings.two_factor_otp_expiry_minutes)
    await User.find_one({"_id": user.id}).update(
        {"$set": {"two_factor_otp": hash_code(code), "two_factor_otp_expiry": expiry}}
    )
    logger.info("2FA code issued for user %s", user.id)

    await mail_service.send_two_factor_email(email, code, settings.two_factor_otp_expiry_minutes)
    return expiry


async def enable_two_factor(email: str, code: str) -> None:
    """Check the pending 2FA code and turn on email 2FA."""
    code = (code or "").strip()
    if not code:
        raise ValidationFailed("OTP is required")

    user = await User.find_one({"email": email})
    if user is None:
        raise NotFound("User not found")
    if not user.two_factor_otp or user.two_factor_otp_expiry is None:
        raise InvalidOrExpired("No OTP found. Please request a new one.")
    if not hmac.compare_digest(user.two_factor_otp, hash_code(code)):
        logger.warning("Invalid 2FA code submitted for user %s", user.id)
        raise InvalidOrExpired("Invalid OTP")
    if user.two_factor_otp_expiry <= utcnow():
        raise InvalidOrExpired("OTP has expired. Please request a new one.")

    await User.find_one({"_id": user.id}).update(
        {
            "$set": {"two_factor_enabled": True, "two_factor_method": "email"},
            "$unset": {"two_factor_otp": "", "two_factor_otp_expiry": ""},
        }
    )
    logger.info("Email 2FA enabled for user %s", user.id)


async def disable_two_factor(user: User) -> None:
    await User.find_one({"_id": user.id}).update(
        {
            "$set": {"two_factor_enabled": False, "two_factor_method": ""},
            "$unset": {"two_factor_otp": "", "two_factor_otp_expiry": ""},
        }
    )
    logger.info("2FA disabled for user %s", user.id)
