"""
Outgoing email for OTP codes and password reset links.

Uses stdlib smtplib with the EMAIL_USER/EMAIL_PASS credentials. SMTP calls
block, so they run in a worker thread (asyncio.to_thread). When no
credentials are configured the message is logged instead of sent, which
keeps local development usable without a mailbox.
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from app.config import get_settings
from app.errors import MailDeliveryError

logger = logging.getLogger(__name__)


def _build_message(to_email: str, subject: str, text_body: str, html_body: Optional[str] = None) -> EmailMessage:
    settings = get_settings()
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = settings.email_from or settings.email_user or "no-reply@localhost"
    msg["To"] = to_email
    msg.set_content(text_body)
    if html_body:
        msg.add_alternative(html_body, subtype="html")
    return msg


def _send_smtp(msg: EmailMessage) -> None:
    """Blocking SMTP send; call via asyncio.to_thread."""
    settings = get_settings()
    if settings.smtp_port == 465:
        with smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout_seconds) as server:
            server.login(settings.email_user, settings.email_pass)
            server.send_message(msg)
    else:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout_seconds) as server:
            server.starttls()
            server.login(settings.email_user, settings.email_pass)
            server.send_message(msg)


class MailService:
    """
    Sends transactional email. Delivery failures raise MailDeliveryError;
    there are no retries.
    """

    async def send(self, to_email: str, subject: str, text_body: str, html_body: Optional[str] = None) -> None:
        settings = get_settings()
        if not settings.smtp_configured:
            logger.warning("EMAIL_USER/EMAIL_PASS not set; not sending %r to %s", subject, to_email)
            return

        msg = _build_message(to_email, subject, text_body, html_body)
        try:
            await asyncio.to_thread(_send_smtp, msg)
        except smtplib.SMTPAuthenticationError as e:
            logger.exception("SMTP auth failed for %s", settings.email_user)
            raise MailDeliveryError("Email delivery is misconfigured") from e
        except (smtplib.SMTPException, OSError) as e:
            logger.exception("SMTP error while sending %r to %s", subject, to_email)
            raise MailDeliveryError() from e
        logger.info("Sent %r to %s", subject, to_email)

    async def send_otp_email(self, to_email: str, code: str, expiry_minutes: int) -> None:
        await self.send(
            to_email,
            "Your OTP for Email Verification",
            f"Your OTP is {code}. It expires in {expiry_minutes} minutes.",
        )

    async def send_two_factor_email(self, to_email: str, code: str, expiry_minutes: int) -> None:
        await self.send(
            to_email,
            "Your 2FA OTP Code",
            "Your One-Time Password (OTP) for enabling Two-Factor Authentication is: "
            f"{code}. It is valid for {expiry_minutes} minutes.",
        )

    async def send_password_reset_email(self, to_email: str, reset_link: str, expiry_minutes: int) -> None:
        text = (
            "You requested a password reset. Click the link below to reset your password. "
            f"This link is valid for {expiry_minutes} minutes.\n\n{reset_link}"
        )
        html = (
            "<p>You requested a password reset. Click the link below to reset your password. "
            f"This link is valid for {expiry_minutes} minutes.</p>"
            f'<p><a href="{reset_link}">Reset Password</a></p>'
        )
        await self.send(to_email, "Password Reset Request", text, html)


mail_service = MailService()
