"""
Account APIs: signup, login/logout, session, email verification, email 2FA,
password reset.

POST /auth/signup, /auth/login, /auth/logout
GET  /auth/session, POST /auth/session/refresh
POST /auth/request-otp, /auth/verify-otp
POST /auth/2fa/email/send-otp, /auth/2fa/email/verify-otp, /auth/2fa/disable
POST /auth/forgot-password, /auth/reset-password
"""

import logging

from fastapi import APIRouter, Response, status
from pymongo.errors import DuplicateKeyError

from app.api.auth import CurrentClaims, CurrentUser, issue_session
from app.config import get_settings
from app.errors import Unauthorized, ValidationFailed
from app.models.user import User
from app.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    OtpVerifyRequest,
    ResetPasswordRequest,
    SignupRequest,
)
from app.services import otp_service, password_service
from app.services.security import authenticate_user, hash_password

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/signup", status_code=status.HTTP_201_CREATED, summary="Create an account")
async def signup(payload: SignupRequest) -> dict:
    """
    Create a user with a hashed password. Email and username must both be
    unused; every clash is reported in errors.
    """
    errors = {}
    if await User.find_one({"email": payload.email}):
        errors["email"] = "Email already in use. Please change your email."
    if await User.find_one({"username": payload.username}):
        errors["username"] = "Username already in use. Please choose another username."
    if errors:
        raise ValidationFailed("Email or username already in use", details=errors)

    user = User(
        username=payload.username,
        email=payload.email,
        password=hash_password(payload.password),
    )
    try:
        await user.insert()
    except DuplicateKeyError:
        # Lost a race against a concurrent signup with the same email/username
        raise ValidationFailed("Email or username already in use")
    logger.info("Created user %s", user.id)
    return {"message": "User created successfully"}


@router.post("/login", summary="Log in with email and password")
async def login(payload: LoginRequest, response: Response) -> dict:
    user = await authenticate_user(payload.email, payload.password)
    return await issue_session(response, user)


@router.post("/logout", summary="Clear the session cookie")
async def logout(response: Response) -> dict:
    response.delete_cookie(get_settings().session_cookie_name)
    return {"message": "Logged out"}


@router.get("/session", summary="Current session claims")
async def get_session(claims: CurrentClaims) -> dict:
    return {"user": claims.to_payload()}


@router.post("/session/refresh", summary="Re-issue the session with fresh claims")
async def refresh_session(current_user: CurrentUser, response: Response) -> dict:
    return await issue_session(response, current_user)


@router.post("/request-otp", summary="Email a verification code")
async def request_otp(claims: CurrentClaims) -> dict:
    if not claims.email:
        raise Unauthorized()
    await otp_service.issue_otp(claims.email)
    return {"message": "OTP sent to email."}


@router.post("/verify-otp", summary="Verify the emailed code")
async def verify_otp(payload: OtpVerifyRequest, claims: CurrentClaims) -> dict:
    newly_verified = await otp_service.verify_otp(claims.email, payload.otp)
    if not newly_verified:
        return {"message": "Email already verified. Redirecting to dashboard."}
    return {"message": "Email verified successfully. Redirecting to dashboard."}


@router.post("/2fa/email/send-otp", summary="Email a code for enabling two-factor authentication")
async def send_two_factor_code(claims: CurrentClaims) -> dict:
    if not claims.email:
        raise Unauthorized()
    await otp_service.issue_two_factor_code(claims.email)
    return {"message": "OTP sent to your email"}


@router.post("/2fa/email/verify-otp", summary="Enable email two-factor authentication")
async def verify_two_factor_code(payload: OtpVerifyRequest, claims: CurrentClaims) -> dict:
    if not claims.email:
        raise Unauthorized()
    await otp_service.enable_two_factor(claims.email, payload.otp)
    return {"message": "Two-Factor Authentication via Email has been enabled."}


@router.post("/2fa/disable", summary="Turn off two-factor authentication")
async def disable_two_factor(current_user: CurrentUser) -> dict:
    await otp_service.disable_two_factor(current_user)
    return {"message": "Two-Factor Authentication has been disabled."}


@router.post("/forgot-password", summary="Email a password reset link")
async def forgot_password(payload: ForgotPasswordRequest) -> dict:
    await password_service.request_password_reset(payload.email)
    return {"message": "If that email is registered, a reset link has been sent."}


@router.post("/reset-password", summary="Set a new password with a reset token")
async def reset_password(payload: ResetPasswordRequest) -> dict:
    await password_service.reset_password(payload.email, payload.token, payload.new_password)
    return {"message": "Password has been reset successfully."}
