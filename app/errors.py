"""
Error taxonomy shared by routes and services.

Each error knows its HTTP status; app.main renders them as {"error": message}.
"""

from typing import Any, Mapping, Optional


class AppError(Exception):
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, *, details: Optional[Mapping[str, Any]] = None):
        self.message = message or self.default_message
        self.details = dict(details) if details else None
        super().__init__(self.message)


class Unauthorized(AppError):
    status_code = 401
    default_message = "Unauthorized"


class InvalidCredentials(Unauthorized):
    default_message = "Invalid email or password"


class Forbidden(AppError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class ValidationFailed(AppError):
    status_code = 400
    default_message = "Invalid data"


class InvalidOrExpired(AppError):
    status_code = 400
    default_message = "Invalid or expired OTP"


class Conflict(AppError):
    status_code = 409
    default_message = "Already exists"


class InternalError(AppError):
    pass


class MailDeliveryError(InternalError):
    default_message = "Failed to send email"
