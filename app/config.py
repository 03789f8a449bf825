"""
Application configuration using Pydantic Settings.

Centralizes all environment variables and app settings.
Names match the deployment environment of the web frontend (NEXTAUTH_SECRET,
EMAIL_USER, EMAIL_PASS) so both sides can share one .env file.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    All sensitive/configurable values should live here.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars not defined here
    )

    # Application
    app_name: str = "Job Board API"
    debug: bool = False
    environment: str = "development"
    cors_origins: List[str] = ["http://localhost:3000"]

    # MongoDB - Motor (async driver) connection string
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "job_board_db"

    # Session tokens
    nextauth_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    session_max_age_minutes: int = 30 * 24 * 60
    session_cookie_name: str = "session_token"
    session_cookie_secure: bool = False

    # Login refuses unverified emails only when this is on
    require_verified_email: bool = False

    # Outgoing mail (OTP and password reset)
    email_user: Optional[str] = None
    email_pass: Optional[str] = None
    email_from: Optional[str] = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_timeout_seconds: int = 30

    # Public URL of the web frontend, used in password reset links
    app_url: str = "http://localhost:3000"

    otp_expiry_minutes: int = 5
    password_reset_expiry_minutes: int = 5
    two_factor_otp_expiry_minutes: int = 10

    @field_validator("nextauth_secret", "email_user", "email_pass", mode="before")
    @classmethod
    def strip_secret(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not isinstance(v, str):
            return v
        return v.strip() or None

    @property
    def smtp_configured(self) -> bool:
        return bool(self.email_user and self.email_pass)


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance.
    Using lru_cache avoids re-reading .env on every request.
    """
    return Settings()
