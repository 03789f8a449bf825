"""
Shared building blocks for document models.

Timestamps are stored as naive UTC datetimes, which is what MongoDB
hands back when documents are loaded.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Address(BaseModel):
    """Postal address embedded in users and job locations."""

    line1: Optional[str] = None
    line2: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
