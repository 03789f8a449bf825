"""
Lookup entities: small shared reference records attached to users,
companies and jobs by id.

Skill, Specialty, Service and Industry all have the same shape; they only
differ by collection.
"""

from datetime import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import Field

from app.models.common import utcnow


class LookupEntity(Document):
    """
    Base for {id, name} lookup documents. Not registered with Beanie itself.
    """

    name: Indexed(str)
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Skill(LookupEntity):
    class Settings:
        name = "skills"


class Specialty(LookupEntity):
    class Settings:
        name = "specialties"


class Service(LookupEntity):
    class Settings:
        name = "services"


class Industry(LookupEntity):
    class Settings:
        name = "industries"

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Information Technology",
                "description": "Software, hardware and IT services.",
            }
        }
