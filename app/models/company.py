"""
Company model: the employer profile aggregate.

admins holds the ids of the users allowed to edit the company and its jobs.
"""

from datetime import datetime
from typing import List, Optional

from beanie import Document, Indexed, PydanticObjectId
from pydantic import BaseModel, Field

from app.models.common import utcnow


class CompanyAddress(BaseModel):
    line1: str
    line2: Optional[str] = None
    city: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


class SocialLinks(BaseModel):
    linkedin: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    tiktok: Optional[str] = None
    twitter: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None
    youtube: Optional[str] = None


class Company(Document):
    """
    Company document. industries/specialties/services reference lookup collections.
    """

    company_name: str
    company_username: Indexed(str, unique=True)
    tagline: Optional[str] = None
    company_logo: Optional[str] = None
    company_cover_image: Optional[str] = None
    year_founded: Optional[int] = None
    company_size: Optional[str] = None
    company_type: Optional[str] = None
    industries: List[PydanticObjectId] = Field(default_factory=list)
    specialties: List[PydanticObjectId] = Field(default_factory=list)
    services: List[PydanticObjectId] = Field(default_factory=list)
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    inquiry_email: Optional[str] = None
    support_email: Optional[str] = None
    general_phone_number: Optional[str] = None
    secondary_phone_number: Optional[str] = None
    fax: Optional[str] = None
    address: CompanyAddress
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    admins: List[PydanticObjectId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "companies"
        use_state_management = True

    class Config:
        json_schema_extra = {
            "example": {
                "company_name": "Acme Corp",
                "company_username": "acme",
                "address": {"line1": "1 Main Street", "city": "Colombo"},
                "social_links": {"website": "https://acme.example.com"},
            }
        }
