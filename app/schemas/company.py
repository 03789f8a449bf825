from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.models.company import CompanyAddress, SocialLinks
from app.schemas.common import OptionalEmail, PartialUpdate
from app.schemas.tags import TagRef

MAX_INDUSTRIES = 3


def _clean_username(v: str) -> str:
    value = (v or "").strip()
    if not value:
        raise ValueError("Company username is required")
    return value


class CompanyCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    company_name: str = Field(min_length=1)
    company_username: str
    tagline: Optional[str] = None
    company_logo: Optional[str] = None
    company_cover_image: Optional[str] = None
    year_founded: Optional[int] = None
    company_size: Optional[str] = None
    company_type: Optional[str] = None
    industries: List[TagRef] = Field(default_factory=list, max_length=MAX_INDUSTRIES)
    specialties: List[TagRef] = Field(default_factory=list)
    services: List[TagRef] = Field(default_factory=list)
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    inquiry_email: OptionalEmail = None
    support_email: OptionalEmail = None
    general_phone_number: Optional[str] = None
    secondary_phone_number: Optional[str] = None
    fax: Optional[str] = None
    address: CompanyAddress
    social_links: SocialLinks = Field(default_factory=SocialLinks)

    @field_validator("company_username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _clean_username(v)

    @field_validator("address")
    @classmethod
    def require_line1(cls, v: CompanyAddress) -> CompanyAddress:
        if not v.line1.strip():
            raise ValueError("Address line 1 is required")
        return v


class AddressPatch(BaseModel):
    line1: Optional[str] = None
    line2: Optional[str] = None
    city: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


class SocialLinksPatch(BaseModel):
    linkedin: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    tiktok: Optional[str] = None
    twitter: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None
    youtube: Optional[str] = None


class CompanyUpdate(PartialUpdate):
    """
    Partial company update. Top-level fields, the address and the social
    links are separate parts of the request and are applied separately.
    """

    model_config = ConfigDict(extra="ignore")
    not_nullable = (
        "company_name",
        "company_username",
        "industries",
        "specialties",
        "services",
        "address",
        "social_links",
    )

    company_name: Optional[str] = Field(default=None, min_length=1)
    company_username: Optional[str] = None
    tagline: Optional[str] = None
    company_logo: Optional[str] = None
    company_cover_image: Optional[str] = None
    year_founded: Optional[int] = None
    company_size: Optional[str] = None
    company_type: Optional[str] = None
    industries: Optional[List[TagRef]] = Field(default=None, max_length=MAX_INDUSTRIES)
    specialties: Optional[List[TagRef]] = None
    services: Optional[List[TagRef]] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    inquiry_email: OptionalEmail = None
    support_email: OptionalEmail = None
    general_phone_number: Optional[str] = None
    secondary_phone_number: Optional[str] = None
    fax: Optional[str] = None
    address: Optional[AddressPatch] = None
    social_links: Optional[SocialLinksPatch] = None

    @field_validator("company_username")
    @classmethod
    def validate_username(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _clean_username(v)


class AdminAdd(BaseModel):
    email: EmailStr
