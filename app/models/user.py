"""
User model for MongoDB (Beanie ODM).

A user is both an identity (email + password hash + verification state) and
a job seeker profile aggregate. Profile sections (education, certifications,
courses, projects, awards, reference contacts) are embedded lists; skills
are references into the skills collection.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from beanie import Document, Indexed, PydanticObjectId
from pydantic import BaseModel, Field

from app.models.common import Address, utcnow


class NotificationMethod(str, Enum):
    NONE = "None"
    SMS = "SMS"
    EMAIL = "Email"


class ProfileEntry(BaseModel):
    """Embedded profile record; each one carries its own id so it can be edited in place."""

    id: PydanticObjectId = Field(default_factory=PydanticObjectId)


class Education(ProfileEntry):
    degree_title: Optional[str] = None
    institute_name: Optional[str] = None
    field_of_study: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    skills: List[PydanticObjectId] = Field(default_factory=list)
    description: Optional[str] = None


class Certification(ProfileEntry):
    certification_name: Optional[str] = None
    certification_authority: Optional[str] = None
    obtained_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    credential_url: Optional[str] = None
    description: Optional[str] = None


class Course(ProfileEntry):
    course_name: Optional[str] = None
    institution: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    description: Optional[str] = None


class Project(ProfileEntry):
    project_name: Optional[str] = None
    client: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    description: Optional[str] = None
    skills_used: List[PydanticObjectId] = Field(default_factory=list)


class Award(ProfileEntry):
    award_name: Optional[str] = None
    awarding_authority: Optional[str] = None
    award_received_date: Optional[datetime] = None
    description: Optional[str] = None


class ReferenceContact(ProfileEntry):
    name: Optional[str] = None
    company: Optional[str] = None
    designation: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class NotificationSetting(BaseModel):
    type: str
    email: bool = False
    browser: bool = False
    app: bool = False


class User(Document):
    """
    User document. password holds the bcrypt hash, never the plain text.
    otp/otp_expiry and password_reset_* are transient and absent most of the time.
    """

    username: Indexed(str, unique=True)
    email: Indexed(str, unique=True)
    email_verified: Optional[datetime] = None
    role: str = "User"
    password: str

    display_name: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    birthday: Optional[datetime] = None
    gender: Optional[str] = None
    profile_picture: Optional[str] = None
    cover_image: Optional[str] = None
    work_email: Optional[str] = None
    mobile_no: Optional[str] = None
    work_mobile_no: Optional[str] = None
    notification_method: NotificationMethod = NotificationMethod.NONE
    address: Optional[Address] = None

    skills: List[PydanticObjectId] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    courses: List[Course] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    awards: List[Award] = Field(default_factory=list)
    reference_contacts: List[ReferenceContact] = Field(default_factory=list)
    profile_status: str = "Active"

    applied_jobs: List[PydanticObjectId] = Field(default_factory=list)
    saved_jobs: List[PydanticObjectId] = Field(default_factory=list)

    otp: Optional[str] = None  # SHA-256 hex digest
    otp_expiry: Optional[datetime] = None
    password_reset_token: Optional[str] = None  # SHA-256 hex digest
    password_reset_expires: Optional[datetime] = None

    two_factor_enabled: bool = False
    two_factor_method: str = ""  # "email" once enabled
    two_factor_otp: Optional[str] = None  # SHA-256 hex digest
    two_factor_otp_expiry: Optional[datetime] = None

    notification_settings: List[NotificationSetting] = Field(default_factory=list)
    notification_send_time: str = "online"

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "users"
        use_state_management = True

    class Config:
        json_schema_extra = {
            "example": {
                "username": "jdoe",
                "email": "jdoe@example.com",
                "role": "User",
                "first_name": "Jane",
                "last_name": "Doe",
            }
        }
