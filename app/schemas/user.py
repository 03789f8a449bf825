from datetime import datetime
from typing import List, Optional

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field

from app.models.common import Address
from app.models.user import (
    Award,
    Certification,
    Course,
    NotificationMethod,
    NotificationSetting,
    ReferenceContact,
)
from app.schemas.common import PartialUpdate
from app.schemas.tags import TagRef


class EducationIn(BaseModel):
    id: Optional[PydanticObjectId] = None
    degree_title: Optional[str] = None
    institute_name: Optional[str] = None
    field_of_study: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    skills: List[TagRef] = Field(default_factory=list)
    description: Optional[str] = None


class ProjectIn(BaseModel):
    id: Optional[PydanticObjectId] = None
    project_name: Optional[str] = None
    client: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    description: Optional[str] = None
    skills_used: List[TagRef] = Field(default_factory=list)


class UserUpdate(PartialUpdate):
    """
    Partial profile update. Only fields present in the request are written;
    list fields replace the stored list wholesale.
    """

    model_config = ConfigDict(extra="ignore")
    not_nullable = (
        "notification_method",
        "languages",
        "skills",
        "education",
        "certifications",
        "courses",
        "projects",
        "awards",
        "reference_contacts",
    )

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
    notification_method: Optional[NotificationMethod] = None
    address: Optional[Address] = None
    languages: Optional[List[str]] = None
    skills: Optional[List[TagRef]] = None
    education: Optional[List[EducationIn]] = None
    certifications: Optional[List[Certification]] = None
    courses: Optional[List[Course]] = None
    projects: Optional[List[ProjectIn]] = None
    awards: Optional[List[Award]] = None
    reference_contacts: Optional[List[ReferenceContact]] = None


class NotificationSettingsUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    settings: List[NotificationSetting] = Field(default_factory=list)
    send_time: str = Field(default="online", alias="sendTime")
