"""
Job model: a posting that belongs to exactly one company.

Tracks the post lifecycle (Draft -> Live -> Expired), the skills it asks for,
where it is located and the screening questions applicants answer.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from beanie import Document, PydanticObjectId
from pydantic import BaseModel, Field

from app.models.common import Address, utcnow


class JobType(str, Enum):
    INTERNSHIP = "Internship"
    FULL_TIME = "Full-Time"
    PART_TIME = "Part-Time"
    CONTRACT = "Contract"


class JobLocationType(str, Enum):
    ON_SITE = "On-Site"
    REMOTE = "Remote"
    HYBRID = "Hybrid"


class JobLevel(str, Enum):
    JUNIOR = "Junior"
    SENIOR = "Senior"
    EXECUTIVE = "Executive"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    ANY = "Any"


class JobPostType(str, Enum):
    NORMAL = "Normal"
    URGENT = "Urgent"
    PREMIUM = "Premium"


class JobPostStatus(str, Enum):
    """Lifecycle states of a job post."""

    DRAFT = "Draft"  # Only visible to company admins
    LIVE = "Live"  # Listed on the public job board
    EXPIRED = "Expired"


class QuestionType(str, Enum):
    SINGLE_CHOICE = "SC"
    MULTIPLE_CHOICE = "MC"
    SHORT_TEXT = "ST"
    LONG_TEXT = "LT"


class Coordinates(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class JobLocation(BaseModel):
    address: Optional[Address] = None
    coordinates: Optional[Coordinates] = None


class ScreeningQuestion(BaseModel):
    id: PydanticObjectId = Field(default_factory=PydanticObjectId)
    question: str
    question_type: QuestionType
    correct_answers: List[str] = Field(default_factory=list)
    options: List[str] = Field(default_factory=list)
    required: bool = False


class Job(Document):
    """
    Job document. company_id is the owning company; applied/saved users are
    maintained by the public job board endpoints.
    """

    company_id: PydanticObjectId
    job_title: str
    job_description: Optional[str] = None
    job_type: Optional[JobType] = None
    job_location_type: Optional[JobLocationType] = None
    job_level: Optional[JobLevel] = None
    gender: Optional[Gender] = None
    job_closing_date: Optional[datetime] = None
    job_post_type: JobPostType = JobPostType.NORMAL
    skills: List[PydanticObjectId] = Field(default_factory=list)
    job_location: Optional[JobLocation] = None
    video_url: Optional[str] = None
    cv_send_email: Optional[str] = None
    applied_users: List[PydanticObjectId] = Field(default_factory=list)
    saved_users: List[PydanticObjectId] = Field(default_factory=list)
    screening_questions: List[ScreeningQuestion] = Field(default_factory=list)
    expired_at: Optional[datetime] = None
    job_post_status: JobPostStatus = JobPostStatus.DRAFT
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "jobs"
        indexes = ["company_id", "job_post_status"]
        use_state_management = True

    class Config:
        json_schema_extra = {
            "example": {
                "job_title": "Backend Engineer",
                "job_type": "Full-Time",
                "job_location_type": "Remote",
                "job_post_status": "Draft",
            }
        }
