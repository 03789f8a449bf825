from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.common import utcnow
from app.models.job import (
    Gender,
    JobLevel,
    JobLocation,
    JobLocationType,
    JobPostStatus,
    JobPostType,
    JobType,
    QuestionType,
)
from app.schemas.common import OptionalEmail, OptionalUrl, PartialUpdate
from app.schemas.tags import TagRef

CHOICE_TYPES = (QuestionType.SINGLE_CHOICE, QuestionType.MULTIPLE_CHOICE)


class ScreeningQuestionIn(BaseModel):
    question: str = Field(min_length=1)
    question_type: QuestionType
    correct_answers: List[str] = Field(default_factory=list)
    options: List[str] = Field(default_factory=list)
    required: bool = False

    @model_validator(mode="after")
    def check_answers_match_type(self) -> "ScreeningQuestionIn":
        if self.question_type in CHOICE_TYPES:
            if len(self.options) < 2:
                raise ValueError("Options are required for SC and MC question types and should have at least two options")
            if len(set(self.options)) != len(self.options):
                raise ValueError(f'Duplicate options found in question: "{self.question}"')
            if not self.correct_answers:
                raise ValueError("Correct answers are required for SC and MC question types")
            unknown = [a for a in self.correct_answers if a not in self.options]
            if unknown:
                raise ValueError(f"Correct answers must be among the options: {unknown}")
            if self.question_type == QuestionType.SINGLE_CHOICE and len(self.correct_answers) != 1:
                raise ValueError("Single choice questions take exactly one correct answer")
        elif self.options or self.correct_answers:
            raise ValueError("Options and correct answers should be empty for ST and LT question types")
        return self


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class JobFields(BaseModel):
    """Field checks shared by create and update."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("job_closing_date", check_fields=False)
    @classmethod
    def closing_date_in_future(cls, v: Optional[datetime]) -> Optional[datetime]:
        v = _naive_utc(v)
        if v is not None and v <= utcnow():
            raise ValueError("Job closing date must be in the future")
        return v


class JobCreate(JobFields):
    job_title: str = Field(min_length=1)
    job_type: JobType
    job_location_type: JobLocationType
    job_description: Optional[str] = None
    job_level: Optional[JobLevel] = None
    gender: Optional[Gender] = None
    job_closing_date: Optional[datetime] = None
    job_post_type: JobPostType = JobPostType.NORMAL
    skills: List[TagRef] = Field(default_factory=list)
    job_location: Optional[JobLocation] = None
    video_url: OptionalUrl = None
    cv_send_email: OptionalEmail = None
    screening_questions: List[ScreeningQuestionIn] = Field(default_factory=list)


class JobUpdate(PartialUpdate, JobFields):
    not_nullable = ("job_title", "job_post_type", "skills", "screening_questions", "job_post_status")

    job_title: Optional[str] = Field(default=None, min_length=1)
    job_type: Optional[JobType] = None
    job_location_type: Optional[JobLocationType] = None
    job_description: Optional[str] = None
    job_level: Optional[JobLevel] = None
    gender: Optional[Gender] = None
    job_closing_date: Optional[datetime] = None
    job_post_type: Optional[JobPostType] = None
    skills: Optional[List[TagRef]] = None
    job_location: Optional[JobLocation] = None
    video_url: OptionalUrl = None
    cv_send_email: OptionalEmail = None
    screening_questions: Optional[List[ScreeningQuestionIn]] = None
    job_post_status: Optional[JobPostStatus] = None
