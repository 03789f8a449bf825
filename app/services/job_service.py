"""
Job helpers shared by the company job routes and the public job board.
"""

import re
from typing import List, Optional

from beanie import PydanticObjectId

from app.models.common import utcnow
from app.models.job import Job, JobPostStatus, ScreeningQuestion
from app.schemas.job import ScreeningQuestionIn
from app.services.entity_resolver import SKILLS, populate


def build_job_query(
    company_id: Optional[PydanticObjectId] = None,
    status: Optional[JobPostStatus] = None,
    search: Optional[str] = None,
) -> dict:
    query = {}
    if company_id is not None:
        query["company_id"] = company_id
    if status is not None:
        query["job_post_status"] = status.value
    if search and search.strip():
        pattern = {"$regex": re.escape(search.strip()), "$options": "i"}
        query["$or"] = [{"job_title": pattern}, {"job_description": pattern}]
    return query


async def find_jobs(query: dict) -> List[Job]:
    return await Job.find(query).sort("-created_at", "-_id").to_list()


def to_screening_questions(items: List[ScreeningQuestionIn]) -> List[ScreeningQuestion]:
    return [ScreeningQuestion(**item.model_dump()) for item in items]


def apply_status(job: Job, status: JobPostStatus) -> None:
    """Set the post status, stamping expired_at the first time it expires."""
    if status == JobPostStatus.EXPIRED and job.job_post_status != JobPostStatus.EXPIRED:
        job.expired_at = utcnow()
    elif status != JobPostStatus.EXPIRED:
        job.expired_at = None
    job.job_post_status = status


async def job_to_dict(job: Job) -> dict:
    data = job.model_dump(mode="json", exclude={"revision_id"})
    data["skills"] = await populate(SKILLS, job.skills)
    return data
