"""
Job postings managed by a company's admins.

Every route runs the company ownership check before anything else, so a caller
who does not administer the company gets 403 whatever the request body holds.
"""

import logging

from beanie import PydanticObjectId
from fastapi import APIRouter, Query, status

from app.api.auth import AdminCompany
from app.errors import NotFound, ValidationFailed
from app.models.common import utcnow
from app.models.company import Company
from app.models.job import Job, JobPostStatus
from app.schemas.job import JobCreate, JobUpdate
from app.services.entity_resolver import SKILLS, resolve_or_raise
from app.services.job_service import (
    apply_status,
    build_job_query,
    find_jobs,
    job_to_dict,
    to_screening_questions,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _parse_status(value: str):
    if value == "All":
        return None
    try:
        return JobPostStatus(value)
    except ValueError:
        raise ValidationFailed(f"Unknown job status: {value}")


async def _company_job(company: Company, job_id: PydanticObjectId) -> Job:
    job = await Job.find_one({"_id": job_id, "company_id": company.id})
    if job is None:
        raise NotFound("Job not found")
    return job


@router.get("", summary="List the company's jobs")
async def list_jobs(
    company: AdminCompany,
    job_status: str = Query(default="All", alias="status"),
    search: str = Query(default=""),
) -> dict:
    query = build_job_query(company.id, _parse_status(job_status), search)
    jobs = await find_jobs(query)
    return {"jobs": [await job_to_dict(job) for job in jobs]}


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a job")
async def create_job(payload: JobCreate, company: AdminCompany) -> dict:
    """
    Create a job for the company. New jobs start as Draft; publishing is a
    later update of job_post_status.
    """
    fields = payload.model_dump(exclude={"skills", "screening_questions", "job_location"})
    job = Job(
        **fields,
        company_id=company.id,
        job_location=payload.job_location,
        skills=await resolve_or_raise(SKILLS, payload.skills),
        screening_questions=to_screening_questions(payload.screening_questions),
    )
    await job.insert()
    logger.info("Job %s created for company %s", job.id, company.id)
    return {"message": "Job created successfully", "job": await job_to_dict(job)}


@router.get("/{job_id}", summary="Get one of the company's jobs")
async def get_job(job_id: PydanticObjectId, company: AdminCompany) -> dict:
    job = await _company_job(company, job_id)
    return {"job": await job_to_dict(job)}


@router.put("/{job_id}", summary="Update a job")
async def update_job(job_id: PydanticObjectId, payload: JobUpdate, company: AdminCompany) -> dict:
    job = await _company_job(company, job_id)

    update = payload.model_dump(
        exclude_unset=True,
        exclude={"skills", "screening_questions", "job_location", "job_post_status"},
    )
    for field_name, value in update.items():
        setattr(job, field_name, value)
    if "job_location" in payload.model_fields_set:
        job.job_location = payload.job_location
    if payload.skills is not None:
        job.skills = await resolve_or_raise(SKILLS, payload.skills)
    if payload.screening_questions is not None:
        job.screening_questions = to_screening_questions(payload.screening_questions)
    if payload.job_post_status is not None:
        apply_status(job, payload.job_post_status)

    job.updated_at = utcnow()
    await job.save_changes()
    logger.info("Job %s updated", job.id)
    return {"message": "Job updated successfully", "job": await job_to_dict(job)}


@router.delete("/{job_id}", summary="Delete a job")
async def delete_job(job_id: PydanticObjectId, company: AdminCompany) -> dict:
    job = await _company_job(company, job_id)
    await job.delete()
    logger.info("Job %s deleted from company %s", job_id, company.id)
    return {"message": "Job deleted successfully"}
