"""
Public job board: browse Live jobs, apply and save.

GET  /jobs               Live jobs, optionally filtered by ?search=
GET  /jobs/{id}          a single Live job
POST /jobs/{id}/apply    record an application (signed-in users)
POST /jobs/{id}/save     bookmark a job (signed-in users)
"""

import logging

from beanie import PydanticObjectId
from fastapi import APIRouter, Query

from app.api.auth import CurrentUser
from app.errors import NotFound
from app.models.job import Job, JobPostStatus
from app.models.user import User
from app.services.job_service import build_job_query, find_jobs, job_to_dict

logger = logging.getLogger(__name__)
router = APIRouter()

# Applicant lists stay with the company
PUBLIC_EXCLUDE = ("applied_users", "saved_users")


async def _live_job(job_id: PydanticObjectId) -> Job:
    job = await Job.find_one({"_id": job_id, "job_post_status": JobPostStatus.LIVE.value})
    if job is None:
        raise NotFound("Job not found")
    return job


async def _public_view(job: Job) -> dict:
    data = await job_to_dict(job)
    for key in PUBLIC_EXCLUDE:
        data.pop(key, None)
    return data


@router.get("", summary="Browse live jobs")
async def list_live_jobs(search: str = Query(default="")) -> dict:
    jobs = await find_jobs(build_job_query(status=JobPostStatus.LIVE, search=search))
    return {"jobs": [await _public_view(job) for job in jobs]}


@router.get("/{job_id}", summary="Get a live job")
async def get_live_job(job_id: PydanticObjectId) -> dict:
    return {"job": await _public_view(await _live_job(job_id))}


@router.post("/{job_id}/apply", summary="Apply to a job")
async def apply_to_job(job_id: PydanticObjectId, current_user: CurrentUser) -> dict:
    job = await _live_job(job_id)
    await Job.find_one({"_id": job.id}).update({"$addToSet": {"applied_users": current_user.id}})
    await User.find_one({"_id": current_user.id}).update({"$addToSet": {"applied_jobs": job.id}})
    logger.info("User %s applied to job %s", current_user.id, job.id)
    return {"message": "Application submitted successfully"}


@router.post("/{job_id}/save", summary="Save a job")
async def save_job(job_id: PydanticObjectId, current_user: CurrentUser) -> dict:
    job = await _live_job(job_id)
    await Job.find_one({"_id": job.id}).update({"$addToSet": {"saved_users": current_user.id}})
    await User.find_one({"_id": current_user.id}).update({"$addToSet": {"saved_jobs": job.id}})
    return {"message": "Job saved successfully"}
