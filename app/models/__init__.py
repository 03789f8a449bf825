"""Beanie document models and embedded schemas."""

from app.models.company import Company, CompanyAddress, SocialLinks
from app.models.job import Job, JobPostStatus
from app.models.lookup import Industry, LookupEntity, Service, Skill, Specialty
from app.models.user import User

__all__ = [
    "User",
    "Company",
    "CompanyAddress",
    "SocialLinks",
    "Job",
    "JobPostStatus",
    "LookupEntity",
    "Skill",
    "Specialty",
    "Service",
    "Industry",
]
