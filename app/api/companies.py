"""
Company APIs.

GET  /company                 companies the caller administers
POST /company/add             create a company; caller becomes its only admin
GET  /company/check-username  username availability
GET  /company/{id}            public company profile
PUT  /company/{id}            update (admins only)
POST /company/{id}/admins, DELETE /company/{id}/admins/{user_id}
"""

import logging

from beanie import PydanticObjectId
from fastapi import APIRouter, Query, Response, status
from pymongo.errors import DuplicateKeyError

from app.api.auth import AdminCompany, CurrentClaims, CurrentUser, issue_session
from app.errors import Conflict, NotFound, ValidationFailed
from app.models.common import utcnow
from app.models.company import Company
from app.models.user import User
from app.schemas.company import AdminAdd, CompanyCreate, CompanyUpdate
from app.services.company_service import (
    apply_address_update,
    apply_social_links_update,
    company_to_dict,
    username_taken,
)
from app.services.entity_resolver import INDUSTRIES, SERVICES, SPECIALTIES, resolve_or_raise

logger = logging.getLogger(__name__)
router = APIRouter()

TAG_FIELDS = {"industries": INDUSTRIES, "specialties": SPECIALTIES, "services": SERVICES}


@router.get("", summary="Companies administered by the current user")
async def list_my_companies(claims: CurrentClaims) -> list:
    companies = await Company.find({"admins": PydanticObjectId(claims.user_id)}).to_list()
    return [await company_to_dict(c) for c in companies]


@router.post("/add", status_code=status.HTTP_201_CREATED, summary="Create a company")
async def create_company(payload: CompanyCreate, current_user: CurrentUser, response: Response) -> dict:
    """
    Create a company with the caller as its sole admin. The response carries a
    re-issued session whose companyIds include the new company.
    """
    if await username_taken(payload.company_username):
        raise Conflict("Company username is already taken.")

    fields = payload.model_dump(exclude=set(TAG_FIELDS) | {"address", "social_links"})
    company = Company(
        **fields,
        address=payload.address,
        social_links=payload.social_links,
        industries=await resolve_or_raise(INDUSTRIES, payload.industries),
        specialties=await resolve_or_raise(SPECIALTIES, payload.specialties),
        services=await resolve_or_raise(SERVICES, payload.services),
        admins=[current_user.id],
    )
    try:
        await company.insert()
    except DuplicateKeyError:
        raise Conflict("Company username is already taken.")
    logger.info("Company %s (%s) created by user %s", company.id, company.company_username, current_user.id)

    session = await issue_session(response, current_user)
    return {
        "success": True,
        "company": await company_to_dict(company),
        "access_token": session["access_token"],
    }


@router.get("/check-username", summary="Is a company username available?")
async def check_username(username: str = Query(default="")) -> dict:
    username = username.strip()
    if not username:
        raise ValidationFailed("Username is required.")
    return {"available": not await username_taken(username)}


@router.get("/{company_id}", summary="Company profile")
async def get_company(company_id: PydanticObjectId) -> dict:
    company = await Company.get(company_id)
    if company is None:
        raise NotFound("Company not found")
    return await company_to_dict(company)


@router.put("/{company_id}", summary="Update a company")
async def update_company(payload: CompanyUpdate, company: AdminCompany) -> dict:
    """
    Apply a partial update. Top-level fields, the address and the social links
    are each applied by their own step.
    """
    top_level = payload.model_dump(exclude_unset=True, exclude=set(TAG_FIELDS) | {"address", "social_links"})
    if top_level.get("company_username") and await username_taken(top_level["company_username"], company.id):
        raise Conflict("Company username is already taken.")
    for field_name, value in top_level.items():
        setattr(company, field_name, value)

    for field_name, kind in TAG_FIELDS.items():
        tags = getattr(payload, field_name)
        if tags is not None:
            setattr(company, field_name, await resolve_or_raise(kind, tags))

    if payload.address is not None:
        company.address = apply_address_update(company.address, payload.address)
    if payload.social_links is not None:
        company.social_links = apply_social_links_update(company.social_links, payload.social_links)

    company.updated_at = utcnow()
    await company.save_changes()
    logger.info("Company %s updated", company.id)
    return {"success": True, "company": await company_to_dict(company)}


@router.post("/{company_id}/admins", summary="Add an admin by email")
async def add_admin(payload: AdminAdd, company: AdminCompany) -> dict:
    user = await User.find_one({"email": payload.email})
    if user is None:
        raise NotFound("User not found")
    await company.update({"$addToSet": {"admins": user.id}, "$set": {"updated_at": utcnow()}})
    logger.info("User %s added as admin of company %s", user.id, company.id)
    refreshed = await Company.get(company.id)
    return {"success": True, "admins": [str(a) for a in refreshed.admins]}


@router.delete("/{company_id}/admins/{user_id}", summary="Remove an admin")
async def remove_admin(user_id: PydanticObjectId, company: AdminCompany) -> dict:
    if user_id not in company.admins:
        raise NotFound("User is not an admin of this company")
    if len(company.admins) == 1:
        raise ValidationFailed("A company must keep at least one admin")
    await company.update({"$pull": {"admins": user_id}, "$set": {"updated_at": utcnow()}})
    logger.info("User %s removed from admins of company %s", user_id, company.id)
    refreshed = await Company.get(company.id)
    return {"success": True, "admins": [str(a) for a in refreshed.admins]}
