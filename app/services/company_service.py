"""
Company profile helpers: username availability, sub-object updates, views.
"""

import re
from typing import Optional

from beanie import PydanticObjectId

from app.errors import ValidationFailed
from app.models.company import Company, CompanyAddress, SocialLinks
from app.schemas.company import AddressPatch, SocialLinksPatch
from app.services.entity_resolver import INDUSTRIES, SERVICES, SPECIALTIES, populate


async def username_taken(username: str, exclude_id: Optional[PydanticObjectId] = None) -> bool:
    """Company usernames are unique regardless of case."""
    query = {"company_username": {"$regex": f"^{re.escape(username)}$", "$options": "i"}}
    if exclude_id is not None:
        query["_id"] = {"$ne": exclude_id}
    return await Company.find_one(query) is not None


def apply_address_update(current: CompanyAddress, patch: AddressPatch) -> CompanyAddress:
    changes = patch.model_dump(exclude_unset=True)
    if "line1" in changes and not (changes["line1"] or "").strip():
        raise ValidationFailed("Address line 1 is required")
    return current.model_copy(update=changes)


def apply_social_links_update(current: SocialLinks, patch: SocialLinksPatch) -> SocialLinks:
    return current.model_copy(update=patch.model_dump(exclude_unset=True))


async def company_to_dict(company: Company) -> dict:
    data = company.model_dump(mode="json", exclude={"revision_id"})
    data["industries"] = await populate(INDUSTRIES, company.industries)
    data["specialties"] = await populate(SPECIALTIES, company.specialties)
    data["services"] = await populate(SERVICES, company.services)
    return data
