"""
Claims assembly: the session view of a user.

The claims are derived once, when a token is issued. company_ids is the set
of companies whose admins contain the user at that moment; later changes to
company admins are not reflected until the claims are assembled again.
"""

import logging
from typing import List

from beanie import PydanticObjectId

from app.models.company import Company
from app.models.user import User
from app.schemas.session import SessionClaims

logger = logging.getLogger(__name__)


async def admin_company_ids(user_id: PydanticObjectId) -> List[str]:
    companies = await Company.find({"admins": user_id}).to_list()
    return [str(c.id) for c in companies]


async def assemble_claims(user: User) -> SessionClaims:
    company_ids = await admin_company_ids(user.id)
    logger.debug("Assembled claims for user %s (%d companies)", user.id, len(company_ids))
    return SessionClaims(
        user_id=str(user.id),
        email=user.email,
        username=user.username or "",
        role=user.role or "User",
        email_verified=user.email_verified,
        first_name=user.first_name,
        last_name=user.last_name,
        profile_picture=user.profile_picture,
        company_ids=company_ids,
    )
