"""
Authentication dependencies: session claims, current user, company ownership.

The session token is read from the Authorization header (Bearer) first and
from the session cookie second. Routes depend on get_current_claims when the
token snapshot is enough, and on get_current_user when they need the stored
user document.
"""

import logging
from typing import Annotated, Optional

from beanie import PydanticObjectId
from bson.errors import InvalidId
from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import get_settings
from app.errors import Forbidden, NotFound, Unauthorized
from app.models.company import Company
from app.models.user import User
from app.schemas.session import SessionClaims, SessionResponse
from app.services.claims_service import assemble_claims
from app.services.security import create_session_token, decode_session_token

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def _session_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(get_settings().session_cookie_name)


async def get_current_claims(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> SessionClaims:
    """Dependency: decode and return the session claims, or 401."""
    token = _session_token(request, credentials)
    if not token:
        raise Unauthorized()
    return decode_session_token(token)


async def get_current_user(
    claims: Annotated[SessionClaims, Depends(get_current_claims)],
) -> User:
    """Dependency: the stored user behind the session; 404 if it was deleted."""
    try:
        user_id = PydanticObjectId(claims.user_id)
    except InvalidId:
        raise Unauthorized("Invalid session payload")
    user = await User.get(user_id)
    if user is None:
        logger.warning("Session refers to missing user %s", claims.user_id)
        raise NotFound("User not found")
    return user


async def require_company_admin(
    company_id: PydanticObjectId,
    claims: Annotated[SessionClaims, Depends(get_current_claims)],
) -> Company:
    """
    Dependency for company-scoped mutations.

    The company must be listed in the session's companyIds, and the user must
    still be in the company's admins right now; a token issued before the
    user was removed does not keep its rights.
    """
    if str(company_id) not in claims.company_ids:
        logger.warning("User %s is not an admin of company %s", claims.user_id, company_id)
        raise Forbidden("Forbidden: You are not an admin of this company")

    company = await Company.get(company_id)
    if company is None:
        raise NotFound("Company not found")
    if claims.user_id not in {str(a) for a in company.admins}:
        logger.warning("User %s was removed from admins of company %s", claims.user_id, company_id)
        raise Forbidden("Forbidden: You are not an admin of this company")
    return company


async def issue_session(response: Response, user: User) -> dict:
    """Assemble fresh claims for the user, sign them and set the session cookie."""
    settings = get_settings()
    claims = await assemble_claims(user)
    token = create_session_token(claims)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return SessionResponse(access_token=token, user=claims.to_payload()).model_dump()


CurrentClaims = Annotated[SessionClaims, Depends(get_current_claims)]
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminCompany = Annotated[Company, Depends(require_company_admin)]
