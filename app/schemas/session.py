"""
Session claims carried inside the signed session token.

Field aliases are the camelCase keys the web frontend reads from the token.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionClaims(BaseModel):
    """Snapshot of the user taken when the token was issued."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="id")
    email: str
    username: str = ""
    role: str = "User"
    email_verified: Optional[datetime] = Field(default=None, alias="emailVerified")
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    profile_picture: Optional[str] = Field(default=None, alias="profilePicture")
    company_ids: List[str] = Field(default_factory=list, alias="companyIds")

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: dict
