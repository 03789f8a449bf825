"""
Tagged references to lookup entities.

A selection list coming from an autocomplete input mixes entities that
already exist with free text the user just typed. Each item says which one
it is, so resolving the list is a total function.
"""

from typing import Annotated, Literal, Optional, Union

from beanie import PydanticObjectId
from pydantic import BaseModel, Field


class ExistingTag(BaseModel):
    kind: Literal["existing"] = "existing"
    id: PydanticObjectId


class PendingTag(BaseModel):
    kind: Literal["pending"] = "pending"
    name: str = Field(max_length=120)


TagRef = Annotated[Union[ExistingTag, PendingTag], Field(discriminator="kind")]


class LookupCreate(BaseModel):
    name: str = Field(max_length=120)
    description: Optional[str] = None
