"""
Building blocks shared by request schemas.
"""

from typing import Annotated, ClassVar, Optional, Tuple

from pydantic import AfterValidator, BaseModel, BeforeValidator, EmailStr, HttpUrl, TypeAdapter, model_validator

_http_url = TypeAdapter(HttpUrl)


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _http_url_string(v: Optional[str]) -> Optional[str]:
    # Stored as plain text; HttpUrl normalizes it (e.g. adds a trailing "/" to a bare host)
    if v is None:
        return v
    return str(_http_url.validate_python(v))


# Optional form fields arrive as "" when left empty
OptionalEmail = Annotated[Optional[EmailStr], BeforeValidator(_blank_to_none)]
OptionalUrl = Annotated[Optional[str], BeforeValidator(_blank_to_none), AfterValidator(_http_url_string)]


class PartialUpdate(BaseModel):
    """
    Base for partial updates. Every field is optional so it can be left out,
    but the fields named in not_nullable hold required values on the stored
    document and may not be sent as null.
    """

    not_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = sorted(
            name for name in self.model_fields_set if name in self.not_nullable and getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self
