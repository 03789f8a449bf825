"""
Lookup entity APIs, one pair of routes per kind.

GET  /{skills|specialties|services|industries}?q=  search by name
POST /{skills|specialties|services|industries}     resolve-or-create (signed-in users)
"""

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from app.api.auth import CurrentClaims
from app.schemas.tags import LookupCreate
from app.services.entity_resolver import (
    LOOKUP_KINDS,
    LookupKind,
    entity_to_dict,
    find_or_create,
    search_entities,
)

router = APIRouter()


def _register(kind: LookupKind) -> None:
    async def search(q: str = Query(default="")) -> list:
        return [entity_to_dict(e) for e in await search_entities(kind, q)]

    async def create(payload: LookupCreate, claims: CurrentClaims) -> JSONResponse:
        entity, created = await find_or_create(kind, payload.name, payload.description)
        return JSONResponse(
            status_code=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
            content=entity_to_dict(entity),
        )

    router.add_api_route(f"/{kind.path}", search, methods=["GET"], summary=f"Search {kind.path}")
    router.add_api_route(
        f"/{kind.path}",
        create,
        methods=["POST"],
        status_code=status.HTTP_201_CREATED,
        summary=f"Add a {kind.label}",
    )


for _kind in LOOKUP_KINDS:
    _register(_kind)
