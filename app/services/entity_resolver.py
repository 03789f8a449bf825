"""
Resolve-or-create for lookup entities (skills, specialties, services, industries).

Autocomplete inputs submit a list of tagged references: entities that
already exist, and names the user typed that may not exist yet. Resolution
turns the whole list into ids. A name matching an existing entity
(case-insensitively) resolves to that entity instead of creating a second
one with the same name.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Type

from beanie import PydanticObjectId

from app.errors import ValidationFailed
from app.models.lookup import Industry, LookupEntity, Service, Skill, Specialty
from app.schemas.tags import ExistingTag, PendingTag

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10
LIST_LIMIT = 100


@dataclass(frozen=True)
class LookupKind:
    model: Type[LookupEntity]
    label: str  # singular, used in messages
    path: str  # plural, used in URLs


SKILLS = LookupKind(Skill, "skill", "skills")
SPECIALTIES = LookupKind(Specialty, "specialty", "specialties")
SERVICES = LookupKind(Service, "service", "services")
INDUSTRIES = LookupKind(Industry, "industry", "industries")

LOOKUP_KINDS: Tuple[LookupKind, ...] = (SKILLS, SPECIALTIES, SERVICES, INDUSTRIES)


@dataclass
class TagFailure:
    value: str
    reason: str


@dataclass
class TagResolution:
    ids: List[PydanticObjectId] = field(default_factory=list)
    failures: List[TagFailure] = field(default_factory=list)
    created: int = 0

    def add(self, entity_id: PydanticObjectId) -> None:
        if entity_id not in self.ids:
            self.ids.append(entity_id)

    def raise_for_failures(self, kind: LookupKind) -> None:
        if self.failures:
            first = self.failures[0]
            raise ValidationFailed(
                f"Failed to add new {kind.label}: {first.value}",
                details={f.value: f.reason for f in self.failures},
            )


def _exact_name(name: str) -> Dict:
    return {"name": {"$regex": f"^{re.escape(name)}$", "$options": "i"}}


async def search_entities(kind: LookupKind, query: Optional[str] = None) -> List[LookupEntity]:
    """Case-insensitive substring search on name; everything (capped) without a query."""
    query = (query or "").strip()
    if query:
        flt = {"name": {"$regex": re.escape(query), "$options": "i"}}
        return await kind.model.find(flt).sort("name").limit(SEARCH_LIMIT).to_list()
    return await kind.model.find_all().sort("name").limit(LIST_LIMIT).to_list()


async def find_or_create(kind: LookupKind, name: str, description: Optional[str] = None) -> Tuple[LookupEntity, bool]:
    """Return (entity, created)."""
    name = (name or "").strip()
    if not name:
        raise ValidationFailed(f"{kind.label.capitalize()} name is required")

    existing = await kind.model.find_one(_exact_name(name))
    if existing is not None:
        return existing, False

    entity = kind.model(name=name, description=(description or "").strip() or None)
    await entity.insert()
    logger.info("Created %s %r (%s)", kind.label, name, entity.id)
    return entity, True


async def resolve_tags(kind: LookupKind, tags: Sequence[ExistingTag | PendingTag]) -> TagResolution:
    """
    Turn tagged references into entity ids, creating entities for new names.
    Ids are deduplicated in first-seen order. Every tag that cannot be
    resolved is reported in failures; callers decide whether to persist.
    """
    resolution = TagResolution()
    if not tags:
        return resolution

    existing_ids = [t.id for t in tags if isinstance(t, ExistingTag)]
    known = set()
    if existing_ids:
        found = await kind.model.find({"_id": {"$in": existing_ids}}).to_list()
        known = {e.id for e in found}

    for tag in tags:
        if isinstance(tag, ExistingTag):
            if tag.id in known:
                resolution.add(tag.id)
            else:
                resolution.failures.append(TagFailure(str(tag.id), f"unknown {kind.label} id"))
            continue
        try:
            entity, created = await find_or_create(kind, tag.name)
        except ValidationFailed as e:
            resolution.failures.append(TagFailure(tag.name, e.message))
            continue
        resolution.created += int(created)
        resolution.add(entity.id)

    if resolution.failures:
        logger.warning("%d %s tag(s) could not be resolved", len(resolution.failures), kind.label)
    return resolution


async def resolve_or_raise(kind: LookupKind, tags: Sequence[ExistingTag | PendingTag]) -> List[PydanticObjectId]:
    resolution = await resolve_tags(kind, tags)
    resolution.raise_for_failures(kind)
    return resolution.ids


async def populate(kind: LookupKind, ids: Sequence[PydanticObjectId]) -> List[Dict]:
    """Expand ids into {id, name} dicts in the stored order, dropping dangling ids."""
    if not ids:
        return []
    entities = await kind.model.find({"_id": {"$in": list(ids)}}).to_list()
    by_id = {e.id: e for e in entities}
    return [{"id": str(i), "name": by_id[i].name} for i in ids if i in by_id]


def entity_to_dict(entity: LookupEntity) -> Dict:
    return {
        "id": str(entity.id),
        "name": entity.name,
        "description": entity.description,
        "created_at": entity.created_at.isoformat(),
    }
