from __future__ import annotations

import pytest

from app.errors import ValidationFailed
from app.schemas.tags import ExistingTag, PendingTag
from app.services.entity_resolver import INDUSTRIES, SKILLS, find_or_create, resolve_tags
from conftest import run


@pytest.mark.parametrize("path", ["skills", "specialties", "services", "industries"])
def test_lookup_create_then_search(client, register, path) -> None:
    headers = register("lena", "lena@example.com")

    created = client.post(f"/api/{path}", json={"name": " Cloud Computing ", "description": "AWS"}, headers=headers)
    assert created.status_code == 201
    assert created.json()["name"] == "Cloud Computing"

    again = client.post(f"/api/{path}", json={"name": "cloud computing"}, headers=headers)
    assert again.status_code == 200
    assert again.json()["id"] == created.json()["id"]

    found = client.get(f"/api/{path}", params={"q": "CLOUD"})
    assert [e["name"] for e in found.json()] == ["Cloud Computing"]
    assert client.get(f"/api/{path}", params={"q": "zzz"}).json() == []


def test_lookup_search_escapes_regex(client, register) -> None:
    headers = register("mia", "mia@example.com")
    client.post("/api/skills", json={"name": "C++"}, headers=headers)
    client.post("/api/skills", json={"name": "C"}, headers=headers)

    assert [e["name"] for e in client.get("/api/skills", params={"q": "c++"}).json()] == ["C++"]
    assert [e["name"] for e in client.get("/api/skills").json()] == ["C", "C++"]


def test_lookup_create_requires_session_and_name(client, register) -> None:
    assert client.post("/api/skills", json={"name": "Go"}).status_code == 401

    headers = register("ned", "ned@example.com")
    r = client.post("/api/skills", json={"name": "   "}, headers=headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Skill name is required"}


def test_resolve_tags_reports_failures_without_raising(client) -> None:
    async def scenario():
        python, _ = await find_or_create(SKILLS, "Python")
        resolution = await resolve_tags(
            SKILLS,
            [
                ExistingTag(id=python.id),
                PendingTag(name="Rust"),
                PendingTag(name="PYTHON"),
                PendingTag(name="  "),
                ExistingTag(id="0123456789abcdef01234567"),
            ],
        )
        return python, resolution

    python, resolution = run(client, scenario)
    assert resolution.ids[0] == python.id
    assert len(resolution.ids) == 2
    assert resolution.created == 1
    assert [f.value for f in resolution.failures] == ["  ", "0123456789abcdef01234567"]

    with pytest.raises(ValidationFailed) as exc:
        resolution.raise_for_failures(SKILLS)
    assert exc.value.message == "Failed to add new skill:   "


def test_find_or_create_is_per_kind(client) -> None:
    async def scenario():
        skill, skill_created = await find_or_create(SKILLS, "Finance")
        industry, industry_created = await find_or_create(INDUSTRIES, "Finance")
        return skill_created, industry_created, skill.id != industry.id

    assert run(client, scenario) == (True, True, True)
