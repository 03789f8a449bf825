from __future__ import annotations


def test_me_hides_private_fields(client, register) -> None:
    headers = register("pat", "pat@example.com")

    r = client.get("/api/user/me", headers=headers)
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["email"] == "pat@example.com"
    for private in ("password", "otp", "otp_expiry", "password_reset_token", "password_reset_expires"):
        assert private not in user


def test_update_profile_resolves_skill_tags(client, register) -> None:
    headers = register("quinn", "quinn@example.com")
    existing = client.post("/api/skills", json={"name": "Python"}, headers=headers).json()

    payload = {
        "first_name": "Quinn",
        "skills": [
            {"kind": "existing", "id": existing["id"]},
            {"kind": "pending", "name": "FastAPI"},
            {"kind": "pending", "name": "python"},
        ],
        "projects": [
            {"project_name": "Job board", "skills_used": [{"kind": "pending", "name": "MongoDB"}]},
        ],
    }
    r = client.put("/api/user/update", json=payload, headers=headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "User updated successfully"

    user = body["user"]
    assert user["first_name"] == "Quinn"
    # "python" resolves to the existing Python skill instead of a duplicate
    assert [s["name"] for s in user["skills"]] == ["Python", "FastAPI"]
    assert user["projects"][0]["skills_used"][0]["name"] == "MongoDB"
    assert user["projects"][0]["id"]

    me = client.get("/api/user/me", headers=headers).json()["user"]
    assert [s["name"] for s in me["skills"]] == ["Python", "FastAPI"]


def test_unknown_skill_id_rejects_the_whole_update(client, register) -> None:
    headers = register("rita", "rita@example.com")
    payload = {
        "first_name": "Rita",
        "skills": [{"kind": "existing", "id": "0123456789abcdef01234567"}],
    }

    r = client.put("/api/user/update", json=payload, headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Failed to add new skill: 0123456789abcdef01234567"

    me = client.get("/api/user/me", headers=headers).json()["user"]
    assert me["first_name"] is None


def test_notification_settings_round_trip(client, register) -> None:
    headers = register("sam", "sam@example.com")

    r = client.get("/api/user/notification-settings", headers=headers)
    assert r.json() == {"settings": [], "sendTime": "online"}

    payload = {"settings": [{"type": "job_alerts", "email": True}], "sendTime": "daily"}
    assert client.put("/api/user/notification-settings", json=payload, headers=headers).status_code == 200

    body = client.get("/api/user/notification-settings", headers=headers).json()
    assert body["sendTime"] == "daily"
    assert body["settings"][0]["email"] is True


def test_profile_routes_require_session(client) -> None:
    assert client.get("/api/user/me").status_code == 401
    assert client.put("/api/user/update", json={}).status_code == 401


def test_update_rejects_null_for_list_fields(client, register) -> None:
    headers = register("sam", "sam@example.com")
    r = client.put("/api/user/update", json={"languages": ["English", "Urdu"]}, headers=headers)
    assert r.status_code == 200

    for field in ("languages", "skills", "education", "notification_method"):
        r = client.put("/api/user/update", json={"first_name": "Sam", field: None}, headers=headers)
        assert r.status_code == 400, field
        assert r.json()["error"] == "Invalid data"

    me = client.get("/api/user/me", headers=headers).json()["user"]
    assert me["languages"] == ["English", "Urdu"]
    assert me["first_name"] is None

    # Scalar fields may still be cleared with null
    r = client.put("/api/user/update", json={"middle_name": None}, headers=headers)
    assert r.status_code == 200
