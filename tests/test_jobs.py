from __future__ import annotations

from datetime import datetime, timedelta, timezone

JOB_PAYLOAD = {
    "job_title": "Backend Engineer",
    "job_type": "Full-Time",
    "job_location_type": "Remote",
    "job_description": "Build APIs in Python",
    "skills": [{"kind": "pending", "name": "Python"}],
}


def _company_admin(register, create_company, username: str = "fay") -> tuple[str, dict[str, str]]:
    headers = register(username, f"{username}@example.com")
    return create_company(headers, company_username=f"{username}-co")


def test_create_job_defaults_to_draft(client, register, create_company) -> None:
    company_id, admin = _company_admin(register, create_company)

    r = client.post(f"/api/company/{company_id}/jobs", json=JOB_PAYLOAD, headers=admin)
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["message"] == "Job created successfully"
    job = body["job"]
    assert job["job_title"] == "Backend Engineer"
    assert job["job_post_status"] == "Draft"
    assert job["job_post_type"] == "Normal"
    assert job["company_id"] == company_id
    assert job["skills"][0]["name"] == "Python"

    got = client.get(f"/api/company/{company_id}/jobs/{job['id']}", headers=admin)
    assert got.status_code == 200
    assert got.json()["job"]["id"] == job["id"]


def test_job_routes_are_forbidden_to_non_admins_whatever_the_payload(client, register, create_company) -> None:
    company_id, _ = _company_admin(register, create_company)
    stranger = register("gus", "gus@example.com")

    for payload in (JOB_PAYLOAD, {}, {"job_title": ""}):
        r = client.post(f"/api/company/{company_id}/jobs", json=payload, headers=stranger)
        assert r.status_code == 403
        assert r.json() == {"error": "Forbidden: You are not an admin of this company"}

    assert client.get(f"/api/company/{company_id}/jobs", headers=stranger).status_code == 403
    assert client.post(f"/api/company/{company_id}/jobs", json=JOB_PAYLOAD).status_code == 401


def test_job_validation(client, register, create_company) -> None:
    company_id, admin = _company_admin(register, create_company)
    url = f"/api/company/{company_id}/jobs"

    missing = client.post(url, json={"job_title": "Backend Engineer"}, headers=admin)
    assert missing.status_code == 400

    past = datetime.now(timezone.utc) - timedelta(days=1)
    r = client.post(url, json={**JOB_PAYLOAD, "job_closing_date": past.isoformat()}, headers=admin)
    assert r.status_code == 400

    future = datetime.now(timezone.utc) + timedelta(days=30)
    r = client.post(url, json={**JOB_PAYLOAD, "job_closing_date": future.isoformat()}, headers=admin)
    assert r.status_code == 201

    bad_url = client.post(url, json={**JOB_PAYLOAD, "video_url": "not a url"}, headers=admin)
    assert bad_url.status_code == 400


def test_screening_question_rules(client, register, create_company) -> None:
    company_id, admin = _company_admin(register, create_company)
    url = f"/api/company/{company_id}/jobs"

    def post(question: dict) -> int:
        return client.post(url, json={**JOB_PAYLOAD, "screening_questions": [question]}, headers=admin).status_code

    assert post({"question": "Pick one", "question_type": "SC", "options": ["A", "B"], "correct_answers": ["A"]}) == 201
    assert post({"question": "Pick one", "question_type": "SC", "options": ["A"], "correct_answers": ["A"]}) == 400
    assert post({"question": "Pick one", "question_type": "SC", "options": ["A", "A"], "correct_answers": ["A"]}) == 400
    assert post({"question": "Pick one", "question_type": "SC", "options": ["A", "B"], "correct_answers": ["A", "B"]}) == 400
    assert post({"question": "Pick any", "question_type": "MC", "options": ["A", "B"], "correct_answers": ["C"]}) == 400
    assert post({"question": "Pick any", "question_type": "MC", "options": ["A", "B", "C"], "correct_answers": ["A", "C"]}) == 201
    assert post({"question": "Why us?", "question_type": "LT"}) == 201
    assert post({"question": "Why us?", "question_type": "ST", "options": ["A", "B"]}) == 400


def test_list_filters_by_status_and_search(client, register, create_company) -> None:
    company_id, admin = _company_admin(register, create_company)
    url = f"/api/company/{company_id}/jobs"

    backend = client.post(url, json=JOB_PAYLOAD, headers=admin).json()["job"]
    client.post(
        url,
        json={**JOB_PAYLOAD, "job_title": "Designer", "job_description": "Figma and product sense", "skills": []},
        headers=admin,
    )
    client.put(f"{url}/{backend['id']}", json={"job_post_status": "Live"}, headers=admin)

    all_jobs = client.get(url, headers=admin).json()["jobs"]
    assert [j["job_title"] for j in all_jobs] == ["Designer", "Backend Engineer"]

    live = client.get(url, params={"status": "Live"}, headers=admin).json()["jobs"]
    assert [j["job_title"] for j in live] == ["Backend Engineer"]

    found = client.get(url, params={"search": "FIGMA"}, headers=admin).json()["jobs"]
    assert [j["job_title"] for j in found] == ["Designer"]

    assert client.get(url, params={"status": "Archived"}, headers=admin).status_code == 400


def test_update_and_delete_job(client, register, create_company) -> None:
    company_id, admin = _company_admin(register, create_company)
    url = f"/api/company/{company_id}/jobs"
    job_id = client.post(url, json=JOB_PAYLOAD, headers=admin).json()["job"]["id"]

    r = client.put(f"{url}/{job_id}", json={"job_title": "Senior Backend Engineer", "job_post_status": "Expired"}, headers=admin)
    assert r.status_code == 200
    job = r.json()["job"]
    assert job["job_title"] == "Senior Backend Engineer"
    assert job["job_post_status"] == "Expired"
    assert job["expired_at"] is not None
    assert job["job_type"] == "Full-Time"

    assert client.delete(f"{url}/{job_id}", headers=admin).status_code == 200
    assert client.get(f"{url}/{job_id}", headers=admin).status_code == 404


def test_jobs_are_scoped_to_their_company(client, register, create_company) -> None:
    first_id, first_admin = _company_admin(register, create_company, "hal")
    second_id, second_admin = _company_admin(register, create_company, "ida")

    job_id = client.post(f"/api/company/{first_id}/jobs", json=JOB_PAYLOAD, headers=first_admin).json()["job"]["id"]

    # Admin of another company asking through their own company
    r = client.get(f"/api/company/{second_id}/jobs/{job_id}", headers=second_admin)
    assert r.status_code == 404
    assert client.delete(f"/api/company/{second_id}/jobs/{job_id}", headers=second_admin).status_code == 404
    assert client.get(f"/api/company/{first_id}/jobs/{job_id}", headers=first_admin).status_code == 200


def test_job_contact_fields_are_validated(client, register, create_company) -> None:
    company_id, admin = _company_admin(register, create_company, "jon")
    url = f"/api/company/{company_id}/jobs"

    for bad in ({"cv_send_email": "hr@"}, {"cv_send_email": "hr.example.com"}, {"video_url": "javascript:alert(1)"}):
        r = client.post(url, json={**JOB_PAYLOAD, **bad}, headers=admin)
        assert r.status_code == 400, bad
        assert r.json()["error"] == "Invalid data"

    r = client.post(url, json={**JOB_PAYLOAD, "video_url": "", "cv_send_email": ""}, headers=admin)
    assert r.status_code == 201, r.text
    assert r.json()["job"]["video_url"] is None
    assert r.json()["job"]["cv_send_email"] is None

    r = client.post(
        url,
        json={**JOB_PAYLOAD, "video_url": "https://videos.example.com/intro", "cv_send_email": "hr@example.com"},
        headers=admin,
    )
    assert r.status_code == 201, r.text
    job = r.json()["job"]
    assert job["video_url"].startswith("https://videos.example.com/intro")
    assert job["cv_send_email"] == "hr@example.com"


def test_update_rejects_null_for_required_fields(client, register, create_company) -> None:
    company_id, admin = _company_admin(register, create_company, "kai")
    url = f"/api/company/{company_id}/jobs"
    job_id = client.post(url, json=JOB_PAYLOAD, headers=admin).json()["job"]["id"]

    for field in ("job_title", "job_post_status", "skills"):
        r = client.put(f"{url}/{job_id}", json={"job_description": "Changed", field: None}, headers=admin)
        assert r.status_code == 400, field
        assert r.json()["error"] == "Invalid data"

    job = client.get(f"{url}/{job_id}", headers=admin).json()["job"]
    assert job["job_title"] == "Backend Engineer"
    assert job["job_description"] == "Build APIs in Python"
    assert job["job_post_status"] == "Draft"
