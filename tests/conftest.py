from __future__ import annotations

import os
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

TEST_SECRET = "test-secret-that-is-long-enough-for-hs256-signing"


def pytest_configure() -> None:
    os.environ["NEXTAUTH_SECRET"] = TEST_SECRET
    os.environ["ENVIRONMENT"] = "test"

    # Ensure a local .env cannot make tests send real email.
    os.environ["EMAIL_USER"] = ""
    os.environ["EMAIL_PASS"] = ""
    os.environ["REQUIRE_VERIFIED_EMAIL"] = "false"


@pytest.fixture()
def outbox(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    """Captures OTP, 2FA and password reset emails instead of sending them."""
    from app.services.mail_service import mail_service

    sent: list[dict[str, Any]] = []

    async def fake_send_otp_email(to_email: str, code: str, expiry_minutes: int) -> None:
        sent.append({"kind": "otp", "to": to_email, "code": code})

    async def fake_send_two_factor_email(to_email: str, code: str, expiry_minutes: int) -> None:
        sent.append({"kind": "2fa", "to": to_email, "code": code})

    async def fake_send_password_reset_email(to_email: str, reset_link: str, expiry_minutes: int) -> None:
        sent.append({"kind": "reset", "to": to_email, "link": reset_link})

    monkeypatch.setattr(mail_service, "send_otp_email", fake_send_otp_email)
    monkeypatch.setattr(mail_service, "send_two_factor_email", fake_send_two_factor_email)
    monkeypatch.setattr(mail_service, "send_password_reset_email", fake_send_password_reset_email)
    return sent


@pytest.fixture()
def client(monkeypatch: pytest.MonkeyPatch, outbox: list[dict[str, Any]]) -> Any:
    # Each test gets its own in-memory MongoDB; no server required.
    import app.main as main
    from app.database import connect_to_mongo

    async def connect_to_mock() -> None:
        await connect_to_mongo(AsyncMongoMockClient())

    async def disconnect() -> None:
        return None

    monkeypatch.setattr(main, "connect_to_mongo", connect_to_mock)
    monkeypatch.setattr(main, "close_mongo_connection", disconnect)

    app = main.create_application()
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def register(client: TestClient) -> Callable[..., dict[str, str]]:
    """Sign up and log in; returns the Authorization header for the new user."""

    def _register(username: str, email: str, password: str = "SecretPass123") -> dict[str, str]:
        r = client.post("/api/auth/signup", json={"username": username, "email": email, "password": password})
        assert r.status_code == 201, r.text
        return login_headers(client, email, password)

    return _register


def login_headers(client: TestClient, email: str, password: str = "SecretPass123") -> dict[str, str]:
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    # Tests authenticate with explicit headers; drop the session cookie.
    client.cookies.clear()
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


COMPANY_PAYLOAD = {
    "company_name": "Acme Corp",
    "company_username": "acme",
    "address": {"line1": "1 Main Street", "city": "Springfield"},
    "industries": [{"kind": "pending", "name": "Software"}],
}


@pytest.fixture()
def create_company(client: TestClient) -> Callable[..., tuple[str, dict[str, str]]]:
    """Create a company as the given user; returns (company id, refreshed headers)."""

    def _create(headers: dict[str, str], **overrides: Any) -> tuple[str, dict[str, str]]:
        payload = {**COMPANY_PAYLOAD, **overrides}
        r = client.post("/api/company/add", json=payload, headers=headers)
        assert r.status_code == 201, r.text
        client.cookies.clear()
        body = r.json()
        return body["company"]["id"], {"Authorization": f"Bearer {body['access_token']}"}

    return _create


def run(client: TestClient, func: Callable[..., Any], *args: Any) -> Any:
    """Run a coroutine function on the app's event loop."""
    return client.portal.call(func, *args)


def fetch_user(client: TestClient, email: str) -> Any:
    from app.models.user import User

    async def _fetch() -> Any:
        return await User.find_one({"email": email})

    return run(client, _fetch)
