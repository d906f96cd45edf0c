"""Shared fixtures: an app on a fresh in-memory database per test."""

import pytest
from fastapi.testclient import TestClient

from govcrm.config import Settings
from govcrm.main import create_app

JWT_SECRET = "test-secret-0123456789abcdef0123456789abcdef"
PASSWORD = "correct-horse-battery"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret=JWT_SECRET,
        bcrypt_rounds=4,
        create_schema=True,
        log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def make_tenant(client):
    """Register a company and log in its admin; returns (headers, login body)."""

    def _make(company: str = "Acme Corp", email: str = "admin@acme.com"):
        resp = client.post(
            "/api/auth/register",
            json={
                "companyName": company,
                "email": email,
                "password": PASSWORD,
                "firstName": "Ada",
                "lastName": "Admin",
            },
        )
        assert resp.status_code == 201, resp.text
        tenant_key = resp.json()["tenantKey"]
        resp = client.post(
            "/api/auth/login",
            json={"email": email, "password": PASSWORD, "tenantKey": tenant_key},
        )
        assert resp.status_code == 200, resp.text
        body = resp.json()
        return {"Authorization": f"Bearer {body['token']}"}, body

    return _make


@pytest.fixture
def acme(make_tenant):
    headers, _ = make_tenant("Acme Corp", "admin@acme.com")
    return headers


@pytest.fixture
def globex(make_tenant):
    headers, _ = make_tenant("Globex Inc", "admin@globex.com")
    return headers
