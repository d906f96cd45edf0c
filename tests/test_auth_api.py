"""API tests for registration, login and the bearer token gate."""

from datetime import datetime, timedelta, timezone

from govcrm.auth.tokens import issue_token
from conftest import JWT_SECRET, PASSWORD


def _register(client, company="Acme Corp", email="admin@acme.com", password=PASSWORD):
    return client.post(
        "/api/auth/register",
        json={
            "companyName": company,
            "email": email,
            "password": password,
            "firstName": "Ada",
            "lastName": "Admin",
        },
    )


def _login(client, email="admin@acme.com", password=PASSWORD, tenant_key="acme-corp"):
    return client.post(
        "/api/auth/login",
        json={"email": email, "password": password, "tenantKey": tenant_key},
    )


def test_health_is_public(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert "timestamp" in body


def test_register_derives_tenant_key(client):
    resp = _register(client)
    assert resp.status_code == 201
    body = resp.json()
    assert body["tenantKey"] == "acme-corp"
    assert isinstance(body["tenantId"], int)
    assert body["message"] == "Registration successful"


def test_register_duplicate_company(client):
    assert _register(client).status_code == 201
    resp = _register(client, email="other@acme.com")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Company name already registered"}


def test_register_duplicate_after_normalisation(client):
    assert _register(client).status_code == 201
    resp = _register(client, company="ACME corp!", email="other@acme.com")
    assert resp.status_code == 400


def test_register_validation(client):
    resp = client.post("/api/auth/register", json={"companyName": "X", "email": "x@x.com"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Validation failed"
    assert body["details"]


def test_register_rejects_short_password(client):
    assert _register(client, password="short").status_code == 400


def test_register_rate_limited_per_email(client):
    statuses = [_register(client).status_code for _ in range(6)]
    assert statuses[0] == 201
    assert statuses[1:5] == [400] * 4
    assert statuses[5] == 429
    assert _register(client).json() == {"error": "Rate limit exceeded"}


def test_login_returns_token_and_user(client):
    _register(client)
    resp = _login(client)
    assert resp.status_code == 200
    body = resp.json()
    assert body["token"].count(".") == 2
    assert body["user"]["email"] == "admin@acme.com"
    assert body["user"]["role"] == "admin"
    assert body["user"]["tenantKey"] == "acme-corp"
    assert body["user"]["firstName"] == "Ada"


def test_login_failures_are_indistinguishable(client):
    _register(client)
    wrong_password = _login(client, password="not-the-password")
    unknown_user = _login(client, email="nobody@acme.com")
    unknown_tenant = _login(client, tenant_key="no-such-tenant")
    for resp in (wrong_password, unknown_user, unknown_tenant):
        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid credentials"}


def test_login_records_activity(client):
    _register(client)
    token = _login(client).json()["token"]
    resp = client.get("/api/activity", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert [e["activity_type"] for e in resp.json()] == ["login"]


def test_protected_route_requires_token(client):
    resp = client.get("/api/opportunities")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}


def test_protected_route_rejects_non_bearer(client):
    resp = client.get("/api/opportunities", headers={"Authorization": "Basic abc"})
    assert resp.status_code == 401


def test_invalid_and_expired_tokens_look_the_same(client, make_tenant):
    _, login = make_tenant()
    user = login["user"]
    expired = issue_token(
        {"userId": user["id"], "tenantId": 1, "email": user["email"], "role": "admin"},
        JWT_SECRET,
        now=datetime.now(timezone.utc) - timedelta(hours=25),
    )
    forged = issue_token(
        {"userId": user["id"], "tenantId": 1, "email": user["email"], "role": "admin"},
        "some-other-secret-0123456789abcdef0123456789",
    )
    for token in (expired, forged, "garbage"):
        resp = client.get("/api/opportunities", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid token"}


def test_me(client, make_tenant):
    headers, _ = make_tenant()
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["tenantKey"] == "acme-corp"
    assert resp.json()["role"] == "admin"


def test_register_rejects_malformed_email(client):
    for email in ("a b@@x.y", "no-at-sign.com", "user@nodot"):
        resp = _register(client, email=email)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Validation failed"


def test_register_rejects_name_without_ascii_key(client):
    resp = _register(client, company="株式会社")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation failed"
    # A later non-ASCII company is not mistaken for a duplicate
    resp = _register(client, company="Ωμέγα", email="admin@omega.com")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation failed"


def test_register_keeps_ascii_part_of_mixed_name(client):
    resp = _register(client, company="Ωμέγα Systems")
    assert resp.status_code == 201
    assert resp.json()["tenantKey"] == "systems"
