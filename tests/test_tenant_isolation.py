"""Records created by one tenant are invisible to every other tenant."""

import pytest


@pytest.fixture
def acme_records(client, acme):
    company = client.post("/api/companies", json={"name": "Acme Customer"}, headers=acme).json()
    opp = client.post(
        "/api/opportunities",
        json={"name": "Acme Deal", "amount": 1000, "probability": 50, "companyId": company["id"]},
        headers=acme,
    ).json()
    client.post(
        "/api/contacts",
        json={"firstName": "Jane", "lastName": "Doe", "companyId": company["id"]},
        headers=acme,
    )
    capture = client.post(
        "/api/captures",
        json={"name": "Acme Capture", "customerName": "DoD", "opportunityId": opp["id"]},
        headers=acme,
    ).json()
    proposal = client.post(
        "/api/proposals", json={"title": "Acme Proposal"}, headers=acme
    ).json()
    return {"company": company, "opportunity": opp, "capture": capture, "proposal": proposal}


@pytest.mark.parametrize(
    "path",
    [
        "/api/opportunities",
        "/api/contacts",
        "/api/companies",
        "/api/captures",
        "/api/proposals",
        "/api/dashboard/pipeline-by-stage",
    ],
)
def test_lists_are_tenant_scoped(client, acme, globex, acme_records, path):
    assert client.get(path, headers=acme).json() != []
    resp = client.get(path, headers=globex)
    assert resp.status_code == 200
    assert resp.json() == []


def test_read_other_tenant_opportunity_is_not_found(client, globex, acme_records):
    opp_id = acme_records["opportunity"]["id"]
    resp = client.get(f"/api/opportunities/{opp_id}", headers=globex)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Opportunity not found"}


def test_update_other_tenant_opportunity_is_not_found(client, acme, globex, acme_records):
    opp_id = acme_records["opportunity"]["id"]
    resp = client.put(f"/api/opportunities/{opp_id}", json={"name": "Hijacked"}, headers=globex)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Opportunity not found"}
    assert client.get(f"/api/opportunities/{opp_id}", headers=acme).json()["name"] == "Acme Deal"


def test_update_other_tenant_proposal_is_not_found(client, globex, acme_records):
    proposal_id = acme_records["proposal"]["id"]
    resp = client.put(f"/api/proposals/{proposal_id}", json={"status": "review"}, headers=globex)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Proposal not found"}


def test_cannot_reference_other_tenant_records(client, globex, acme_records):
    resp = client.post(
        "/api/opportunities",
        json={"name": "Sneaky", "companyId": acme_records["company"]["id"]},
        headers=globex,
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Company not found"

    resp = client.post(
        "/api/captures",
        json={
            "name": "Sneaky",
            "customerName": "X",
            "opportunityId": acme_records["opportunity"]["id"],
        },
        headers=globex,
    )
    assert resp.status_code == 400

    resp = client.post(
        "/api/proposals",
        json={"title": "Sneaky", "captureId": acme_records["capture"]["id"]},
        headers=globex,
    )
    assert resp.status_code == 400


def test_client_supplied_tenant_id_is_ignored(client, acme, globex, acme_records):
    acme_tenant = acme_records["opportunity"]["tenant_id"]
    resp = client.post(
        "/api/opportunities",
        json={"name": "Globex Deal", "tenantId": acme_tenant, "tenant_id": acme_tenant},
        headers=globex,
    )
    assert resp.status_code == 201
    assert resp.json()["tenant_id"] != acme_tenant
    assert "Globex Deal" not in [o["name"] for o in client.get("/api/opportunities", headers=acme).json()]


def test_dashboard_is_tenant_scoped(client, globex, acme_records):
    kpis = client.get("/api/dashboard/kpis", headers=globex).json()
    assert kpis == {
        "totalRevenue": 0,
        "openOpportunities": 0,
        "winRate": 0,
        "pipelineValue": 0,
    }


def test_activity_is_tenant_scoped(client, globex, acme_records):
    entries = client.get("/api/activity", headers=globex).json()
    assert {e["activity_type"] for e in entries} == {"login"}


def test_users_are_tenant_scoped(client, acme, globex):
    emails = [u["email"] for u in client.get("/api/users", headers=globex).json()]
    assert emails == ["admin@globex.com"]
