"""API tests for the opportunity pipeline."""


def _create(client, headers, **fields):
    body = {"name": "Federal Cloud Migration", "type": "new_business"}
    body.update(fields)
    resp = client.post("/api/opportunities", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_computes_expected_revenue(client, make_tenant):
    headers, login = make_tenant()
    opp = _create(client, headers, amount=2_500_000, probability=60)
    assert opp["expected_revenue"] == 1_500_000
    assert opp["stage"] == "prospecting"
    assert opp["owner_id"] == login["user"]["id"]
    assert opp["tenant_id"]


def test_create_defaults_probability_to_zero(client, acme):
    opp = _create(client, acme, amount=1000)
    assert opp["probability"] == 0
    assert opp["expected_revenue"] == 0


def test_create_validates_input(client, acme):
    resp = client.post("/api/opportunities", json={"probability": 50}, headers=acme)
    assert resp.status_code == 400
    resp = client.post(
        "/api/opportunities", json={"name": "X", "probability": 150}, headers=acme
    )
    assert resp.status_code == 400
    resp = client.post("/api/opportunities", json={"name": "X", "stage": "won"}, headers=acme)
    assert resp.status_code == 400


def test_list_newest_first_with_filters(client, make_tenant):
    headers, login = make_tenant()
    first = _create(client, headers, name="First")
    second = _create(client, headers, name="Second", stage="proposal")

    resp = client.get("/api/opportunities", headers=headers)
    assert resp.status_code == 200
    assert [o["id"] for o in resp.json()] == [second["id"], first["id"]]
    assert resp.json()[0]["owner_name"] == "Ada Admin"

    resp = client.get("/api/opportunities", params={"stage": "proposal"}, headers=headers)
    assert [o["name"] for o in resp.json()] == ["Second"]

    owner = login["user"]["id"]
    resp = client.get("/api/opportunities", params={"ownerId": owner}, headers=headers)
    assert len(resp.json()) == 2
    resp = client.get("/api/opportunities", params={"ownerId": owner + 100}, headers=headers)
    assert resp.json() == []


def test_list_empty(client, acme):
    resp = client.get("/api/opportunities", headers=acme)
    assert resp.status_code == 200
    assert resp.json() == []


def test_list_includes_company_name(client, acme):
    company = client.post("/api/companies", json={"name": "Dept of Energy"}, headers=acme).json()
    _create(client, acme, companyId=company["id"])
    listed = client.get("/api/opportunities", headers=acme).json()
    assert listed[0]["company_name"] == "Dept of Energy"


def test_get_one(client, acme):
    opp = _create(client, acme)
    resp = client.get(f"/api/opportunities/{opp['id']}", headers=acme)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Federal Cloud Migration"


def test_get_missing(client, acme):
    resp = client.get("/api/opportunities/999", headers=acme)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Opportunity not found"}


def test_update_recomputes_from_stored_amount(client, acme):
    opp = _create(client, acme, amount=2_500_000, probability=60)
    resp = client.put(
        f"/api/opportunities/{opp['id']}", json={"probability": 80}, headers=acme
    )
    assert resp.status_code == 200
    assert resp.json()["expected_revenue"] == 2_000_000
    assert resp.json()["amount"] == 2_500_000


def test_update_amount_only(client, acme):
    opp = _create(client, acme, amount=1_000_000, probability=50)
    resp = client.put(
        f"/api/opportunities/{opp['id']}", json={"amount": 3_000_000}, headers=acme
    )
    assert resp.json()["expected_revenue"] == 1_500_000


def test_update_applies_only_supplied_fields(client, acme):
    opp = _create(client, acme, amount=100, probability=10, description="keep me")
    resp = client.put(
        f"/api/opportunities/{opp['id']}", json={"stage": "negotiation"}, headers=acme
    )
    body = resp.json()
    assert body["stage"] == "negotiation"
    assert body["description"] == "keep me"
    assert body["name"] == "Federal Cloud Migration"
    assert body["expected_revenue"] == 10


def test_update_rejects_null_required_field(client, acme):
    opp = _create(client, acme)
    resp = client.put(f"/api/opportunities/{opp['id']}", json={"name": None}, headers=acme)
    assert resp.status_code == 400


def test_update_missing(client, acme):
    resp = client.put("/api/opportunities/4242", json={"name": "X"}, headers=acme)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Opportunity not found"}


def test_create_and_update_are_logged(client, acme):
    opp = _create(client, acme)
    client.put(f"/api/opportunities/{opp['id']}", json={"stage": "proposal"}, headers=acme)
    entries = client.get("/api/activity", headers=acme).json()
    logged = [
        (e["activity_type"], e["entity_id"])
        for e in entries
        if e["entity_type"] == "opportunity"
    ]
    assert logged == [("update", opp["id"]), ("create", opp["id"])]
