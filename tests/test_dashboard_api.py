"""API tests for dashboard aggregates."""

import pytest


@pytest.fixture
def pipeline(client, acme):
    deals = [
        {"name": "Won", "amount": 1_000_000, "probability": 100, "stage": "closed_won"},
        {"name": "Lost", "amount": 500_000, "probability": 0, "stage": "closed_lost"},
        {"name": "Cloud", "amount": 2_500_000, "probability": 60, "stage": "prospecting"},
        {"name": "Cyber", "amount": 1_000_000, "probability": 50, "stage": "qualification"},
        {"name": "Data", "amount": 400_000, "probability": 25, "stage": "qualification"},
    ]
    for deal in deals:
        assert client.post("/api/opportunities", json=deal, headers=acme).status_code == 201


def test_kpis(client, acme, pipeline):
    resp = client.get("/api/dashboard/kpis", headers=acme)
    assert resp.status_code == 200
    assert resp.json() == {
        "totalRevenue": 1_000_000,
        "openOpportunities": 3,
        "winRate": 50.0,
        "pipelineValue": 2_100_000,
    }


def test_kpis_empty_tenant(client, acme):
    assert client.get("/api/dashboard/kpis", headers=acme).json() == {
        "totalRevenue": 0,
        "openOpportunities": 0,
        "winRate": 0,
        "pipelineValue": 0,
    }


def test_pipeline_by_stage(client, acme, pipeline):
    resp = client.get("/api/dashboard/pipeline-by-stage", headers=acme)
    assert resp.status_code == 200
    assert resp.json() == [
        {"stage": "prospecting", "count": 1, "value": 2_500_000},
        {"stage": "qualification", "count": 2, "value": 1_400_000},
    ]
