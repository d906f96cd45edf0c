"""Unit tests for pipeline math and tenant keys."""

import pytest

from govcrm.engine.pipeline import expected_revenue, stage_order, win_rate
from govcrm.utils.slug import tenant_key_for


def test_expected_revenue():
    assert expected_revenue(2_500_000, 60) == 1_500_000


def test_expected_revenue_missing_inputs():
    assert expected_revenue(None, 60) == 0
    assert expected_revenue(1000, None) == 0


def test_win_rate():
    assert win_rate(1, 4) == 25.0
    assert win_rate(0, 0) == 0.0


def test_stage_order_follows_pipeline():
    assert stage_order("prospecting") < stage_order("negotiation") < stage_order("closed_won")
    assert stage_order("unknown") > stage_order("closed_lost")


@pytest.mark.parametrize(
    "name,key",
    [
        ("Acme Corp", "acme-corp"),
        ("  Acme   Corp!! ", "acme-corp"),
        ("Smith & Sons, LLC", "smith-sons-llc"),
        ("A1B2", "a1b2"),
    ],
)
def test_tenant_key_for(name, key):
    assert tenant_key_for(name) == key
