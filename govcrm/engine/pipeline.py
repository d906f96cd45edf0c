"""Pipeline figures derived from opportunity amounts and probabilities."""

from govcrm.models.crm import OPPORTUNITY_STAGES


def expected_revenue(amount: float | None, probability: float | None) -> float:
    """Amount weighted by win probability (percent); missing values count as 0."""
    return (amount or 0) * (probability or 0) / 100


def win_rate(won: int, closed: int) -> float:
    """Percentage of closed opportunities that were won; 0 when none are closed."""
    if not closed:
        return 0.0
    return won * 100.0 / closed


def stage_order(stage: str) -> int:
    try:
        return OPPORTUNITY_STAGES.index(stage)
    except ValueError:
        return len(OPPORTUNITY_STAGES)
