# mortgage_calc/core/finance/compare.py
from __future__ import annotations

from mortgage_calc.schemas.models import MortgageOutput, ScenarioComparison


def compare_scenarios(a: MortgageOutput, b: MortgageOutput) -> ScenarioComparison:
    """Side-by-side deltas for two calculated scenarios (B - A; negative means B is cheaper)."""
    return ScenarioComparison(
        monthly_payment_diff=b.total_monthly_payment - a.total_monthly_payment,
        total_interest_diff=b.total_interest_paid - a.total_interest_paid,
        total_cost_diff=b.total_cost - a.total_cost,
    )
