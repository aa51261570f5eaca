# mortgage_calc/core/finance/pmi.py
"""
Private mortgage insurance estimate.

The rule is a flat illustrative heuristic: when loan-to-value exceeds 80%, the
premium is 0.5% of the loan per year, billed monthly. It does not scale with
LTV, does not drop off as the loan amortizes, and is not an underwriting rate
table.
"""

from __future__ import annotations

from mortgage_calc.schemas.models import LoanInput

PMI_LTV_THRESHOLD = 0.8
PMI_ANNUAL_RATE = 0.005


def estimate_pmi(loan_amount: float, home_price: float) -> float:
    """Monthly PMI premium for a loan against a home price (0.0 at or under 80% LTV)."""
    if home_price == 0:
        return 0.0
    ltv = loan_amount / home_price
    if ltv > PMI_LTV_THRESHOLD:
        return (loan_amount * PMI_ANNUAL_RATE) / 12
    return 0.0


def apply_auto_pmi(loan: LoanInput, *, auto: bool = True) -> LoanInput:
    """
    Feed the PMI estimate back into the input when auto mode is on.

    With auto=False the caller's manually entered premium is kept as-is. The
    same instance is returned when nothing changes.
    """
    if not auto:
        return loan
    estimated = estimate_pmi(loan.loan_amount, loan.home_price)
    if estimated == loan.pmi:
        return loan
    return loan.model_copy(update={"pmi": estimated})
