"""
Mortgage amortization engine: schedules, escrow totals, extra-payment savings
and a PMI estimate from a single LoanInput.
"""

from __future__ import annotations

__version__ = "0.1.0"

from mortgage_calc.core.finance import calculate_mortgage, estimate_pmi
from mortgage_calc.schemas.models import (
    AmortizationRow,
    ExtraPayments,
    LoanInput,
    MortgageOutput,
    OneTimePayment,
)

__all__ = [
    "__version__",
    "calculate_mortgage",
    "estimate_pmi",
    "LoanInput",
    "ExtraPayments",
    "OneTimePayment",
    "AmortizationRow",
    "MortgageOutput",
]
