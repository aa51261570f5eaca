# mortgage_calc/core/finance/engine.py
from __future__ import annotations

import logging

from mortgage_calc.schemas.models import LoanInput, MortgageOutput

from .amortization import SAFETY_FACTOR, monthly_payment, run_pass

logger = logging.getLogger(__name__)


def calculate_mortgage(loan: LoanInput) -> MortgageOutput:
    """
    Build the amortization schedule and summary figures for one loan.

    Two independent passes share the same step function:
      - baseline: fixed payment only, capped at the contractual term
      - actual:   fixed payment plus extras, capped at SAFETY_FACTOR * term

    Savings are the non-negative difference between the two. Deterministic and
    side-effect free (apart from debug logging).
    """
    loan_amount = loan.loan_amount
    monthly_rate = loan.interest_rate / 100 / 12
    n = loan.total_payments

    pi = monthly_payment(loan_amount, monthly_rate, n)

    monthly_tax = loan.property_tax / 12
    monthly_insurance = loan.home_insurance / 12
    monthly_hoa = loan.hoa
    monthly_pmi = loan.pmi
    escrow = monthly_tax + monthly_insurance + monthly_hoa + monthly_pmi

    baseline = run_pass(loan_amount, monthly_rate, pi, loan.start_date, max_months=n, record=False)
    actual = run_pass(
        loan_amount,
        monthly_rate,
        pi,
        loan.start_date,
        max_months=SAFETY_FACTOR * n,
        extras=loan.extras,
    )

    schedule = actual.rows
    payoff_date = schedule[-1].date if schedule else loan.start_date

    total_cost = loan.down_payment + actual.total_principal + actual.total_interest + escrow * actual.months

    logger.debug(
        "loan=%.2f rate=%.4f%% pi=%.2f baseline_months=%d actual_months=%d",
        loan_amount,
        loan.interest_rate,
        pi,
        baseline.months,
        actual.months,
    )

    return MortgageOutput(
        loan_amount=loan_amount,
        monthly_principal_and_interest=pi,
        monthly_property_tax=monthly_tax,
        monthly_home_insurance=monthly_insurance,
        monthly_hoa=monthly_hoa,
        monthly_pmi=monthly_pmi,
        total_monthly_payment=pi + escrow,
        total_interest_paid=actual.total_interest,
        total_cost=total_cost,
        payoff_date=payoff_date,
        amortization_schedule=schedule,
        interest_saved=max(0.0, baseline.total_interest - actual.total_interest),
        time_saved_months=max(0, baseline.months - actual.months),
        total_payments=n,
    )
