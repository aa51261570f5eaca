# mortgage_calc/core/finance/amortization.py

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from mortgage_calc.schemas.models import AmortizationRow, ExtraPayments, OneTimePayment

logger = logging.getLogger(__name__)

BALANCE_EPSILON = 0.01  # balances at or below this are treated as paid off
SAFETY_FACTOR = 2  # actual pass may run at most SAFETY_FACTOR * total_payments months


@dataclass(frozen=True)
class MonthStep:
    """Outcome of applying one month's payment to a balance."""

    interest: float
    principal: float
    extra: float
    balance: float  # raw remaining balance (not floored)


@dataclass
class PassResult:
    """Totals (and optionally rows) from one simulated payoff run."""

    months: int = 0
    total_interest: float = 0.0
    total_principal: float = 0.0
    ending_balance: float = 0.0
    rows: list[AmortizationRow] = field(default_factory=list)


def monthly_payment(loan_amount: float, monthly_rate: float, total_payments: int) -> float:
    """
    Fixed monthly principal-and-interest payment for a fully amortizing loan.

    Formula (standard annuity):
        P = L * r * (1 + r)^n / ((1 + r)^n - 1)

    Where:
        L = loan amount
        r = monthly rate (annual percent / 100 / 12)
        n = number of monthly payments

    Notes:
        - r == 0 degrades to L / n, the limit of the formula as r -> 0.
        - A non-positive loan amount (or term) pays nothing.
    """
    if loan_amount <= 0 or total_payments <= 0:
        return 0.0
    if monthly_rate <= 0:
        return loan_amount / total_payments
    growth = (1 + monthly_rate) ** total_payments
    return loan_amount * (monthly_rate * growth) / (growth - 1)


def add_months(start: dt.date, months: int) -> dt.date:
    """Advance a date by whole calendar months. Day-of-month is normalized to the 1st."""
    idx = start.year * 12 + (start.month - 1) + months
    return dt.date(idx // 12, idx % 12 + 1, 1)


def index_one_time_payments(payments: Iterable[OneTimePayment]) -> dict[tuple[int, int], float]:
    """Sum one-time payments by (year, month) for O(1) lookup per scheduled month."""
    out: dict[tuple[int, int], float] = {}
    for p in payments:
        key = (p.date.year, p.date.month)
        out[key] = out.get(key, 0.0) + p.amount
    return out


def scheduled_extra(
    extras: ExtraPayments,
    month_index: int,
    when: dt.date,
    one_time_index: dict[tuple[int, int], float],
) -> float:
    """
    Extra principal scheduled for a month, before clipping.

    month_index is 0-based: the yearly extra lands on months 12, 24, ... (never month 0).
    """
    extra = extras.monthly
    if month_index > 0 and month_index % 12 == 0:
        extra += extras.yearly
    extra += one_time_index.get((when.year, when.month), 0.0)
    return extra


def amortization_step(balance: float, monthly_rate: float, payment: float, extra: float = 0.0) -> MonthStep:
    """
    Apply one month's fixed payment plus extra principal to `balance`.

    Clip rule: principal + extra never exceeds the remaining balance. The extra
    absorbs the overshoot first; if the fixed principal alone overshoots, the
    principal is capped at the balance and the extra drops to zero. Overshoot is
    discarded, never carried forward.
    """
    interest = balance * monthly_rate
    principal = payment - interest

    if balance < principal + extra:
        extra = balance - principal
        if extra < 0:
            principal = balance
            extra = 0.0

    return MonthStep(interest=interest, principal=principal, extra=extra, balance=balance - principal - extra)


def run_pass(
    loan_amount: float,
    monthly_rate: float,
    payment: float,
    start_date: dt.date,
    *,
    max_months: int,
    extras: ExtraPayments | None = None,
    record: bool = True,
) -> PassResult:
    """
    Simulate payoff month by month until the balance is within BALANCE_EPSILON or
    `max_months` is reached.

    Args:
        loan_amount: Starting principal.
        monthly_rate: Monthly rate as a fraction.
        payment: Fixed principal-and-interest payment.
        start_date: Month of the first payment.
        max_months: Iteration ceiling for this pass.
        extras: Extra principal configuration. None runs the no-extras baseline.
        record: Whether to build one AmortizationRow per month.

    Returns:
        PassResult with month count, cumulative totals, the raw ending balance and
        (when recording) the schedule rows.
    """
    result = PassResult(ending_balance=max(0.0, loan_amount))
    if loan_amount <= 0:
        return result

    one_time_index = index_one_time_payments(extras.one_time) if extras is not None else {}
    balance = loan_amount
    when = add_months(start_date, 0)

    while balance > BALANCE_EPSILON and result.months < max_months:
        extra = scheduled_extra(extras, result.months, when, one_time_index) if extras is not None else 0.0

        step = amortization_step(balance, monthly_rate, payment, extra)
        balance = step.balance
        result.total_interest += step.interest
        result.total_principal += step.principal + step.extra

        if record:
            result.rows.append(
                AmortizationRow(
                    date=when,
                    payment=payment,
                    principal=step.principal,
                    interest=step.interest,
                    extra_payment=step.extra,
                    total_payment=payment + step.extra,
                    balance=max(0.0, balance),
                    total_interest_paid=result.total_interest,
                    total_principal_paid=result.total_principal,
                )
            )
        when = add_months(when, 1)
        result.months += 1

    result.ending_balance = balance
    if balance > BALANCE_EPSILON:
        logger.warning(
            "Payoff stopped at the %d-month ceiling with %.2f still owed; check for negative extra payments.",
            max_months,
            balance,
        )
    return result
