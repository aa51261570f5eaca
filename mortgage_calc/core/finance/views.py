# mortgage_calc/core/finance/views.py

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from mortgage_calc.schemas.models import AmortizationRow, ChartPoint, YearSummary

ScheduleView = Literal["monthly", "yearly"]


def yearly_schedule(rows: Sequence[AmortizationRow]) -> list[YearSummary]:
    """
    Roll monthly rows up by calendar year.

    Flow fields (payment, principal, interest, extra, total) are summed; the
    balance, cumulative totals and date come from the year's last row. A first
    or last year may hold fewer than 12 months.
    """
    out: list[YearSummary] = []
    cur: YearSummary | None = None

    for row in rows:
        if cur is None or row.date.year != cur.year:
            if cur is not None:
                out.append(cur)
            cur = YearSummary(year=row.date.year, date=row.date)

        cur.payment += row.payment
        cur.principal += row.principal
        cur.interest += row.interest
        cur.extra_payment += row.extra_payment
        cur.total_payment += row.total_payment
        cur.balance = row.balance
        cur.total_interest_paid = row.total_interest_paid
        cur.total_principal_paid = row.total_principal_paid
        cur.date = row.date

    if cur is not None:
        out.append(cur)
    return out


def chart_series(rows: Sequence[AmortizationRow]) -> list[ChartPoint]:
    """Year -> end-of-year balance and cumulative interest/principal."""
    return [
        ChartPoint(
            year=y.year,
            balance=y.balance,
            total_interest=y.total_interest_paid,
            total_principal=y.total_principal_paid,
        )
        for y in yearly_schedule(rows)
    ]


def schedule_view(
    rows: Sequence[AmortizationRow], view: ScheduleView = "monthly"
) -> list[AmortizationRow] | list[YearSummary]:
    """Return the schedule in the requested granularity."""
    if view == "monthly":
        return list(rows)
    if view == "yearly":
        return yearly_schedule(rows)
    raise ValueError(f"Unknown schedule view: {view!r} (expected 'monthly' or 'yearly')")
