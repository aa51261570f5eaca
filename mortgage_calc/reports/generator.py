# mortgage_calc/reports/generator.py
from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Sequence
from pathlib import Path

from mortgage_calc.core.finance.views import ScheduleView, schedule_view
from mortgage_calc.schemas.models import (
    AmortizationRow,
    LoanInput,
    MortgageOutput,
    ScenarioComparison,
    YearSummary,
)

logger = logging.getLogger(__name__)


def _fmt_currency(x: float) -> str:
    """
    Format a float as currency with thousands separators.

    Example:
        123456.789 -> $123,456.79
        -2000 -> -$2,000.00
    """
    sign = "-" if x < 0 else ""
    return f"{sign}${abs(x):,.2f}"


def _fmt_currency_whole(x: float) -> str:
    sign = "-" if x < 0 else ""
    return f"{sign}${abs(x):,.0f}"


def _fmt_month(d: dt.date) -> str:
    return d.strftime("%b %Y")


def _fmt_duration(months: int) -> str:
    """14 -> '1 yr 2 mo'."""
    years, rem = divmod(months, 12)
    parts = []
    if years:
        parts.append(f"{years} yr")
    if rem or not parts:
        parts.append(f"{rem} mo")
    return " ".join(parts)


def _section(title: str) -> str:
    """
    Render a level-2 heading for Markdown sections.
    """
    return f"\n## {title}\n"


# -----------------------
# Sections
# -----------------------


def _render_header(loan: LoanInput) -> str:
    return "\n".join(
        [
            "# Mortgage Estimate",
            "",
            f"- **Home price:** {_fmt_currency(loan.home_price)}",
            f"- **Down payment:** {_fmt_currency(loan.down_payment)}",
            f"- **Interest rate:** {loan.interest_rate:g}%",
            f"- **Term:** {loan.term_years} years",
            f"- **First payment:** {_fmt_month(loan.start_date)}",
        ]
    )


def _render_summary(output: MortgageOutput) -> str:
    lines = [
        _section("Summary"),
        "| Metric | Value |",
        "|---|---|",
        f"| Loan amount | {_fmt_currency(output.loan_amount)} |",
        f"| Monthly payment | {_fmt_currency(output.total_monthly_payment)} |",
        f"| Total interest | {_fmt_currency(output.total_interest_paid)} |",
        f"| Total cost | {_fmt_currency(output.total_cost)} |",
        f"| Payoff date | {_fmt_month(output.payoff_date)} |",
    ]
    if output.hit_safety_bound:
        lines.append("")
        lines.append(
            "> **Warning:** the schedule stopped at its iteration ceiling before the balance reached zero. "
            "Check the extra payment inputs."
        )
    elif output.exceeds_term:
        lines.append("")
        lines.append(
            f"> **Note:** payoff takes {_fmt_duration(output.months_to_payoff)}, "
            f"longer than the {_fmt_duration(output.total_payments)} term."
        )
    return "\n".join(lines)


def _render_breakdown(output: MortgageOutput) -> str:
    return "\n".join(
        [
            _section("Monthly Breakdown"),
            "| Component | Monthly |",
            "|---|---|",
            f"| Principal & interest | {_fmt_currency(output.monthly_principal_and_interest)} |",
            f"| Property tax | {_fmt_currency(output.monthly_property_tax)} |",
            f"| Home insurance | {_fmt_currency(output.monthly_home_insurance)} |",
            f"| HOA | {_fmt_currency(output.monthly_hoa)} |",
            f"| PMI | {_fmt_currency(output.monthly_pmi)} |",
            f"| **Total** | **{_fmt_currency(output.total_monthly_payment)}** |",
        ]
    )


def _render_savings(loan: LoanInput, output: MortgageOutput) -> str:
    if loan.extras.is_empty:
        return ""
    return "\n".join(
        [
            _section("Extra Payment Savings"),
            f"- **Interest saved:** {_fmt_currency(output.interest_saved)}",
            f"- **Time saved:** {_fmt_duration(output.time_saved_months)}",
            f"- **Paid off in:** {_fmt_duration(output.months_to_payoff)}",
        ]
    )


def _render_schedule(rows: Sequence[AmortizationRow] | Sequence[YearSummary], view: ScheduleView) -> str:
    if not rows:
        return _section("Amortization Schedule") + "\nNo loan balance to amortize."

    label = "Year" if view == "yearly" else "Month"
    lines = [
        _section(f"Amortization Schedule ({view})"),
        f"| {label} | Principal | Interest | Extra | Total Paid | Balance |",
        "|---|---|---|---|---|---|",
    ]
    for r in rows:
        when = str(r.year) if isinstance(r, YearSummary) else _fmt_month(r.date)
        lines.append(
            f"| {when} | {_fmt_currency(r.principal)} | {_fmt_currency(r.interest)} | "
            f"{_fmt_currency(r.extra_payment)} | {_fmt_currency(r.total_payment)} | {_fmt_currency(r.balance)} |"
        )
    return "\n".join(lines)


def _render_comparison(a: MortgageOutput, b: MortgageOutput, cmp: ScenarioComparison) -> str:
    def row(label: str, va: float, vb: float, diff: float) -> str:
        change = "no change" if ScenarioComparison.is_neutral(diff) else f"{'+' if diff > 0 else ''}{_fmt_currency(diff)}"
        return f"| {label} | {_fmt_currency(va)} | {_fmt_currency(vb)} | {change} |"

    return "\n".join(
        [
            _section("Scenario Comparison"),
            "| Metric | Scenario A | Scenario B | Difference |",
            "|---|---|---|---|",
            row("Monthly payment", a.total_monthly_payment, b.total_monthly_payment, cmp.monthly_payment_diff),
            row("Total interest", a.total_interest_paid, b.total_interest_paid, cmp.total_interest_diff),
            row("Total cost", a.total_cost, b.total_cost, cmp.total_cost_diff),
        ]
    )


# -----------------------
# Public API
# -----------------------


def render_report(
    loan: LoanInput,
    output: MortgageOutput,
    *,
    view: ScheduleView = "yearly",
    comparison: tuple[MortgageOutput, ScenarioComparison] | None = None,
) -> str:
    """
    Render the full Markdown report.

    Args:
        loan: Inputs the output was calculated from.
        output: Engine output for `loan`.
        view: Schedule granularity ("yearly" or "monthly").
        comparison: Optional (scenario B output, comparison) pair; `output` is scenario A.
    """
    parts = [
        _render_header(loan),
        _render_summary(output),
        _render_breakdown(output),
        _render_savings(loan, output),
    ]
    if comparison is not None:
        other, cmp = comparison
        parts.append(_render_comparison(output, other, cmp))
    parts.append(_render_schedule(schedule_view(output.amortization_schedule, view), view))
    parts.append(
        "\n_PMI figures use a flat illustrative estimate (0.5% of the loan per year above 80% LTV), "
        "not an underwriting rate._\n"
    )
    return "\n".join(p for p in parts if p)


def render_summary_text(loan: LoanInput, output: MortgageOutput) -> str:
    """Short plain-text summary suitable for pasting into a message."""
    return "\n".join(
        [
            "Mortgage Estimate Summary:",
            f"Home Price: {_fmt_currency_whole(loan.home_price)}",
            f"Down Payment: {_fmt_currency_whole(loan.down_payment)}",
            f"Loan Amount: {_fmt_currency_whole(output.loan_amount)}",
            f"Interest Rate: {loan.interest_rate:g}%",
            f"Term: {loan.term_years} Years",
            "",
            f"Monthly Payment: {_fmt_currency_whole(output.total_monthly_payment)}",
            f"Total Cost: {_fmt_currency_whole(output.total_cost)}",
        ]
    )


def write_report(
    path: str | Path,
    loan: LoanInput,
    output: MortgageOutput,
    *,
    view: ScheduleView = "yearly",
    comparison: tuple[MortgageOutput, ScenarioComparison] | None = None,
) -> Path:
    """Render and write the report, creating parent directories as needed."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(render_report(loan, output, view=view, comparison=comparison), encoding="utf-8")
    logger.info("Report written to %s", p)
    return p
