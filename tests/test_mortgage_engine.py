# tests/test_mortgage_engine.py
import datetime as dt
import logging

import pytest

from mortgage_calc.core.finance import calculate_mortgage
from tests.utils import (
    BASE_LOAN_AMOUNT,
    BASE_MONTHLY_ESCROW,
    BASE_MONTHLY_PI,
    BASE_START,
)


def test_base_case_figures(base_output):
    out = base_output
    assert out.loan_amount == BASE_LOAN_AMOUNT
    assert out.monthly_principal_and_interest == pytest.approx(BASE_MONTHLY_PI, abs=0.01)
    assert out.monthly_property_tax == 300
    assert out.monthly_home_insurance == 100
    assert out.total_monthly_payment == pytest.approx(BASE_MONTHLY_PI + BASE_MONTHLY_ESCROW, abs=0.01)
    assert len(out.amortization_schedule) == 360
    assert out.total_payments == 360


def test_payoff_date_is_december_2055(base_output):
    last = base_output.amortization_schedule[-1]
    assert (last.date.year, last.date.month) == (2055, 12)
    assert base_output.payoff_date == last.date


def test_first_row_is_start_month_and_dates_advance_monthly(base_output):
    rows = base_output.amortization_schedule
    assert (rows[0].date.year, rows[0].date.month) == (2026, 1)
    assert (rows[1].date.year, rows[1].date.month) == (2026, 2)
    assert (rows[12].date.year, rows[12].date.month) == (2027, 1)


def test_balances_non_increasing_and_converge(base_output):
    rows = base_output.amortization_schedule
    for prev, cur in zip(rows, rows[1:]):
        assert cur.balance <= prev.balance
    assert rows[-1].balance <= 0.01
    assert not base_output.hit_safety_bound


def test_first_month_split(base_output):
    first = base_output.amortization_schedule[0]
    # 240k * 6.5% / 12
    assert first.interest == pytest.approx(1300.0, abs=1e-9)
    assert first.principal == pytest.approx(BASE_MONTHLY_PI - 1300.0, abs=0.01)
    assert first.extra_payment == 0.0
    assert first.total_payment == pytest.approx(first.payment, abs=1e-12)


def test_running_totals_match_sums(base_output):
    rows = base_output.amortization_schedule
    assert rows[-1].total_interest_paid == pytest.approx(sum(r.interest for r in rows), rel=1e-12)
    assert rows[-1].total_principal_paid == pytest.approx(BASE_LOAN_AMOUNT, abs=0.01)
    assert base_output.total_interest_paid == pytest.approx(rows[-1].total_interest_paid, rel=1e-12)


def test_total_cost_includes_down_payment_and_escrow(base_loan, base_output):
    out = base_output
    expected = (
        base_loan.down_payment
        + out.amortization_schedule[-1].total_principal_paid
        + out.total_interest_paid
        + BASE_MONTHLY_ESCROW * len(out.amortization_schedule)
    )
    assert out.total_cost == pytest.approx(expected, rel=1e-12)


def test_no_extras_means_no_savings(base_output):
    assert base_output.interest_saved == 0.0
    assert base_output.time_saved_months == 0


def test_zero_interest_rate(loan_factory):
    out = calculate_mortgage(loan_factory(interest_rate=0))
    assert out.monthly_principal_and_interest == pytest.approx(BASE_LOAN_AMOUNT / 360, abs=1e-9)
    assert out.total_interest_paid == 0
    assert all(r.interest == 0 for r in out.amortization_schedule)
    assert len(out.amortization_schedule) == 360


def test_full_down_payment_yields_empty_schedule(loan_factory):
    out = calculate_mortgage(loan_factory(down_payment=300_000))
    assert out.loan_amount == 0
    assert out.monthly_principal_and_interest == 0
    assert out.total_monthly_payment == 400
    assert out.amortization_schedule == []
    assert out.payoff_date == BASE_START
    assert out.total_interest_paid == 0
    assert out.interest_saved == 0
    assert out.time_saved_months == 0
    assert out.total_cost == pytest.approx(300_000)


def test_down_payment_above_price_is_clamped(loan_factory):
    out = calculate_mortgage(loan_factory(down_payment=350_000))
    assert out.loan_amount == 0
    assert out.amortization_schedule == []


def test_high_hoa(loan_factory):
    out = calculate_mortgage(loan_factory(hoa=1000))
    assert out.total_monthly_payment == pytest.approx(2916.96, abs=0.01)


def test_pmi_is_part_of_monthly_total(loan_factory):
    out = calculate_mortgage(loan_factory(pmi=112.5))
    assert out.monthly_pmi == 112.5
    assert out.total_monthly_payment == pytest.approx(BASE_MONTHLY_PI + BASE_MONTHLY_ESCROW + 112.5, abs=0.01)


def test_fifteen_year_term(loan_factory):
    out = calculate_mortgage(loan_factory(term_years=15))
    assert len(out.amortization_schedule) == 180
    assert out.monthly_principal_and_interest > BASE_MONTHLY_PI


@pytest.mark.parametrize(
    "extras",
    [
        {"extra_monthly_payment": 500},
        {"extra_yearly_payment": 5000},
        {"one_time_payments": [{"date": dt.date(2026, 6, 1), "amount": 10_000}]},
    ],
    ids=["monthly", "yearly", "one-time"],
)
def test_extras_shorten_schedule_and_save_interest(loan_factory, extras):
    out = calculate_mortgage(loan_factory(**extras))
    assert len(out.amortization_schedule) < 360
    assert out.interest_saved > 0
    assert out.time_saved_months == 360 - len(out.amortization_schedule)


def test_extra_monthly_payment_applies_every_month(loan_factory):
    out = calculate_mortgage(loan_factory(extra_monthly_payment=500))
    assert all(r.extra_payment == 500 for r in out.amortization_schedule[:-1])
    assert out.amortization_schedule[0].total_payment == pytest.approx(BASE_MONTHLY_PI + 500, abs=0.01)


def test_yearly_extra_lands_every_twelfth_month_after_the_first(loan_factory):
    rows = calculate_mortgage(loan_factory(extra_yearly_payment=5000)).amortization_schedule
    assert rows[0].extra_payment == 0
    assert rows[11].extra_payment == 0
    assert rows[12].extra_payment == 5000
    assert rows[13].extra_payment == 0
    assert rows[24].extra_payment == 5000


def test_one_time_payments_match_by_month_and_sum(loan_factory):
    payments = [
        {"date": dt.date(2026, 6, 28), "amount": 4_000},
        {"date": dt.date(2026, 6, 2), "amount": 6_000},
        {"date": dt.date(2025, 6, 1), "amount": 50_000},  # before the first payment: never matched
    ]
    rows = calculate_mortgage(loan_factory(one_time_payments=payments)).amortization_schedule
    june = rows[5]
    assert (june.date.year, june.date.month) == (2026, 6)
    assert june.extra_payment == pytest.approx(10_000)
    assert sum(r.extra_payment for r in rows) == pytest.approx(10_000)


def test_overpaying_on_the_last_month(loan_factory):
    out = calculate_mortgage(loan_factory(extra_monthly_payment=10_000))
    rows = out.amortization_schedule
    last, prev = rows[-1], rows[-2]
    assert last.balance == pytest.approx(0, abs=0.01)
    assert last.total_payment <= 10_000 + out.monthly_principal_and_interest
    # The final month pays exactly what was owed, nothing more
    assert last.principal + last.extra_payment == pytest.approx(prev.balance, abs=1e-6)
    assert all(r.balance >= 0 for r in rows)


def test_extras_never_push_balance_negative(loan_factory):
    out = calculate_mortgage(loan_factory(one_time_payments=[{"date": "2026-03", "amount": 1_000_000}]))
    rows = out.amortization_schedule
    assert len(rows) == 3
    assert rows[-1].balance == 0
    assert rows[-1].extra_payment < 1_000_000


def test_negative_extras_stop_at_safety_bound(loan_factory, caplog):
    with caplog.at_level(logging.WARNING, logger="mortgage_calc.core.finance.amortization"):
        out = calculate_mortgage(loan_factory(extra_monthly_payment=-2_000))
    assert len(out.amortization_schedule) == 2 * 360
    assert out.amortization_schedule[-1].balance > 0.01
    assert out.hit_safety_bound
    assert out.time_saved_months == 0
    assert any("ceiling" in rec.getMessage() for rec in caplog.records)


def test_payoff_past_term_is_not_the_safety_bound(loan_factory, caplog):
    with caplog.at_level(logging.WARNING, logger="mortgage_calc.core.finance.amortization"):
        out = calculate_mortgage(loan_factory(extra_monthly_payment=-100))
    assert 360 < len(out.amortization_schedule) < 2 * 360
    assert out.amortization_schedule[-1].balance == 0
    assert out.exceeds_term
    assert not out.hit_safety_bound
    assert not any("ceiling" in rec.getMessage() for rec in caplog.records)


def test_calculation_is_deterministic(base_loan):
    a = calculate_mortgage(base_loan)
    b = calculate_mortgage(base_loan)
    assert a == b
