# mortgage_calc/schemas/models.py

from __future__ import annotations

import datetime as dt
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_YEAR_MONTH = re.compile(r"^\d{4}-\d{2}$")


def _coerce_month_date(v: Any) -> Any:
    """Accept date, datetime, 'YYYY-MM-DD' or 'YYYY-MM'. Only year/month are meaningful downstream."""
    if isinstance(v, dt.datetime):
        return v.date()
    if isinstance(v, str):
        s = v.strip()
        if _YEAR_MONTH.match(s):
            return f"{s}-01"
        # Tolerate full ISO timestamps ("2026-01-01T00:00:00.000Z") from serialized browser state
        if "T" in s:
            return s.split("T", 1)[0]
        return s
    return v


# =========================
# Core inputs
# =========================


class OneTimePayment(BaseModel):
    """A lump-sum principal payment applied in the calendar month of `date`."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    date: dt.date = Field(..., description="Calendar month the payment lands in (day-of-month is ignored).")
    amount: float = Field(..., description="Extra principal paid that month (currency units).")

    @field_validator("date", mode="before")
    @classmethod
    def _month_date(cls, v: Any) -> Any:
        return _coerce_month_date(v)


class ExtraPayments(BaseModel):
    """
    Extra principal configuration. Every field has an explicit default so that
    "no extras" is a concrete value rather than an absent one.

    Amounts must be finite but are deliberately not range-checked: the schedule
    builder tolerates pathological (negative) extras and stops at its iteration ceiling.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    monthly: float = Field(0.0, description="Extra principal added to every monthly payment.")
    yearly: float = Field(
        0.0, description="Extra principal added once per 12-month cycle (months 12, 24, ... counted from 0)."
    )
    one_time: tuple[OneTimePayment, ...] = Field(
        (), description="Lump sums matched against the schedule by (year, month); same-month entries are summed."
    )

    @property
    def is_empty(self) -> bool:
        return self.monthly == 0 and self.yearly == 0 and not self.one_time


class LoanInput(BaseModel):
    """
    Loan and payment parameters for a single calculation call.

    Conventions:
      - interest_rate is an annual PERCENT (6.5 means 6.5%), not a fraction.
      - property_tax and home_insurance are ANNUAL amounts; hoa and pmi are MONTHLY.
      - start_date anchors the first payment; only its year and month are used.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    home_price: float = Field(..., ge=0, description="Purchase price of the home (currency units).")
    down_payment: float = Field(..., ge=0, description="Cash down payment (currency units, not a percent).")
    interest_rate: float = Field(..., ge=0, description="Annual nominal rate as a percent (e.g., 6.5 = 6.5%).")
    term_years: int = Field(30, gt=0, description="Loan term in years; converted to term_years * 12 payments.")
    property_tax: float = Field(0.0, ge=0, description="Annual property tax.")
    home_insurance: float = Field(0.0, ge=0, description="Annual homeowner's insurance.")
    hoa: float = Field(0.0, ge=0, description="Monthly HOA dues.")
    pmi: float = Field(0.0, ge=0, description="Monthly private mortgage insurance premium.")
    start_date: dt.date = Field(..., description="Month of the first scheduled payment.")
    extras: ExtraPayments = Field(default_factory=ExtraPayments, description="Extra principal payments.")

    @model_validator(mode="before")
    @classmethod
    def _fold_flat_extras(cls, data: Any) -> Any:
        """
        Accept the flat field names (extra_monthly_payment, extra_yearly_payment,
        one_time_payments) and fold them into `extras`. Explicit `extras` wins per key.
        """
        if not isinstance(data, dict):
            return data
        flat = {
            "extra_monthly_payment": "monthly",
            "extra_yearly_payment": "yearly",
            "one_time_payments": "one_time",
        }
        if not any(k in data for k in flat):
            return data

        data = dict(data)
        extras = data.get("extras") or {}
        if isinstance(extras, ExtraPayments):
            extras = extras.model_dump()
        extras = dict(extras)
        for key, target in flat.items():
            if key in data:
                value = data.pop(key)
                if value is not None:
                    extras.setdefault(target, value)
        data["extras"] = extras
        return data

    @field_validator("start_date", mode="before")
    @classmethod
    def _month_date(cls, v: Any) -> Any:
        return _coerce_month_date(v)

    @property
    def loan_amount(self) -> float:
        return max(0.0, self.home_price - self.down_payment)

    @property
    def total_payments(self) -> int:
        return self.term_years * 12

    @property
    def ltv(self) -> float:
        """Loan-to-value; 0.0 when the home price is zero."""
        return self.loan_amount / self.home_price if self.home_price else 0.0


# =========================
# Outputs
# =========================


class AmortizationRow(BaseModel):
    """One scheduled month. Cumulative totals run through this row."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    payment: float = Field(..., description="Fixed scheduled principal-and-interest amount.")
    principal: float = Field(..., description="Principal portion of the fixed payment this month.")
    interest: float = Field(..., description="Interest accrued and paid this month.")
    extra_payment: float = Field(0.0, description="Extra principal applied this month (after clipping).")
    total_payment: float = Field(..., description="payment + extra_payment (escrow reported separately).")
    balance: float = Field(..., description="Remaining principal after this month, floored at 0.")
    total_interest_paid: float
    total_principal_paid: float


class MortgageOutput(BaseModel):
    """Derived summary for one calculation call. Never persisted."""

    loan_amount: float
    monthly_principal_and_interest: float
    monthly_property_tax: float
    monthly_home_insurance: float
    monthly_hoa: float
    monthly_pmi: float
    total_monthly_payment: float = Field(..., description="P&I plus all monthly escrow items (no extras).")
    total_interest_paid: float
    total_cost: float = Field(..., description="Down payment + principal + interest + escrow over the actual payoff.")
    payoff_date: dt.date
    amortization_schedule: list[AmortizationRow] = Field(default_factory=list)
    interest_saved: float = Field(0.0, description="Interest avoided versus the no-extras baseline (>= 0).")
    time_saved_months: int = Field(0, description="Months avoided versus the no-extras baseline (>= 0).")
    total_payments: int = Field(0, description="Contractual number of monthly payments (term_years * 12).")

    @property
    def monthly_escrow(self) -> float:
        return self.monthly_property_tax + self.monthly_home_insurance + self.monthly_hoa + self.monthly_pmi

    @property
    def months_to_payoff(self) -> int:
        return len(self.amortization_schedule)

    @property
    def exceeds_term(self) -> bool:
        """True when the schedule ran longer than the contractual term (e.g. negative extras)."""
        return self.months_to_payoff > self.total_payments

    @property
    def hit_safety_bound(self) -> bool:
        """True when the schedule stopped at its iteration ceiling with a residual balance."""
        if not self.amortization_schedule:
            return False
        return self.amortization_schedule[-1].balance > 0.01


# =========================
# Presentation-facing views
# =========================


class YearSummary(BaseModel):
    """Calendar-year roll-up of schedule rows: flows summed, balances taken at year end."""

    year: int
    date: dt.date = Field(..., description="Date of the last scheduled month in this year.")
    payment: float = 0.0
    principal: float = 0.0
    interest: float = 0.0
    extra_payment: float = 0.0
    total_payment: float = 0.0
    balance: float = 0.0
    total_interest_paid: float = 0.0
    total_principal_paid: float = 0.0


class ChartPoint(BaseModel):
    """Year-keyed point for a balance / cumulative-interest chart."""

    year: int
    balance: float
    total_interest: float
    total_principal: float


class ScenarioComparison(BaseModel):
    """Differences between two calculated scenarios, expressed as B - A."""

    monthly_payment_diff: float
    total_interest_diff: float
    total_cost_diff: float

    @staticmethod
    def is_neutral(diff: float) -> bool:
        """Differences under one currency unit are treated as no change."""
        return abs(diff) < 1
