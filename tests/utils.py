# tests/utils.py
"""
Single source of truth for test data and factories.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any

from mortgage_calc.schemas.models import LoanInput

# -----------------------------
# Global defaults (edit once)
# -----------------------------

BASE_HOME_PRICE = 300_000.0
BASE_DOWN_PAYMENT = 60_000.0
BASE_RATE_PCT = 6.5
BASE_TERM_YEARS = 30
BASE_PROPERTY_TAX = 3_600.0  # 300 / month
BASE_HOME_INSURANCE = 1_200.0  # 100 / month
BASE_START = dt.date(2026, 1, 1)

# Known-good figures for the base loan (240k @ 6.5% / 30y)
BASE_LOAN_AMOUNT = 240_000.0
BASE_MONTHLY_PI = 1516.96
BASE_MONTHLY_ESCROW = 400.0


def base_loan_fields() -> dict[str, Any]:
    return {
        "home_price": BASE_HOME_PRICE,
        "down_payment": BASE_DOWN_PAYMENT,
        "interest_rate": BASE_RATE_PCT,
        "term_years": BASE_TERM_YEARS,
        "property_tax": BASE_PROPERTY_TAX,
        "home_insurance": BASE_HOME_INSURANCE,
        "hoa": 0.0,
        "pmi": 0.0,
        "start_date": BASE_START,
    }


def make_loan_input(**overrides: Any) -> LoanInput:
    """Base LoanInput with keyword overrides (flat extra_* names are accepted)."""
    return LoanInput(**{**base_loan_fields(), **overrides})


def write_json(path: Path, payload: dict[str, Any]) -> Path:
    """Serialize a payload (dates as ISO strings) to `path`."""
    path.write_text(json.dumps(payload, default=str), encoding="utf-8")
    return path
