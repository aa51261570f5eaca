# tests/conftest.py
from __future__ import annotations

import pytest

from mortgage_calc.core.finance import calculate_mortgage
from tests.utils import make_loan_input


# -------- Environment isolation --------
@pytest.fixture(autouse=True)
def _clear_mortcalc_env(monkeypatch):
    for key in ("MORTCALC_OUT", "MORTCALC_VIEW", "MORTCALC_AUTO_PMI"):
        monkeypatch.delenv(key, raising=False)
    yield


# -------- Loan fixtures --------
@pytest.fixture
def base_loan():
    """300k home, 60k down, 6.5% / 30y, tax 3600/yr, insurance 1200/yr, first payment Jan 2026."""
    return make_loan_input()


@pytest.fixture
def base_output(base_loan):
    return calculate_mortgage(base_loan)


@pytest.fixture
def loan_factory():
    """Factory for base inputs with overrides."""

    def _factory(**overrides):
        return make_loan_input(**overrides)

    return _factory
