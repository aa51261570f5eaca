# mortgage_calc/inputs/presets.py
"""
Named input presets.

Each preset is a function of the current inputs so that relative tweaks
(e.g. "rate + 2 points") stay relative to whatever the user has entered.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from mortgage_calc.schemas.models import LoanInput

PresetFn = Callable[[LoanInput], dict[str, Any]]


def _first_time_buyer(loan: LoanInput) -> dict[str, Any]:
    return {"down_payment": loan.home_price * 0.03, "term_years": 30}


def _fifteen_year_payoff(loan: LoanInput) -> dict[str, Any]:
    return {"term_years": 15}


def _rate_stress(loan: LoanInput) -> dict[str, Any]:
    return {"interest_rate": loan.interest_rate + 2}


PRESETS: dict[str, tuple[str, PresetFn]] = {
    "first-time-buyer": ("First-time buyer", _first_time_buyer),
    "15-year-payoff": ("15-year payoff", _fifteen_year_payoff),
    "rate-stress": ("Higher-rate stress test", _rate_stress),
}


def apply_preset(loan: LoanInput, name: str) -> LoanInput:
    """Return a copy of `loan` with the named preset applied."""
    try:
        _, fn = PRESETS[name]
    except KeyError as e:
        raise ValueError(f"Unknown preset {name!r}; choose from: {', '.join(PRESETS)}") from e
    return LoanInput.model_validate({**loan.model_dump(), **fn(loan)})
