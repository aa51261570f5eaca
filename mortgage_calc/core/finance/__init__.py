# mortgage_calc/core/finance/__init__.py

from .amortization import (
    add_months,
    amortization_step,
    monthly_payment,
    run_pass,
)
from .compare import compare_scenarios
from .engine import calculate_mortgage
from .pmi import apply_auto_pmi, estimate_pmi
from .views import chart_series, schedule_view, yearly_schedule

__all__ = [
    "calculate_mortgage",
    "estimate_pmi",
    "apply_auto_pmi",
    "monthly_payment",
    "amortization_step",
    "run_pass",
    "add_months",
    "yearly_schedule",
    "chart_series",
    "schedule_view",
    "compare_scenarios",
]
