# mortgage_calc/inputs/__init__.py

from .inputs import (
    AppInputs,
    InputsLoader,
    RunOptions,
    apply_query_params,
    down_payment_from_percent,
    load_inputs,
    property_tax_from_percent,
    to_query_params,
)
from .presets import PRESETS, apply_preset

__all__ = [
    "AppInputs",
    "RunOptions",
    "InputsLoader",
    "load_inputs",
    "apply_query_params",
    "to_query_params",
    "down_payment_from_percent",
    "property_tax_from_percent",
    "PRESETS",
    "apply_preset",
]
