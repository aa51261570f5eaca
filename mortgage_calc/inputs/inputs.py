# mortgage_calc/inputs/inputs.py
"""
Inputs loader for the mortgage calculator.

Goals
-----
- File-first inputs validated with Pydantic.
- Accept both the flat shape (LoanInput at the root) and a structured shape
  that carries run options alongside the loan.
- Rebuild calendar dates from serialized strings before the engine sees them.
- Minimal environment-variable overrides for CI/CLI convenience.

Supported JSON shapes
---------------------
1) Flat (root = LoanInput)
   {
     "home_price": 300000, "down_payment": 60000, "interest_rate": 6.5,
     "term_years": 30, "start_date": "2026-01", ...
   }

2) Structured (root = AppInputs)
   {
     "inputs": { ... LoanInput ... },
     "run": {
       "out": "mortgage_report.md",
       "view": "yearly",
       "auto_pmi": true,
       "compare": { ... optional second LoanInput ... }
     }
   }

Environment overrides (optional)
--------------------------------
- MORTCALC_OUT       -> AppInputs.run.out
- MORTCALC_VIEW      -> AppInputs.run.view ("yearly" | "monthly")
- MORTCALC_AUTO_PMI  -> AppInputs.run.auto_pmi ("1/true/yes" | "0/false/no")

Public API
----------
- class InputsLoader:
    - load(path: str | Path | None) -> AppInputs
    - load_json(text: str) -> AppInputs
    - with_overrides(cfg, **kwargs) -> AppInputs (non-destructive copies)
- apply_query_params(loan, params) -> LoanInput  (share-link keys)
- down_payment_from_percent / property_tax_from_percent
- load_inputs(path) -> AppInputs  (convenience)
"""

from __future__ import annotations

import json
import logging
import math
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, cast

from pydantic import BaseModel, Field, ValidationError

from mortgage_calc.schemas.models import LoanInput

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

# Share-link query keys -> LoanInput fields
QUERY_PARAM_FIELDS: dict[str, str] = {
    "price": "home_price",
    "down": "down_payment",
    "rate": "interest_rate",
    "term": "term_years",
    "tax": "property_tax",
    "hoa": "hoa",
}

# ----------------------------
# Pydantic models for structured inputs
# ----------------------------


class RunOptions(BaseModel):
    """Runtime (non-financial) options controlling a calculation run."""

    out: str = Field("mortgage_report.md", description="Path to write the Markdown report.")
    view: Literal["yearly", "monthly"] = Field("yearly", description="Schedule granularity in the report.")
    auto_pmi: bool = Field(True, description="Replace the entered PMI with the LTV-based estimate before calculating.")
    compare: LoanInput | None = Field(None, description="Optional second scenario to compare against the main inputs.")


class AppInputs(BaseModel):
    """
    Full input payload.

    Attributes:
        inputs: The validated LoanInput used by the engine.
        run:    Non-financial, runtime options for the current execution.
    """

    inputs: LoanInput
    run: RunOptions = RunOptions()


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first inputs loader with light env overrides.

    Responsibilities:
        - Read JSON from a file or string
        - Accept both the flat and structured shapes
        - Validate with Pydantic
        - Apply environment overrides for run options

    Default search (when path=None):
        1) ./data/sample/inputs.json
        2) ./config.json
    """

    env_prefix: str = "MORTCALC_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> AppInputs:
        """
        Load inputs from a JSON file (path). If path is None, try defaults.

        Args:
            path: Path to JSON file. If None, uses default search order.

        Returns:
            AppInputs (validated).
        """
        p = self._resolve_path(path)
        raw = self._read_json_file(p)
        logger.debug("Loaded inputs from %s", p)
        return self._apply_env_overrides(self._parse_root(self._wrap_flat(raw)))

    def load_json(self, text: str) -> AppInputs:
        """Load inputs from a JSON string (flat or structured shape)."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Inputs payload must be a JSON object.")
        return self._apply_env_overrides(self._parse_root(self._wrap_flat(raw)))

    def with_overrides(
        self,
        cfg: AppInputs,
        *,
        out: str | None = None,
        view: str | None = None,
        auto_pmi: bool | None = None,
        compare: LoanInput | None = None,
    ) -> AppInputs:
        """
        Return a *new* AppInputs with provided non-null overrides applied to RunOptions.
        Does not mutate the original instance.
        """
        updates: dict[str, Any] = {}
        if out is not None:
            updates["out"] = out
        if view is not None:
            updates["view"] = view
        if auto_pmi is not None:
            updates["auto_pmi"] = auto_pmi
        if compare is not None:
            updates["compare"] = compare

        if not updates:
            return cfg

        try:
            run_new = RunOptions.model_validate({**cfg.run.model_dump(), **updates})
        except ValidationError as e:
            raise ValueError(f"Invalid run option override:\n{e}") from e
        return cfg.model_copy(update={"run": run_new})

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Inputs file not found: {p}")
            return p

        for candidate in (Path("data/sample/inputs.json"), Path("config.json")):
            if candidate.exists():
                return candidate
        raise FileNotFoundError(
            "No inputs path provided and no default inputs found. Looked for ./data/sample/inputs.json and ./config.json."
        )

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported inputs format for {p.name}; only .json is supported.")
        try:
            raw = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError(f"Inputs in {p} must be a JSON object.")
        return cast(dict[str, Any], raw)

    def _wrap_flat(self, raw: dict[str, Any]) -> dict[str, Any]:
        """Accept flat (LoanInput at root) or structured (AppInputs shape)."""
        if "inputs" in raw:
            return raw
        return {"inputs": raw}

    def _parse_root(self, data: dict[str, Any]) -> AppInputs:
        try:
            return AppInputs.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Inputs validation failed:\n{e}") from e

    def _apply_env_overrides(self, cfg: AppInputs) -> AppInputs:
        """Apply light, optional overrides from environment variables to run options."""
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        out = os.getenv(f"{prefix}OUT")
        if out:
            updates["out"] = out

        view = os.getenv(f"{prefix}VIEW")
        if view:
            normalized = view.strip().lower()
            if normalized in ("yearly", "monthly"):
                updates["view"] = normalized
            else:
                logger.warning("Ignoring %sVIEW=%r (expected 'yearly' or 'monthly')", prefix, view)

        auto_pmi = os.getenv(f"{prefix}AUTO_PMI")
        if auto_pmi:
            flag = auto_pmi.strip().lower()
            if flag in _TRUTHY:
                updates["auto_pmi"] = True
            elif flag in _FALSY:
                updates["auto_pmi"] = False
            else:
                logger.warning("Ignoring %sAUTO_PMI=%r (expected a boolean flag)", prefix, auto_pmi)

        if not updates:
            return cfg

        run_new = cfg.run.model_copy(update=updates)
        return cfg.model_copy(update={"run": run_new})


# ----------------------------
# Share links & percent-mode helpers
# ----------------------------


def apply_query_params(loan: LoanInput, params: Mapping[str, str]) -> LoanInput:
    """
    Overlay share-link query parameters (price, down, rate, term, tax, hoa) on `loan`.

    Missing, zero, non-finite, unparsable or out-of-range values keep the
    current field value, so a partial or tampered link never blanks out an
    input. Each parameter is validated on its own.
    """
    result = loan
    for key, field_name in QUERY_PARAM_FIELDS.items():
        raw = params.get(key)
        if raw is None:
            continue
        try:
            value = float(raw)
        except (TypeError, ValueError):
            logger.debug("Ignoring unparsable query param %s=%r", key, raw)
            continue
        if not value or not math.isfinite(value):
            continue
        if field_name == "term_years":
            if not value.is_integer():
                logger.debug("Ignoring non-integer query param %s=%r", key, raw)
                continue
            value = int(value)
        try:
            result = LoanInput.model_validate({**result.model_dump(), field_name: value})
        except ValidationError:
            logger.debug("Ignoring out-of-range query param %s=%r", key, raw)
    return result


def _fmt_param(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def to_query_params(loan: LoanInput) -> dict[str, str]:
    """Inverse of apply_query_params for building share links."""
    return {key: _fmt_param(getattr(loan, field_name)) for key, field_name in QUERY_PARAM_FIELDS.items()}


def down_payment_from_percent(home_price: float, percent: float) -> float:
    """Down payment in currency units from a percent of the home price (20 -> 20%)."""
    return home_price * percent / 100


def property_tax_from_percent(home_price: float, percent: float) -> float:
    """Annual property tax in currency units from a percent of the home price."""
    return home_price * percent / 100


# ----------------------------
# Convenience function
# ----------------------------


def load_inputs(path: str | Path | None = None) -> AppInputs:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)
