# main.py
"""
Entry Point: Mortgage Calculator

Purpose
-------
Run a mortgage calculation end-to-end and emit a Markdown report:
  1) Load loan inputs (sample defaults or --config JSON).
  2) Optionally apply a named preset and the PMI auto-estimate.
  3) Build the amortization schedule and savings figures.
  4) Optionally calculate a second scenario (--compare) and diff the two.
  5) Write a Markdown report and print a short summary.

Usage
-----
    python main.py
    python main.py --config data/sample/inputs.json --out report.md --view monthly
    python main.py --preset 15-year-payoff --compare other_scenario.json
"""

from __future__ import annotations

import argparse
import datetime as dt
import logging

from mortgage_calc.core.finance import apply_auto_pmi, calculate_mortgage, compare_scenarios
from mortgage_calc.inputs import PRESETS, AppInputs, InputsLoader, RunOptions, apply_preset
from mortgage_calc.reports.generator import render_summary_text, write_report
from mortgage_calc.schemas.models import LoanInput

logger = logging.getLogger("mortgage_calc.cli")


def build_sample_inputs() -> LoanInput:
    """Return baseline LoanInput for demo purposes."""
    today = dt.date.today()
    return LoanInput(
        home_price=400_000.0,
        down_payment=80_000.0,
        interest_rate=6.5,
        term_years=30,
        property_tax=4_800.0,
        home_insurance=1_200.0,
        hoa=0.0,
        pmi=0.0,
        start_date=dt.date(today.year, today.month, 1),
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for configurable runs."""
    p = argparse.ArgumentParser(description="Mortgage amortization calculator")
    p.add_argument("--config", type=str, default=None, help="Path to JSON inputs (LoanInput or AppInputs shape).")
    p.add_argument("--out", type=str, default=None, help="Output Markdown path (overrides config).")
    p.add_argument(
        "--view", type=str, default=None, choices=["yearly", "monthly"], help="Schedule granularity (overrides config)."
    )
    p.add_argument("--preset", type=str, default=None, choices=sorted(PRESETS), help="Apply a named input preset.")
    p.add_argument(
        "--no-auto-pmi",
        dest="auto_pmi",
        action="store_false",
        default=None,
        help="Keep the PMI from the inputs instead of estimating it from LTV.",
    )
    p.add_argument("--compare", type=str, default=None, help="Path to JSON inputs for a second scenario.")
    p.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return p.parse_args(argv)


def resolve_config(args: argparse.Namespace, loader: InputsLoader | None = None) -> AppInputs:
    """Merge config file (or sample inputs) with CLI overrides."""
    loader = loader or InputsLoader()
    cfg = loader.load(args.config) if args.config else AppInputs(inputs=build_sample_inputs(), run=RunOptions())

    compare = loader.load(args.compare).inputs if args.compare else None
    cfg = loader.with_overrides(cfg, out=args.out, view=args.view, auto_pmi=args.auto_pmi, compare=compare)

    if args.preset:
        cfg = cfg.model_copy(update={"inputs": apply_preset(cfg.inputs, args.preset)})
    return cfg


def main(argv: list[str] | None = None) -> int:
    """Calculate, write the report, and print a summary."""
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        cfg = resolve_config(args)
        loan = apply_auto_pmi(cfg.inputs, auto=cfg.run.auto_pmi)
        output = calculate_mortgage(loan)

        comparison = None
        if cfg.run.compare is not None:
            other = calculate_mortgage(apply_auto_pmi(cfg.run.compare, auto=cfg.run.auto_pmi))
            comparison = (other, compare_scenarios(output, other))

        path = write_report(cfg.run.out, loan, output, view=cfg.run.view, comparison=comparison)
    except Exception as e:
        print(f"Error during calculation: {e}")
        raise

    print(render_summary_text(loan, output))
    print(f"\nReport written to {path}")
    if output.hit_safety_bound:
        logger.warning("Schedule hit the iteration ceiling; the reported payoff is incomplete.")
    elif output.exceeds_term:
        logger.info("Payoff runs %d months past the contractual term.", output.months_to_payoff - output.total_payments)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
