# main.py
"""
Entry Point — Loan Planner

Purpose
-------
Run the consumer-loan planning engine end-to-end:
  1) Load an optimization request (sample defaults or --config JSON).
  2) Compare no-consolidation vs full-consolidation scenarios across the
     candidate terms via the Plan Advisor.
  3) Print the recommendation and optionally write the full result as JSON.

Usage
-----
    python main.py
    python main.py --config data/sample/plan.json --out plan_result.json \
                   --objective min_monthly_payment --budget 3000 --log-level INFO
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from loanplan.agents.plan_advisor import advise_plan
from loanplan.core.finance import PLANNING_ERRORS
from loanplan.inputs.inputs import OBJECTIVES, AppInputs, InputsLoader
from loanplan.schemas.models import Loan, OptimizationInput


def build_sample_inputs() -> OptimizationInput:
    """Return a baseline OptimizationInput for demo purposes."""
    return OptimizationInput(
        existing_loans=[
            Loan(id="card", name="Credit card balance", principal=50_000.0, apr=18.0, months=36),
            Loan(id="car", name="Car loan", principal=30_000.0, apr=8.0, months=24),
        ],
        cash_available=10_000.0,
        upcoming_expense=15_000.0,
        new_loan_apr=10.0,
        candidate_terms=[36, 48, 60],
        objective="min_total_interest",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for configurable runs."""
    p = argparse.ArgumentParser(description="Consumer loan planner")
    p.add_argument("--config", type=str, default=None, help="Path to JSON config (OptimizationInput or AppInputs).")
    p.add_argument("--out", type=str, default=None, help="Output JSON path for the full result (overrides config).")
    p.add_argument("--objective", type=str, default=None, choices=list(OBJECTIVES), help="Selection objective (overrides config).")
    p.add_argument("--budget", type=float, default=None, help="Monthly budget ceiling (overrides config).")
    p.add_argument("--log-level", type=str, default=None, help="Logging level, e.g. DEBUG or INFO (overrides config).")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run the optimizer and print the recommendation."""
    args = parse_args(argv)
    loader = InputsLoader()

    if args.config:
        cfg: AppInputs = loader.load(args.config)
    else:
        cfg = AppInputs(inputs=build_sample_inputs())
    cfg = loader.with_overrides(
        cfg,
        out=args.out,
        log_level=args.log_level,
        objective=args.objective,
        budget=args.budget,
    )

    logging.basicConfig(
        level=getattr(logging, cfg.run.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = advise_plan(cfg.inputs)
    except PLANNING_ERRORS as e:
        print(f"Planning failed: {e}")
        raise
    except Exception as e:
        print(f"Error during planning: {e}")
        raise

    best = result.best
    print(result.reason)
    print(f"Best scenario: {best.description}")
    print(f"  Monthly payment: {best.total_monthly_payment:,.2f}")
    print(f"  Total interest:  {best.total_interest:,.2f}")
    print(f"  Weighted term:   {best.weighted_end_time} months")
    print(f"Scenarios compared: {len(result.compared)}")

    if cfg.run.out:
        Path(cfg.run.out).write_text(result.model_dump_json(indent=2), encoding="utf-8")
        print(f"Result written to {cfg.run.out}")


if __name__ == "__main__":
    main()
