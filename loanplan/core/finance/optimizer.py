# loanplan/core/finance/optimizer.py

from __future__ import annotations

import logging

from loanplan.schemas.models import Objective, OptimizationInput, OptimizationResult, Scenario

from .errors import NoScenariosError
from .scenarios import _round_half_up, evaluate_full_consolidation, evaluate_no_consolidation

logger = logging.getLogger(__name__)

FALLBACK_POOL_SIZE = 3


def _select(pool: list[Scenario], objective: Objective) -> Scenario:
    """Pick the scenario minimizing the objective; the first minimum wins on ties."""
    if not pool:
        raise NoScenariosError("No scenarios to choose from; check candidate terms, loans and expense.")
    if objective == "min_total_interest":
        return min(pool, key=lambda s: s.total_interest)
    if objective == "min_monthly_payment":
        return min(pool, key=lambda s: s.total_monthly_payment)
    raise ValueError(f"Unknown objective: {objective!r}")


def _reason(best: Scenario, objective: Objective) -> str:
    if objective == "min_total_interest":
        return f"Selected for minimum total interest: {_round_half_up(best.total_interest):,}"
    return f"Selected for minimum monthly payment: {_round_half_up(best.total_monthly_payment):,}"


def find_best_plan(inputs: OptimizationInput) -> OptimizationResult:
    """
    Compare no-consolidation and full-consolidation scenarios and pick the best.

    Steps:
      1) Evaluate both strategies over every candidate term.
      2) If a positive monthly budget is set, keep scenarios within it. When none
         fits, flag budget_exceeded and fall back to the 3 cheapest (by monthly
         payment) scenarios.
      3) Pick by objective: min total interest or min monthly payment.
      4) Re-check the chosen scenario against any non-zero budget, independently
         of step 2 (a negative budget therefore always flags budget_exceeded).

    Returns:
        OptimizationResult whose `compared` always holds the full, unfiltered set.

    Raises:
        NoScenariosError: neither strategy produced a scenario.
    """
    args = (
        inputs.existing_loans,
        inputs.cash_available,
        inputs.upcoming_expense,
        inputs.new_loan_apr,
        inputs.candidate_terms,
    )
    scenarios = evaluate_no_consolidation(*args) + evaluate_full_consolidation(*args)
    if not scenarios:
        raise NoScenariosError("No scenarios could be built; candidate_terms may be empty.")

    budget = inputs.budget_monthly
    has_budget = budget is not None and budget > 0
    budget_exceeded = False

    pool = scenarios
    if has_budget:
        pool = [s for s in scenarios if s.total_monthly_payment <= budget]
        if not pool:
            budget_exceeded = True
            pool = sorted(scenarios, key=lambda s: s.total_monthly_payment)[:FALLBACK_POOL_SIZE]

    best = _select(pool, inputs.objective)

    # Independent guard on the chosen scenario
    if budget and best.total_monthly_payment > budget:
        budget_exceeded = True

    reason = _reason(best, inputs.objective)
    if budget_exceeded:
        logger.warning("no scenario fits monthly budget %.2f; closest pays %.2f", budget, best.total_monthly_payment)
        reason = f"No scenario fits the monthly budget of {_round_half_up(budget):,}. Showing the closest scenarios. {reason}"

    logger.debug("selected %s (%s) out of %d scenarios", best.kind, best.description, len(scenarios))
    return OptimizationResult(best=best, compared=scenarios, reason=reason, budget_exceeded=budget_exceeded)
