# loanplan/agents/plan_advisor.py
"""
Plan Advisor Agent

Purpose
-------
Thin agent wrapper around the deterministic plan optimizer. It normalizes
partially-filled inputs, invokes the optimizer, and returns the resulting
OptimizationResult for downstream consumption.

Design
------
- Deterministic: no external calls, no randomness.
- Delegates all math to loanplan.core.finance.find_best_plan().
- Never mutates the caller's OptimizationInput.

Public API
----------
advise_plan(inputs) -> OptimizationResult
"""

from __future__ import annotations

from loanplan.core.finance import find_best_plan
from loanplan.schemas.models import OptimizationInput, OptimizationResult


def _clean_terms(terms: list[int]) -> list[int]:
    """Drop non-positive and duplicate terms, keeping first-seen order."""
    seen: set[int] = set()
    out: list[int] = []
    for t in terms:
        if t > 0 and t not in seen:
            seen.add(t)
            out.append(t)
    return out


def _normalize_inputs(inputs: OptimizationInput) -> OptimizationInput:
    """
    Apply conservative, non-destructive normalizations for robustness.
    Notes:
      - Negative cash or expense (half-typed form fields) count as 0.
      - A non-positive budget means "no budget".
      - Loans and APRs are left as provided (caller responsibility).
    """
    budget = inputs.budget_monthly
    return inputs.model_copy(
        update={
            "cash_available": max(0.0, inputs.cash_available),
            "upcoming_expense": max(0.0, inputs.upcoming_expense),
            "candidate_terms": _clean_terms(inputs.candidate_terms),
            "budget_monthly": budget if budget is not None and budget > 0 else None,
        }
    )


def advise_plan(inputs: OptimizationInput) -> OptimizationResult:
    """
    Recommend a restructuring plan for the given request.

    Args:
        inputs: OptimizationInput (existing loans, cash, expense, APR, terms, objective, budget).

    Returns:
        OptimizationResult with the best scenario, all compared scenarios, the
        justification string and the budget flag.

    Raises:
        NoScenariosError: when no candidate term survives normalization.
    """
    return find_best_plan(_normalize_inputs(inputs))
