# tests/utils.py
"""
Single source of truth for test data, factories, and canonical payloads.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from typing import Any

from loanplan.schemas.models import Loan, OptimizationInput

# -----------------------------
# Canonical loans
# -----------------------------

HIGH_APR_LOAN = Loan(id="high", name="Expensive loan", principal=50_000.0, apr=18.0, months=36)
LOW_APR_LOAN = Loan(id="low", name="Cheap loan", principal=30_000.0, apr=8.0, months=24)

# Worked example: 100k at 12% over 12 months pays ~8,884/month
REFERENCE_PRINCIPAL = 100_000.0
REFERENCE_APR = 12.0
REFERENCE_MONTHS = 12
REFERENCE_PAYMENT = 8_884.88


def make_loan(
    loan_id: str = "loan",
    *,
    principal: float = 10_000.0,
    apr: float = 10.0,
    months: int = 12,
    name: str | None = None,
) -> Loan:
    return Loan(id=loan_id, name=name or loan_id, principal=principal, apr=apr, months=months)


def make_optimization_input(**overrides: Any) -> OptimizationInput:
    """Baseline request: both canonical loans, some cash, an expense and three terms."""
    base: dict[str, Any] = {
        "existing_loans": [HIGH_APR_LOAN, LOW_APR_LOAN],
        "cash_available": 30_000.0,
        "upcoming_expense": 10_000.0,
        "new_loan_apr": 10.0,
        "candidate_terms": [24, 36, 48],
        "objective": "min_total_interest",
        "budget_monthly": None,
    }
    base.update(overrides)
    return OptimizationInput(**base)


def legacy_request_payload() -> dict[str, Any]:
    """Optimizer request as sent by the older planner front end (camelCase)."""
    return {
        "existingLoans": [
            {"id": "high", "name": "Expensive loan", "principal": 50000, "apr": 18, "months": 36},
            {"id": "low", "name": "Cheap loan", "principal": 30000, "apr": 8, "months": 24},
        ],
        "cashAvailable": 10000,
        "upcomingExpense": 15000,
        "newLoanAPR": 10,
        "candidateTerms": [36, 48, 60],
        "objective": "minMonthly",
        "budgetMonthly": 4000,
    }
