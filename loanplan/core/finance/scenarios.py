# loanplan/core/finance/scenarios.py
"""
Scenario evaluation for the two restructuring strategies.

- no_consolidation: cash pays down existing loans (avalanche); any unmet
  part of the upcoming expense is borrowed as one new loan.
- full_consolidation: every existing loan plus the expense, minus cash, is
  rolled into a single new loan.

Both evaluators emit one Scenario per candidate term. They are pure and
independent of each other.
"""

from __future__ import annotations

import logging
import math

from loanplan.schemas.models import Loan, Scenario

from .allocation import allocate_cash_avalanche
from .annuity import loan_summary

logger = logging.getLogger(__name__)

NEW_LOAN_ID = "new-loan"
CONSOLIDATION_LOAN_ID = "consolidation"


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def _weighted_end_time(loans: list[Loan], payments: list[float]) -> int:
    """
    Payment-weighted average term: sum(months * payment) / sum(payment).

    This is a convenience indicator, not the month the last loan is repaid.
    Falls back to the longest term when nothing is being paid (0 for no loans).
    """
    total_payment = sum(payments)
    if total_payment > 0:
        return _round_half_up(sum(loan.months * p for loan, p in zip(loans, payments, strict=True)) / total_payment)
    return max((loan.months for loan in loans), default=0)


def evaluate_no_consolidation(
    existing_loans: list[Loan],
    cash_available: float,
    upcoming_expense: float,
    new_loan_apr: float,
    candidate_terms: list[int],
) -> list[Scenario]:
    """Keep existing loans, pay them down with cash, borrow only what the expense still needs."""
    alloc = allocate_cash_avalanche(existing_loans, cash_available)
    need = max(0.0, upcoming_expense - alloc.cash_left)

    scenarios: list[Scenario] = []
    for term in candidate_terms:
        loans = list(alloc.loans)
        if need > 0:
            loans.append(Loan(id=NEW_LOAN_ID, name="New loan", principal=need, apr=new_loan_apr, months=term))

        summaries = [loan_summary(loan) for loan in loans]
        payments = [s.monthly_payment for s in summaries]

        description = f"No consolidation, new loan over {term} months" if need > 0 else "No consolidation, no new borrowing"
        scenarios.append(
            Scenario(
                kind="no_consolidation",
                loans=loans,
                total_monthly_payment=sum(payments),
                total_interest=sum(s.total_interest for s in summaries),
                total_paid=sum(s.total_paid for s in summaries),
                weighted_end_time=_weighted_end_time(loans, payments),
                description=description,
                cash_allocation=dict(alloc.allocation),
            )
        )

    logger.debug("no_consolidation: need=%.2f cash_left=%.2f scenarios=%d", need, alloc.cash_left, len(scenarios))
    return scenarios


def evaluate_full_consolidation(
    existing_loans: list[Loan],
    cash_available: float,
    upcoming_expense: float,
    new_loan_apr: float,
    candidate_terms: list[int],
) -> list[Scenario]:
    """Roll all existing loans and the expense (net of cash) into one new loan per term."""
    amount = sum(loan.principal for loan in existing_loans) + upcoming_expense - cash_available
    if amount <= 0:
        logger.debug("full_consolidation: nothing to finance (amount=%.2f)", amount)
        return []

    scenarios: list[Scenario] = []
    for term in candidate_terms:
        loan = Loan(id=CONSOLIDATION_LOAN_ID, name="Consolidation loan", principal=amount, apr=new_loan_apr, months=term)
        summary = loan_summary(loan)
        scenarios.append(
            Scenario(
                kind="full_consolidation",
                loans=[loan],
                total_monthly_payment=summary.monthly_payment,
                total_interest=summary.total_interest,
                total_paid=summary.total_paid,
                weighted_end_time=term,
                description=f"Full consolidation over {term} months",
            )
        )

    logger.debug("full_consolidation: amount=%.2f scenarios=%d", amount, len(scenarios))
    return scenarios
