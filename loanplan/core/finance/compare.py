# loanplan/core/finance/compare.py

from __future__ import annotations

from collections.abc import Iterable

from loanplan.schemas.models import Loan, LoanComparison, LoanComparisonEntry

from .annuity import loan_summary


def compare_loans(loans: list[Loan], selected_ids: Iterable[str] | None = None) -> LoanComparison:
    """
    Side-by-side monthly payment and lifetime totals for the selected loans.

    Args:
        loans: Candidate loans.
        selected_ids: Loan ids to include. None compares every loan.

    Returns:
        LoanComparison with entries in input order and the cheapest entry per
        metric (first one wins on ties; None when nothing is selected).
    """
    wanted = None if selected_ids is None else set(selected_ids)

    entries: list[LoanComparisonEntry] = []
    for loan in loans:
        if wanted is not None and loan.id not in wanted:
            continue
        s = loan_summary(loan)
        entries.append(
            LoanComparisonEntry(
                loan=loan,
                monthly_payment=s.monthly_payment,
                total_interest=s.total_interest,
                total_paid=s.total_paid,
            )
        )

    return LoanComparison(
        entries=entries,
        lowest_monthly_payment=min(entries, key=lambda e: e.monthly_payment, default=None),
        lowest_total_interest=min(entries, key=lambda e: e.total_interest, default=None),
    )
