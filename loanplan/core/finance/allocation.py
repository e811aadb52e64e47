# loanplan/core/finance/allocation.py

from __future__ import annotations

from dataclasses import dataclass, field

from loanplan.schemas.models import Loan


@dataclass(frozen=True)
class CashAllocation:
    """
    Result of applying a lump sum of cash to existing loans.

    Attributes:
        loans: Surviving loans (reduced or untouched), in the caller's order.
            Loans retired in full are absent.
        cash_left: Cash not needed by any loan.
        allocation: Cash applied per loan id.
    """

    loans: list[Loan] = field(default_factory=list)
    cash_left: float = 0.0
    allocation: dict[str, float] = field(default_factory=dict)


def allocate_cash_avalanche(loans: list[Loan], cash: float) -> CashAllocation:
    """
    Distribute `cash` across `loans`, highest APR first (avalanche).

    A loan whose principal is fully covered is retired and dropped from the output;
    the first loan that cannot be covered absorbs the remaining cash and every
    loan after it is carried through unchanged. Ties on APR keep input order.
    """
    if cash <= 0:
        return CashAllocation(loans=list(loans), cash_left=0.0, allocation={})

    allocation: dict[str, float] = {}
    reduced: dict[str, Loan] = {}
    retired: set[str] = set()
    remaining = float(cash)

    for loan in sorted(loans, key=lambda x: -x.apr):
        if remaining <= 0:
            break
        if remaining >= loan.principal:
            allocation[loan.id] = loan.principal
            remaining -= loan.principal
            retired.add(loan.id)
        else:
            allocation[loan.id] = remaining
            reduced[loan.id] = loan.model_copy(update={"principal": loan.principal - remaining})
            remaining = 0.0

    survivors = [reduced.get(loan.id, loan) for loan in loans if loan.id not in retired]
    return CashAllocation(loans=survivors, cash_left=remaining, allocation=allocation)
