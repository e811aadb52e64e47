# loanplan/core/finance/__init__.py

from .allocation import CashAllocation, allocate_cash_avalanche
from .annuity import (
    AmortizationRow,
    AmortizationSchedule,
    LoanSummary,
    amortization_schedule,
    annuity_payment,
    current_balances,
    loan_summary,
    remaining_balance,
)
from .compare import compare_loans
from .errors import (
    PLANNING_ERRORS,
    LoanPlanningError,
    NoScenariosError,
    UnsupportedPrepaymentModeError,
)
from .optimizer import find_best_plan
from .scenarios import evaluate_full_consolidation, evaluate_no_consolidation

__all__ = [
    "annuity_payment",
    "amortization_schedule",
    "loan_summary",
    "remaining_balance",
    "current_balances",
    "allocate_cash_avalanche",
    "evaluate_no_consolidation",
    "evaluate_full_consolidation",
    "find_best_plan",
    "compare_loans",
    "AmortizationRow",
    "AmortizationSchedule",
    "LoanSummary",
    "CashAllocation",
    "LoanPlanningError",
    "NoScenariosError",
    "UnsupportedPrepaymentModeError",
    "PLANNING_ERRORS",
]
