# loanplan/core/finance/errors.py
"""
Typed errors for the loan planning engine.

Exports
-------
- LoanPlanningError, NoScenariosError, UnsupportedPrepaymentModeError
- PLANNING_ERRORS

Only logically impossible states are raised. Bad-but-plausible numbers
(zero or negative principal, zero periods) are normalised to sentinel values
by the engine instead.
"""

from __future__ import annotations

# =========================
# Exception types
# =========================


class LoanPlanningError(RuntimeError):
    """Base class for loan planning failures."""


class NoScenariosError(LoanPlanningError):
    """The optimizer had no scenario to choose from (e.g. empty candidate terms)."""


class UnsupportedPrepaymentModeError(LoanPlanningError, NotImplementedError):
    """A prepayment mode that the schedule builder does not implement was requested."""

    def __init__(self, mode: str) -> None:
        super().__init__(f"Prepayment mode '{mode}' is not supported; only 'reduce' is implemented.")
        self.mode = mode


# Selector tuple for grouped exception handling
PLANNING_ERRORS = (
    NoScenariosError,
    UnsupportedPrepaymentModeError,
)


__all__ = [
    "LoanPlanningError",
    "NoScenariosError",
    "UnsupportedPrepaymentModeError",
    "PLANNING_ERRORS",
]
