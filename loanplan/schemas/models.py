# loanplan/schemas/models.py

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ScenarioKind = Literal["no_consolidation", "full_consolidation"]
Objective = Literal["min_total_interest", "min_monthly_payment"]
PrepaymentMode = Literal["reduce", "shorten"]

DEFAULT_CANDIDATE_TERMS: tuple[int, ...] = (12, 24, 36, 48, 60, 72, 84)
DEFAULT_NEW_LOAN_APR = 12.0

# =========================
# Core inputs
# =========================


class Loan(BaseModel):
    """
    One debt instrument. All money amounts are assumed to use the same currency.

    Loans are immutable; prepayment, cash allocation and consolidation all
    produce new Loan instances via model_copy().
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., description="Unique identifier, stable across recomputation.")
    name: str = Field("", description="Display label; not used by any calculation.")
    principal: float = Field(..., ge=0, description="Outstanding balance (currency units). 0 means the loan is closed.")
    apr: float = Field(..., description="Nominal annual rate in percent (e.g., 12 = 12%/year). May be 0.")
    months: int = Field(..., ge=0, description="Remaining term in monthly periods.")


class Prepayment(BaseModel):
    """One-time extra principal payment applied during an amortization schedule."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    amount: float = Field(..., description="Cash applied to principal. Capped at the outstanding balance.")
    at_period: int = Field(..., description="1-based period in which the prepayment replaces the regular payment.")
    mode: PrepaymentMode = Field(
        "reduce",
        description=(
            "'reduce' keeps the term and re-amortizes a smaller payment. "
            "'shorten' (keep payment, shrink term) is declared but not implemented."
        ),
    )


class OptimizationInput(BaseModel):
    """Request to the plan optimizer."""

    existing_loans: list[Loan] = Field(default_factory=list, description="Loans the borrower currently holds.")
    cash_available: float = Field(0.0, description="Lump sum of cash available for paydown or the expense.")
    upcoming_expense: float = Field(0.0, description="Upcoming expense that must be financed (cash first, then borrowing).")
    new_loan_apr: float = Field(DEFAULT_NEW_LOAN_APR, description="APR (percent) assumed for any new or consolidated borrowing.")
    candidate_terms: list[int] = Field(
        default_factory=lambda: list(DEFAULT_CANDIDATE_TERMS),
        description="Loan terms (months) to evaluate for new/consolidated borrowing.",
    )
    objective: Objective = Field("min_total_interest", description="Selection objective.")
    budget_monthly: float | None = Field(
        None, description="Optional ceiling on the total monthly payment. Ignored unless positive."
    )


# =========================
# Computed outputs
# =========================


class Scenario(BaseModel):
    """
    One fully-specified restructuring outcome.

    weighted_end_time is a payment-weighted average of loan terms (months). It is a
    rough "time to freedom" indicator, not the month in which the last loan is repaid.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: ScenarioKind = Field(..., description="Restructuring strategy that produced this scenario.")
    loans: list[Loan] = Field(default_factory=list, description="Resulting loans after the strategy is applied.")
    total_monthly_payment: float = Field(..., description="Sum of monthly payments across loans.")
    total_interest: float = Field(..., description="Sum of lifetime interest across loans.")
    total_paid: float = Field(..., description="Sum of lifetime payments across loans.")
    weighted_end_time: int = Field(..., description="Payment-weighted average term in months (approximation).")
    description: str = Field("", description="Human-readable label.")
    cash_allocation: dict[str, float] | None = Field(
        None, description="Cash applied per existing loan id (no-consolidation scenarios only)."
    )


class OptimizationResult(BaseModel):
    """Optimizer output: the chosen scenario plus everything it was compared against."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    best: Scenario = Field(..., description="Chosen scenario.")
    compared: list[Scenario] = Field(default_factory=list, description="All evaluated scenarios, unfiltered by budget.")
    reason: str = Field(..., description="Justification of the choice (objective and headline number).")
    budget_exceeded: bool = Field(False, description="True when the chosen scenario does not fit the monthly budget.")


class LoanComparisonEntry(BaseModel):
    """Aggregate figures for one loan in a side-by-side comparison."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    loan: Loan
    monthly_payment: float
    total_interest: float
    total_paid: float


class LoanComparison(BaseModel):
    """Side-by-side comparison of selected loans."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    entries: list[LoanComparisonEntry] = Field(default_factory=list, description="Compared loans, in input order.")
    lowest_monthly_payment: LoanComparisonEntry | None = Field(None, description="Entry with the smallest monthly payment.")
    lowest_total_interest: LoanComparisonEntry | None = Field(None, description="Entry with the smallest total interest.")
