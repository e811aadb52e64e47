# loanplan/core/finance/annuity.py

from __future__ import annotations

from dataclasses import dataclass, field

from loanplan.schemas.models import Loan, Prepayment

from .errors import UnsupportedPrepaymentModeError

_ZERO_RATE = 1e-12  # below this monthly rate the linear formula is used
_BALANCE_EPS = 0.01  # currency units; a balance at or below this is retired


@dataclass(frozen=True)
class AmortizationRow:
    """
    Immutable record of a single monthly period.

    Attributes:
        period (int): 1-based period index.
        balance_start (float): Balance before this period's payment.
        payment (float): Cash paid this period (interest + principal).
        interest (float): Interest portion.
        principal (float): Principal portion.
        balance_end (float): Balance after this period's payment.
    """

    period: int
    balance_start: float
    payment: float
    interest: float
    principal: float
    balance_end: float


@dataclass(frozen=True)
class AmortizationSchedule:
    rows: list[AmortizationRow] = field(default_factory=list)
    total_interest: float = 0.0
    total_paid: float = 0.0
    initial_payment: float = 0.0
    actual_months: int = 0


@dataclass(frozen=True)
class LoanSummary:
    monthly_payment: float
    total_paid: float
    total_interest: float


def _monthly_rate(apr_percent: float) -> float:
    return apr_percent / 100.0 / 12.0


def annuity_payment(principal: float, apr_percent: float, periods: int) -> float:
    """
    Constant monthly payment that fully amortizes `principal` over `periods` months.

    Formula (standard annuity):
        PMT = P * r / [ 1 - (1 + r)^(-n) ]

    Where:
        P = principal
        r = monthly rate = apr_percent / 100 / 12
        n = number of monthly periods

    Returns 0.0 for non-positive principal or periods (inputs still being typed in
    a form are not errors). When |r| is below 1e-12 the payment is exactly P / n.
    """
    if principal <= 0 or periods <= 0:
        return 0.0

    r = _monthly_rate(apr_percent)
    if abs(r) < _ZERO_RATE:
        return principal / periods

    return principal * r / (1.0 - (1.0 + r) ** (-periods))


def amortization_schedule(
    principal: float,
    apr_percent: float,
    periods: int,
    prepayment: Prepayment | None = None,
) -> AmortizationSchedule:
    """
    Build a monthly amortization schedule with an optional one-time prepayment.

    Model:
        - Regular period: interest = balance * r, principal = payment - interest.
        - Prepayment period: the regular payment is replaced by a single row that
          applies min(amount, balance) to principal with zero interest. The payment
          is then re-amortized over the periods left (term unchanged, "reduce" mode).
        - The final payment is clipped so the balance never goes negative.
        - Simulation stops once the balance is <= 0.01 or `periods` rows exist.

    Args:
        principal: Initial balance.
        apr_percent: Nominal annual rate in percent.
        periods: Term in months.
        prepayment: Optional Prepayment. mode="shorten" raises
            UnsupportedPrepaymentModeError.

    Returns:
        AmortizationSchedule. Non-positive principal or periods give an empty schedule.
    """
    if prepayment is not None and prepayment.mode != "reduce":
        raise UnsupportedPrepaymentModeError(prepayment.mode)

    if principal <= 0 or periods <= 0:
        return AmortizationSchedule()

    r = _monthly_rate(apr_percent)
    initial_payment = annuity_payment(principal, apr_percent, periods)
    prepay_amount = prepayment.amount if prepayment is not None else 0.0
    prepay_at = prepayment.at_period if prepayment is not None and prepay_amount > 0 else None

    rows: list[AmortizationRow] = []
    balance = float(principal)
    payment = initial_payment
    total_paid = 0.0

    for period in range(1, periods + 1):
        if balance <= _BALANCE_EPS:
            break
        balance_start = balance

        if period == prepay_at:
            applied = min(prepay_amount, balance)
            balance -= applied
            total_paid += applied
            if balance > _BALANCE_EPS:
                payment = annuity_payment(balance, apr_percent, periods - period)
            rows.append(AmortizationRow(period, balance_start, applied, 0.0, applied, balance))
            continue

        interest = balance * r
        pay = payment
        principal_paid = pay - interest
        # Guard for the final period so the balance never becomes negative
        if principal_paid > balance:
            principal_paid = balance
            pay = interest + principal_paid

        balance -= principal_paid
        total_paid += pay
        rows.append(AmortizationRow(period, balance_start, pay, interest, principal_paid, balance))

    return AmortizationSchedule(
        rows=rows,
        total_interest=total_paid - principal,
        total_paid=total_paid,
        initial_payment=initial_payment,
        actual_months=len(rows),
    )


def loan_summary(loan: Loan) -> LoanSummary:
    """Monthly payment and lifetime totals for a loan, without building a schedule."""
    monthly = annuity_payment(loan.principal, loan.apr, loan.months)
    total_paid = monthly * loan.months
    return LoanSummary(
        monthly_payment=monthly,
        total_paid=total_paid,
        total_interest=total_paid - loan.principal,
    )


def remaining_balance(loan: Loan, periods_elapsed: int) -> float:
    """
    Balance after `periods_elapsed` regular payments (no prepayment).

    Uses B_k = P * (1 - (1+r)^(k-n)) / (1 - (1+r)^(-n)), or the linear
    P - k * P / n when the rate is zero. Returns 0.0 once the term is over.
    """
    if periods_elapsed >= loan.months:
        return 0.0

    k = max(0, periods_elapsed)
    r = _monthly_rate(loan.apr)
    if abs(r) < _ZERO_RATE:
        return loan.principal - annuity_payment(loan.principal, loan.apr, loan.months) * k

    n = loan.months
    return loan.principal * (1.0 - (1.0 + r) ** (k - n)) / (1.0 - (1.0 + r) ** (-n))


def current_balances(loans: list[Loan], months_paid: int = 0) -> list[Loan]:
    """Restate each loan's principal as its remaining balance after `months_paid` payments."""
    return [loan.model_copy(update={"principal": remaining_balance(loan, months_paid)}) for loan in loans]
