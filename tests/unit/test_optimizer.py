# tests/unit/test_optimizer.py
import logging

import pytest

from loanplan.core.finance import NoScenariosError, find_best_plan
from loanplan.core.finance.optimizer import _reason
from loanplan.schemas.models import Scenario


def test_min_total_interest_picks_lowest_interest(optimization_input):
    result = find_best_plan(optimization_input())

    assert len(result.compared) == 6
    assert result.best in result.compared
    assert result.best.total_interest == min(s.total_interest for s in result.compared)
    assert "minimum total interest" in result.reason
    assert result.budget_exceeded is False


def test_min_monthly_payment_picks_lowest_payment(optimization_input):
    result = find_best_plan(optimization_input(objective="min_monthly_payment"))

    assert result.best.total_monthly_payment == min(s.total_monthly_payment for s in result.compared)
    assert "minimum monthly payment" in result.reason


def test_both_strategies_are_compared(optimization_input):
    result = find_best_plan(optimization_input(cash_available=10_000.0, upcoming_expense=15_000.0, candidate_terms=[36, 48, 60]))
    kinds = {s.kind for s in result.compared}
    assert kinds == {"no_consolidation", "full_consolidation"}


def test_budget_is_respected_when_feasible(high_apr_loan, optimization_input):
    inp = optimization_input(
        existing_loans=[high_apr_loan],
        cash_available=0.0,
        upcoming_expense=20_000.0,
        new_loan_apr=15.0,
        candidate_terms=[12, 24, 36],
        objective="min_monthly_payment",
        budget_monthly=3_000.0,
    )
    result = find_best_plan(inp)

    assert result.best.total_monthly_payment <= 3_000.0
    assert result.budget_exceeded is False
    assert "minimum monthly payment" in result.reason
    # compared is never filtered by budget
    assert len(result.compared) == 6
    assert any(s.total_monthly_payment > 3_000.0 for s in result.compared)


def test_budget_filters_before_objective(high_apr_loan, optimization_input):
    inp = optimization_input(
        existing_loans=[high_apr_loan],
        cash_available=0.0,
        upcoming_expense=20_000.0,
        new_loan_apr=15.0,
        candidate_terms=[12, 24, 36],
        objective="min_total_interest",
        budget_monthly=3_000.0,
    )
    result = find_best_plan(inp)
    within = [s for s in result.compared if s.total_monthly_payment <= 3_000.0]

    assert result.best.total_interest == min(s.total_interest for s in within)
    assert result.best.total_interest > min(s.total_interest for s in result.compared)


def test_infeasible_budget_falls_back_to_three_cheapest(high_apr_loan, optimization_input):
    inp = optimization_input(
        existing_loans=[high_apr_loan],
        cash_available=0.0,
        upcoming_expense=20_000.0,
        new_loan_apr=15.0,
        candidate_terms=[12, 24, 36],
        objective="min_total_interest",
        budget_monthly=100.0,
    )
    result = find_best_plan(inp)
    cheapest = sorted(result.compared, key=lambda s: s.total_monthly_payment)[:3]

    assert result.budget_exceeded is True
    assert result.best in cheapest
    assert result.best.total_interest == min(s.total_interest for s in cheapest)
    assert result.reason.startswith("No scenario fits the monthly budget of 100.")
    assert "minimum total interest" in result.reason


def test_infeasible_budget_min_monthly_returns_cheapest(high_apr_loan, optimization_input):
    inp = optimization_input(
        existing_loans=[high_apr_loan],
        cash_available=0.0,
        upcoming_expense=20_000.0,
        candidate_terms=[12, 24, 36],
        objective="min_monthly_payment",
        budget_monthly=100.0,
    )
    result = find_best_plan(inp)

    assert result.budget_exceeded is True
    assert result.best.total_monthly_payment == min(s.total_monthly_payment for s in result.compared)


@pytest.mark.parametrize("budget", [None, 0.0])
def test_missing_or_zero_budget_is_ignored(optimization_input, budget):
    result = find_best_plan(optimization_input(budget_monthly=budget))
    assert result.budget_exceeded is False
    assert result.best.total_interest == min(s.total_interest for s in result.compared)


def test_empty_candidate_terms_raise_no_scenarios(optimization_input):
    with pytest.raises(NoScenariosError):
        find_best_plan(optimization_input(candidate_terms=[]))


@pytest.mark.parametrize(
    "overrides",
    [
        {},
        {"existing_loans": [], "cash_available": 0.0, "upcoming_expense": 5_000.0},
        {"cash_available": 200_000.0},
        {"candidate_terms": [60]},
        {"new_loan_apr": 0.0, "objective": "min_monthly_payment"},
    ],
)
def test_best_is_always_drawn_from_compared(optimization_input, overrides):
    result = find_best_plan(optimization_input(**overrides))
    assert result.compared
    assert result.best in result.compared


def test_budget_warning_is_logged(high_apr_loan, optimization_input, caplog):
    inp = optimization_input(existing_loans=[high_apr_loan], cash_available=0.0, budget_monthly=1.0)
    with caplog.at_level(logging.WARNING, logger="loanplan.core.finance.optimizer"):
        find_best_plan(inp)
    assert any("budget" in rec.getMessage() for rec in caplog.records)


def test_negative_budget_skips_filter_but_flags_best(optimization_input):
    result = find_best_plan(optimization_input(budget_monthly=-50.0))

    assert result.budget_exceeded is True
    # no filtering: best is drawn from the full set
    assert result.best.total_interest == min(s.total_interest for s in result.compared)
    assert result.reason.startswith("No scenario fits the monthly budget of -50.")


def test_long_candidate_term_does_not_overflow(optimization_input):
    result = find_best_plan(optimization_input(candidate_terms=[36, 100_000]))
    assert len(result.compared) == 4
    assert all(s.total_monthly_payment > 0 for s in result.compared)


@pytest.mark.parametrize(
    "objective, expected",
    [
        ("min_monthly_payment", "Selected for minimum monthly payment: 2,501"),
        ("min_total_interest", "Selected for minimum total interest: 12,345"),
    ],
)
def test_reason_rounds_half_up(objective, expected):
    scenario = Scenario(
        kind="full_consolidation",
        loans=[],
        total_monthly_payment=2_500.5,
        total_interest=12_344.5,
        total_paid=60_024.0,
        weighted_end_time=24,
        description="Full consolidation over 24 months",
    )
    assert _reason(scenario, objective) == expected
