# tests/conftest.py
from __future__ import annotations

import pytest

from tests.utils import HIGH_APR_LOAN, LOW_APR_LOAN, make_loan, make_optimization_input


# -------- Isolation from the caller's environment --------
@pytest.fixture(autouse=True)
def _clear_loanplan_env(monkeypatch):
    for key in ("OUT", "LOG_LEVEL", "OBJECTIVE", "BUDGET"):
        monkeypatch.delenv(f"LOANPLAN_{key}", raising=False)
    yield


# -------- Domain fixtures --------
@pytest.fixture
def high_apr_loan():
    return HIGH_APR_LOAN


@pytest.fixture
def low_apr_loan():
    return LOW_APR_LOAN


@pytest.fixture
def loan_factory():
    """Factory for ad-hoc loans: loan_factory("a", principal=..., apr=..., months=...)."""
    return make_loan


@pytest.fixture
def optimization_input():
    """Factory for the baseline optimizer request (overridable)."""

    def _factory(**overrides):
        return make_optimization_input(**overrides)

    return _factory
