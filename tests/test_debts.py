"""Plan helper tests: budget checks, overview and summaries."""

from __future__ import annotations

import pytest

from debtcoach.models.debt import Schedule
from debtcoach.services.debts import (
    InfeasibleBudget,
    compute_schedule,
    is_valid_budget,
    portfolio_overview,
    summarize_schedule,
    total_minimum_payment,
    validate_budget,
)
from tests.conftest import assert_float_equal


def test_total_minimum_payment(sample_debts):
    assert total_minimum_payment(sample_debts) == 350


def test_budget_validation(sample_debts):
    assert is_valid_budget(sample_debts, 350) is True
    assert is_valid_budget(sample_debts, 349.99) is False

    validate_budget(sample_debts, 600)
    with pytest.raises(InfeasibleBudget) as excinfo:
        validate_budget(sample_debts, 300)

    assert excinfo.value.required == 350
    assert "below the total minimum payment 350.00" in str(excinfo.value)


def test_portfolio_overview(sample_debts):
    overview = portfolio_overview(sample_debts)

    assert overview.total_balance == 20000
    assert overview.total_minimum_payment == 350
    assert_float_equal(overview.estimated_annual_interest["1"], 949.50)
    assert_float_equal(overview.estimated_annual_interest["2"], 675.00)
    assert_float_equal(overview.total_estimated_annual_interest, 1624.50)


def test_summary_matches_schedule(sample_debts):
    schedule = compute_schedule(sample_debts, 600, "avalanche")

    summary = summarize_schedule(sample_debts, schedule)

    assert summary.converged is True
    assert summary.total_months == len(schedule)
    assert summary.years * 12 + summary.months == summary.total_months
    assert summary.original_principal == 20000
    assert summary.total_paid == schedule[-1].total_paid
    assert summary.total_interest_paid == schedule[-1].total_interest_paid
    # Avalanche clears the credit card before the student loan.
    assert summary.payoff_months["1"] < summary.payoff_months["2"]
    assert summary.payoff_months["2"] == summary.total_months


def test_payoff_month_is_first_paid_record(debt_factory):
    debts = [
        debt_factory(id="quick", balance=100.0, interest_rate=0.0, minimum_payment=100.0),
        debt_factory(id="slow", balance=300.0, interest_rate=0.0, minimum_payment=100.0),
    ]

    schedule = compute_schedule(debts, 200.0, "avalanche")

    assert schedule.payoff_month("quick") == 1
    assert schedule.payoff_month("slow") == 2
    assert schedule.payoff_month("missing") is None


def test_empty_schedule_totals():
    schedule = Schedule()

    assert len(schedule) == 0
    assert schedule.total_paid == 0.0
    assert schedule.total_interest_paid == 0.0
    assert schedule.payoff_month("x") is None
