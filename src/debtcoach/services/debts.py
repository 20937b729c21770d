"""Debt payoff simulation.

The engine walks a plan month by month: every active debt first receives its
minimum payment (interest is assessed once on the opening balance), then
whatever is left of the monthly budget goes to the debt chosen by the payoff
strategy. Extra payments go straight to principal.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..logging_config import get_logger
from ..models.debt import (
    Debt,
    MonthlyPaymentRecord,
    MonthSnapshot,
    PayoffStrategy,
    Schedule,
    WorkingDebt,
)
from .strategies import select_target

logger = get_logger(__name__)

MAX_MONTHS = 600  # 50 years


class InvalidDebtInput(ValueError):
    """Raised when debts or budget cannot be simulated."""


class InfeasibleBudget(ValueError):
    """Raised when the budget does not cover the minimum payments."""

    def __init__(self, budget: float, required: float):
        self.budget = budget
        self.required = required
        super().__init__(
            f"Monthly budget {budget:.2f} is below the total minimum payment {required:.2f}"
        )


class ScheduleDidNotConverge(RuntimeError):
    """Raised in strict mode when the iteration cap is hit with balances left."""

    def __init__(self, schedule: Schedule, max_months: int):
        self.schedule = schedule
        self.max_months = max_months
        super().__init__(f"Plan does not converge within {max_months} months")


@dataclass(slots=True)
class PortfolioOverview:
    """Totals describing the debts before any plan is applied."""

    total_balance: float
    total_minimum_payment: float
    estimated_annual_interest: dict[str, float] = field(default_factory=dict)

    @property
    def total_estimated_annual_interest(self) -> float:
        return sum(self.estimated_annual_interest.values())


@dataclass(slots=True)
class PlanSummary:
    """Headline numbers derived from a schedule."""

    total_months: int
    years: int
    months: int
    total_paid: float
    total_interest_paid: float
    original_principal: float
    converged: bool
    payoff_months: dict[str, int | None] = field(default_factory=dict)


def _check_amount(value: float, label: str) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise InvalidDebtInput(f"{label} must be a number")
    if not math.isfinite(value) or value < 0:
        raise InvalidDebtInput(f"{label} must be a finite, non-negative amount")


def validate_debts(debts: Sequence[Debt], monthly_budget: float) -> None:
    """Fail fast on inputs the engine cannot simulate meaningfully."""

    if not debts:
        raise InvalidDebtInput("At least one debt is required")
    _check_amount(monthly_budget, "Monthly budget")
    seen: set[str] = set()
    for debt in debts:
        if debt.id in seen:
            raise InvalidDebtInput(f"Duplicate debt id {debt.id!r}")
        seen.add(debt.id)
        _check_amount(debt.balance, f"Balance of {debt.name or debt.id}")
        _check_amount(debt.interest_rate, f"Interest rate of {debt.name or debt.id}")
        _check_amount(debt.minimum_payment, f"Minimum payment of {debt.name or debt.id}")


def total_minimum_payment(debts: Iterable[Debt]) -> float:
    return sum(d.minimum_payment for d in debts)


def is_valid_budget(debts: Iterable[Debt], monthly_budget: float) -> bool:
    """Return True when the budget covers every minimum payment."""

    return monthly_budget >= total_minimum_payment(debts)


def validate_budget(debts: Iterable[Debt], monthly_budget: float) -> None:
    """Raise :class:`InfeasibleBudget` unless the budget covers the minimums.

    The engine assumes a feasible budget; callers run this check first.
    """

    required = total_minimum_payment(debts)
    if monthly_budget < required:
        raise InfeasibleBudget(monthly_budget, required)


def portfolio_overview(debts: Iterable[Debt]) -> PortfolioOverview:
    debt_list = list(debts)
    return PortfolioOverview(
        total_balance=sum(d.balance for d in debt_list),
        total_minimum_payment=total_minimum_payment(debt_list),
        estimated_annual_interest={
            d.id: d.balance * d.interest_rate / 100 for d in debt_list
        },
    )


def _pay_minimum(debt: WorkingDebt) -> MonthlyPaymentRecord:
    """Apply this month's interest and minimum payment to ``debt``."""

    if debt.is_paid_off:
        return MonthlyPaymentRecord(
            debt_id=debt.id, amount=0.0, remaining_balance=0.0, is_paid_off=True
        )

    monthly_interest_rate = debt.interest_rate / 100 / 12
    interest_this_month = debt.remaining_balance * monthly_interest_rate

    owed = debt.remaining_balance + interest_this_month
    if debt.minimum_payment >= owed:
        # Payment is capped at what is owed; take the balance as-is so it lands on 0.
        payment = owed
        principal = debt.remaining_balance
        interest = interest_this_month
    else:
        payment = debt.minimum_payment
        principal = max(0.0, payment - interest_this_month)
        interest = payment - principal

    debt.remaining_balance = max(0.0, debt.remaining_balance - principal)
    debt.is_paid_off = debt.remaining_balance == 0

    return MonthlyPaymentRecord(
        debt_id=debt.id,
        amount=payment,
        remaining_balance=debt.remaining_balance,
        is_paid_off=debt.is_paid_off,
        interest=interest,
        principal=principal,
    )


def compute_schedule(
    debts: Sequence[Debt],
    monthly_budget: float,
    strategy: PayoffStrategy | str,
    *,
    max_months: int = MAX_MONTHS,
    strict: bool = False,
) -> Schedule:
    """Simulate the payoff plan and return its month-by-month schedule.

    Args:
        debts: Debts in display order; records keep this order.
        monthly_budget: Total spend per month including minimum payments.
        strategy: Which active debt receives the leftover budget.
        max_months: Iteration cap; the schedule is marked unconverged when hit.
        strict: Raise :class:`ScheduleDidNotConverge` instead of returning a
            partial schedule.

    Raises:
        InvalidDebtInput: empty debt list, negative or non-finite amounts.
        ValueError: unknown strategy.
    """

    debts = list(debts)
    validate_debts(debts, monthly_budget)
    resolved = PayoffStrategy.parse(strategy)

    working = [WorkingDebt.from_debt(d) for d in debts]
    schedule = Schedule()
    total_paid = 0.0
    total_interest_paid = 0.0
    month = 1

    while any(not d.is_paid_off for d in working) and month <= max_months:
        records = [_pay_minimum(debt) for debt in working]
        spent = sum(r.amount for r in records)
        total_paid += spent
        total_interest_paid += sum(r.interest for r in records)

        remaining_budget = monthly_budget - spent
        if remaining_budget > 0:
            target = select_target(resolved, [d for d in working if not d.is_paid_off])
            if target is not None:
                extra = min(remaining_budget, target.remaining_balance)
                target.remaining_balance -= extra
                target.is_paid_off = target.remaining_balance == 0

                record = records[working.index(target)]
                record.amount += extra
                record.principal += extra
                record.remaining_balance = target.remaining_balance
                record.is_paid_off = target.is_paid_off
                total_paid += extra

        schedule.months.append(
            MonthSnapshot(
                month=month,
                payments=records,
                total_remaining=sum(d.remaining_balance for d in working),
                total_paid=total_paid,
                total_interest_paid=total_interest_paid,
            )
        )
        month += 1

    schedule.converged = all(d.is_paid_off for d in working)
    if not schedule.converged:
        logger.warning(
            "Payoff plan did not converge",
            extra={
                "strategy": resolved.value,
                "max_months": max_months,
                "total_remaining": schedule[-1].total_remaining if schedule.months else None,
            },
        )
        if strict:
            raise ScheduleDidNotConverge(schedule, max_months)
    else:
        logger.info(
            "Payoff plan generated",
            extra={
                "strategy": resolved.value,
                "debts": len(debts),
                "months": schedule.total_months,
                "total_interest_paid": round(total_interest_paid, 2),
            },
        )
    return schedule


def summarize_schedule(debts: Iterable[Debt], schedule: Schedule) -> PlanSummary:
    """Return (months, totals, per-debt payoff month) for display."""

    debt_list = list(debts)
    years, months = divmod(schedule.total_months, 12)
    return PlanSummary(
        total_months=schedule.total_months,
        years=years,
        months=months,
        total_paid=schedule.total_paid,
        total_interest_paid=schedule.total_interest_paid,
        original_principal=sum(d.balance for d in debt_list),
        converged=schedule.converged,
        payoff_months={d.id: schedule.payoff_month(d.id) for d in debt_list},
    )


__all__ = [
    "InfeasibleBudget",
    "InvalidDebtInput",
    "MAX_MONTHS",
    "PlanSummary",
    "PortfolioOverview",
    "ScheduleDidNotConverge",
    "compute_schedule",
    "is_valid_budget",
    "portfolio_overview",
    "summarize_schedule",
    "total_minimum_payment",
    "validate_budget",
    "validate_debts",
]
