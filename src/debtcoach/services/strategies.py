"""Payoff strategy ordering and catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from ..models.debt import Debt, PayoffStrategy, WorkingDebt


@dataclass(frozen=True, slots=True)
class StrategyInfo:
    """Display metadata for a payoff strategy."""

    strategy: PayoffStrategy
    name: str
    description: str


STRATEGY_CATALOG: tuple[StrategyInfo, ...] = (
    StrategyInfo(
        PayoffStrategy.AVALANCHE,
        "Avalanche Method",
        "Pay off debts with highest interest rates first",
    ),
    StrategyInfo(
        PayoffStrategy.SNOWBALL,
        "Snowball Method",
        "Pay off smallest debts first for quick wins",
    ),
    StrategyInfo(
        PayoffStrategy.HIGHEST_PAYMENT_FIRST,
        "Highest Payment First",
        "Pay off debts with highest minimum payments first",
    ),
    StrategyInfo(
        PayoffStrategy.LOWEST_PAYMENT_FIRST,
        "Lowest Payment First",
        "Pay off debts with lowest minimum payments first",
    ),
)

_CATALOG_BY_STRATEGY = {info.strategy: info for info in STRATEGY_CATALOG}


# Sort keys; negated values give descending order while keeping sorted() stable.
_SORT_KEYS: dict[PayoffStrategy, Callable[[WorkingDebt], float]] = {
    PayoffStrategy.AVALANCHE: lambda d: -d.interest_rate,
    PayoffStrategy.SNOWBALL: lambda d: d.remaining_balance,
    PayoffStrategy.HIGHEST_PAYMENT_FIRST: lambda d: -d.minimum_payment,
    PayoffStrategy.LOWEST_PAYMENT_FIRST: lambda d: d.minimum_payment,
}


def describe_strategy(strategy: PayoffStrategy | str) -> StrategyInfo:
    """Return catalog metadata for ``strategy``."""

    return _CATALOG_BY_STRATEGY[PayoffStrategy.parse(strategy)]


def order_active_debts(
    strategy: PayoffStrategy | str, active_debts: Iterable[WorkingDebt]
) -> list[WorkingDebt]:
    """Return ``active_debts`` sorted by strategy priority.

    Ties keep the incoming order, so callers must pass debts in input order.
    """

    key = _SORT_KEYS[PayoffStrategy.parse(strategy)]
    return sorted(active_debts, key=key)


def select_target(
    strategy: PayoffStrategy | str, active_debts: Sequence[WorkingDebt]
) -> WorkingDebt | None:
    """Pick the debt that receives this month's leftover budget."""

    if not active_debts:
        return None
    return order_active_debts(strategy, active_debts)[0]


def priority_order(debts: Iterable[Debt], strategy: PayoffStrategy | str) -> list[Debt]:
    """Return input debts in the order ``strategy`` attacks them at month 0."""

    debt_list = list(debts)
    working = [WorkingDebt.from_debt(d) for d in debt_list]
    position = {id(w): index for index, w in enumerate(working)}
    return [debt_list[position[id(w)]] for w in order_active_debts(strategy, working)]


__all__ = [
    "STRATEGY_CATALOG",
    "StrategyInfo",
    "describe_strategy",
    "order_active_debts",
    "priority_order",
    "select_target",
]
