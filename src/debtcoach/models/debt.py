"""Debt inputs and payoff schedule entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class PayoffStrategy(str, Enum):
    """Ordering used to pick which debt receives the leftover budget."""

    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"
    HIGHEST_PAYMENT_FIRST = "highestPaymentFirst"
    LOWEST_PAYMENT_FIRST = "lowestPaymentFirst"

    @classmethod
    def parse(cls, value: "PayoffStrategy | str") -> "PayoffStrategy":
        """Return the strategy for ``value`` or raise ``ValueError``."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            raise ValueError("Invalid debt payoff strategy.") from None


@dataclass(frozen=True, slots=True)
class Debt:
    """A liability entered by the user; never mutated by the engine."""

    id: str
    name: str
    balance: float
    interest_rate: float  # Annual percentage, e.g. 18.99
    minimum_payment: float


@dataclass(slots=True)
class WorkingDebt:
    """Per-run mutable copy of a :class:`Debt`."""

    id: str
    name: str
    balance: float
    interest_rate: float
    minimum_payment: float
    remaining_balance: float
    is_paid_off: bool = False

    @classmethod
    def from_debt(cls, debt: Debt) -> "WorkingDebt":
        return cls(
            id=debt.id,
            name=debt.name,
            balance=float(debt.balance),
            interest_rate=float(debt.interest_rate),
            minimum_payment=float(debt.minimum_payment),
            remaining_balance=float(debt.balance),
        )


@dataclass(slots=True)
class MonthlyPaymentRecord:
    """What one debt received in one month."""

    debt_id: str
    amount: float
    remaining_balance: float
    is_paid_off: bool
    interest: float = 0.0
    principal: float = 0.0


@dataclass(slots=True)
class MonthSnapshot:
    """All payments for a simulated month plus running totals."""

    month: int
    payments: list[MonthlyPaymentRecord]
    total_remaining: float
    total_paid: float
    total_interest_paid: float

    def record_for(self, debt_id: str) -> MonthlyPaymentRecord | None:
        for record in self.payments:
            if record.debt_id == debt_id:
                return record
        return None


@dataclass(slots=True)
class Schedule:
    """Ordered month snapshots produced by one simulation run.

    ``converged`` is False when the iteration cap was reached before every
    debt was paid off; the snapshots then describe a partial plan.
    """

    months: list[MonthSnapshot] = field(default_factory=list)
    converged: bool = True

    def __len__(self) -> int:
        return len(self.months)

    def __iter__(self) -> Iterator[MonthSnapshot]:
        return iter(self.months)

    def __getitem__(self, index: int) -> MonthSnapshot:
        return self.months[index]

    @property
    def total_months(self) -> int:
        return len(self.months)

    @property
    def total_paid(self) -> float:
        return self.months[-1].total_paid if self.months else 0.0

    @property
    def total_interest_paid(self) -> float:
        return self.months[-1].total_interest_paid if self.months else 0.0

    def payoff_month(self, debt_id: str) -> int | None:
        """Return the first month in which ``debt_id`` is reported paid off."""

        for snapshot in self.months:
            record = snapshot.record_for(debt_id)
            if record is not None and record.is_paid_off:
                return snapshot.month
        return None


__all__ = [
    "Debt",
    "MonthSnapshot",
    "MonthlyPaymentRecord",
    "PayoffStrategy",
    "Schedule",
    "WorkingDebt",
]
