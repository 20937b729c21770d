"""Domain model exports."""

from .debt import (
    Debt,
    MonthlyPaymentRecord,
    MonthSnapshot,
    PayoffStrategy,
    Schedule,
    WorkingDebt,
)

__all__ = [
    "Debt",
    "MonthlyPaymentRecord",
    "MonthSnapshot",
    "PayoffStrategy",
    "Schedule",
    "WorkingDebt",
]
