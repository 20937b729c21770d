"""DebtCoach debt payoff planner package."""

from __future__ import annotations

from .config import BaseConfig
from .models.debt import Debt, PayoffStrategy, Schedule
from .services.debts import compute_schedule

__all__ = ["BaseConfig", "Debt", "PayoffStrategy", "Schedule", "compute_schedule"]
