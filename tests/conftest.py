"""Pytest configuration and shared fixtures for DebtCoach tests.

Provides debt factories, isolation for the data directory and the
``debtcoach`` logger, and float comparison helpers for money values.
"""

from __future__ import annotations

import logging

import pytest

from debtcoach.logging_config import ROOT_LOGGER_NAME
from debtcoach.models.debt import Debt


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep logs and exports out of the working tree and reset handlers."""

    monkeypatch.setenv("DEBTCOACH_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("DEBTCOACH_MAX_MONTHS", raising=False)
    monkeypatch.delenv("DEBTCOACH_DEFAULT_STRATEGY", raising=False)
    monkeypatch.delenv("DEBTCOACH_DEV_MODE", raising=False)
    yield
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def debt_factory():
    """Factory for creating test debts.

    Returns:
        Callable: Function that builds Debt instances with sensible defaults
    """

    counter = {"next": 1}

    def _create_debt(
        id: str | None = None,
        name: str | None = None,
        balance: float = 1000.00,
        interest_rate: float = 18.0,
        minimum_payment: float = 25.00,
    ) -> Debt:
        """Create a test debt.

        Args:
            id: Identifier; sequential when omitted
            name: Display label
            balance: Principal owed at month 0
            interest_rate: Annual percentage rate (e.g., 18.0 for 18%)
            minimum_payment: Minimum monthly payment
        """
        if id is None:
            id = str(counter["next"])
            counter["next"] += 1
        return Debt(
            id=id,
            name=name or f"Debt {id}",
            balance=balance,
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
        )

    return _create_debt


@pytest.fixture
def sample_debts(debt_factory):
    """Credit card and student loan used throughout the examples."""

    return [
        debt_factory(id="1", name="Credit Card", balance=5000, interest_rate=18.99, minimum_payment=150),
        debt_factory(id="2", name="Student Loan", balance=15000, interest_rate=4.5, minimum_payment=200),
    ]


@pytest.fixture
def write_debts_csv(tmp_path):
    """Write CSV text to a temporary file and return its path."""

    def _write(content: str, filename: str = "debts.csv"):
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")
        return path

    return _write


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
