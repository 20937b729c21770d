"""Command line interface tests."""

from __future__ import annotations

import csv

import pytest
from click.testing import CliRunner

from debtcoach.cli import cli

DEBTS_CSV = (
    "id,name,balance,interest_rate,minimum_payment\n"
    "1,Credit Card,5000,18.99,150\n"
    "2,Student Loan,15000,4.5,200\n"
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def debts_path(write_debts_csv):
    return write_debts_csv(DEBTS_CSV)


def test_plan_prints_summary(runner, debts_path):
    result = runner.invoke(cli, ["plan", str(debts_path), "--budget", "600", "--strategy", "avalanche"])

    assert result.exit_code == 0, result.output
    assert "Strategy: Avalanche Method" in result.output
    assert "Priority: Credit Card > Student Loan" in result.output
    assert "Time to debt-free:" in result.output
    assert "Credit Card: month" in result.output
    assert "Student Loan: month" in result.output


def test_plan_uses_configured_default_strategy(runner, debts_path, monkeypatch):
    monkeypatch.setenv("DEBTCOACH_DEFAULT_STRATEGY", "lowestPaymentFirst")

    result = runner.invoke(cli, ["plan", str(debts_path), "--budget", "600"])

    assert result.exit_code == 0, result.output
    assert "Strategy: Lowest Payment First" in result.output


def test_plan_rejects_budget_below_minimums(runner, debts_path):
    result = runner.invoke(cli, ["plan", str(debts_path), "--budget", "300"])

    assert result.exit_code == 2
    assert "below the total minimum payment" in result.output


def test_plan_rejects_invalid_csv(runner, write_debts_csv):
    path = write_debts_csv("name,balance\nCard,100\n", filename="bad.csv")

    result = runner.invoke(cli, ["plan", str(path), "--budget", "100"])

    assert result.exit_code == 2
    assert "Missing required column" in result.output


def test_plan_reports_non_convergence(runner, write_debts_csv):
    path = write_debts_csv("name,balance,interest_rate,minimum_payment\nStuck,10000,24,100\n")

    result = runner.invoke(cli, ["plan", str(path), "--budget", "100"])

    assert result.exit_code == 0, result.output
    assert "Plan does not converge within 50 years" in result.output
    assert "Stuck: not paid off" in result.output


def test_plan_strict_mode_fails_on_non_convergence(runner, write_debts_csv, monkeypatch):
    monkeypatch.setenv("DEBTCOACH_MAX_MONTHS", "24")
    path = write_debts_csv("name,balance,interest_rate,minimum_payment\nStuck,10000,24,100\n")

    result = runner.invoke(cli, ["plan", str(path), "--budget", "100", "--strict"])

    assert result.exit_code == 1
    assert "does not converge within 2 years" in result.output


def test_plan_exports_schedule(runner, debts_path, tmp_path):
    export_path = tmp_path / "exports" / "plan.csv"

    result = runner.invoke(
        cli,
        ["plan", str(debts_path), "--budget", "600", "--export", str(export_path)],
    )

    assert result.exit_code == 0, result.output
    assert export_path.exists()
    with export_path.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.DictReader(fh))
    assert {row["debt_id"] for row in rows} == {"1", "2"}


def test_compare_lists_every_strategy(runner, debts_path):
    result = runner.invoke(cli, ["compare", str(debts_path), "--budget", "600"])

    assert result.exit_code == 0, result.output
    for name in ("avalanche", "snowball", "highestPaymentFirst", "lowestPaymentFirst"):
        assert name in result.output


def test_strategies_command(runner):
    result = runner.invoke(cli, ["strategies"])

    assert result.exit_code == 0
    assert "Snowball Method: Pay off smallest debts first for quick wins" in result.output


def test_plan_save_writes_into_data_dir_exports(runner, debts_path, tmp_path):
    result = runner.invoke(
        cli, ["plan", str(debts_path), "--budget", "600", "--strategy", "snowball", "--save"]
    )

    assert result.exit_code == 0, result.output
    saved = (tmp_path / "data").resolve() / "exports" / "snowball_schedule.csv"
    assert saved.exists()
    assert f"Schedule written: {saved}" in result.output


def test_invalid_default_strategy_is_a_usage_error(runner, debts_path, monkeypatch):
    monkeypatch.setenv("DEBTCOACH_DEFAULT_STRATEGY", "fastest")

    result = runner.invoke(cli, ["plan", str(debts_path), "--budget", "600"])

    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)
    assert "Invalid configuration: Invalid debt payoff strategy." in result.output


def test_invalid_max_months_is_a_usage_error(runner, monkeypatch):
    monkeypatch.setenv("DEBTCOACH_MAX_MONTHS", "forever")

    result = runner.invoke(cli, ["strategies"])

    assert result.exit_code == 2
    assert "DEBTCOACH_MAX_MONTHS must be an integer" in result.output
