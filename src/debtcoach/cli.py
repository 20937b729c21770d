"""Command line front end for DebtCoach."""

from __future__ import annotations

from pathlib import Path

import click

from .config import BaseConfig
from .logging_config import get_logger, setup_logging
from .models.debt import Debt, PayoffStrategy, Schedule
from .services.debts import (
    InvalidDebtInput,
    ScheduleDidNotConverge,
    compute_schedule,
    portfolio_overview,
    summarize_schedule,
    validate_budget,
)
from .services.export_csv import CSVScheduleWriter
from .services.import_csv import load_debts_csv
from .services.strategies import STRATEGY_CATALOG, describe_strategy, priority_order

logger = get_logger(__name__)

STRATEGY_CHOICES = [s.value for s in PayoffStrategy]


def _duration(months: int) -> str:
    years, rest = divmod(months, 12)
    parts = []
    if years:
        parts.append(f"{years} year{'s' if years != 1 else ''}")
    if rest or not years:
        parts.append(f"{rest} month{'s' if rest != 1 else ''}")
    return " ".join(parts)


def _load_and_check(debts_csv: Path, budget: float) -> list[Debt]:
    try:
        debts = load_debts_csv(csv_path=debts_csv)
        if not debts:
            raise InvalidDebtInput("At least one debt is required")
        validate_budget(debts, budget)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    return debts


def _run(debts: list[Debt], budget: float, strategy: str, max_months: int, strict: bool) -> Schedule:
    try:
        return compute_schedule(debts, budget, strategy, max_months=max_months, strict=strict)
    except ScheduleDidNotConverge as exc:
        raise click.ClickException(
            f"Plan does not converge within {exc.max_months // 12} years"
        ) from exc
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Plan a debt payoff month by month."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.UsageError(f"Invalid configuration: {exc}", ctx=ctx) from exc
    setup_logging(config)
    ctx.obj = config


@cli.command("strategies")
def strategies_command() -> None:
    """List the available payoff strategies."""

    for info in STRATEGY_CATALOG:
        click.echo(f"{info.strategy.value:<20} {info.name}: {info.description}")


@cli.command("plan")
@click.argument("debts_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--budget", type=float, required=True, help="Total monthly budget for debts")
@click.option("--strategy", type=click.Choice(STRATEGY_CHOICES), default=None)
@click.option(
    "--export",
    "export_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the full schedule to this CSV file",
)
@click.option(
    "--save",
    is_flag=True,
    default=False,
    help="Write the schedule to <data dir>/exports/<strategy>_schedule.csv",
)
@click.option("--strict", is_flag=True, default=False, help="Fail when the plan does not converge")
@click.pass_obj
def plan_command(
    config: BaseConfig,
    debts_csv: Path,
    budget: float,
    strategy: str | None,
    export_path: Path | None,
    save: bool,
    strict: bool,
) -> None:
    """Simulate a payoff plan for the debts listed in DEBTS_CSV."""

    debts = _load_and_check(debts_csv, budget)
    chosen = PayoffStrategy.parse(strategy or config.DEFAULT_STRATEGY)
    schedule = _run(debts, budget, chosen.value, config.MAX_MONTHS, strict)
    summary = summarize_schedule(debts, schedule)
    overview = portfolio_overview(debts)

    click.echo(f"Strategy: {describe_strategy(chosen).name}")
    click.echo(
        "Priority: " + " > ".join(d.name for d in priority_order(debts, chosen))
    )
    click.echo(f"Principal: {overview.total_balance:,.2f}")
    if summary.converged:
        click.echo(f"Time to debt-free: {_duration(summary.total_months)}")
    else:
        click.echo(f"Plan does not converge within {config.MAX_MONTHS // 12} years")
    click.echo(f"Total interest: {summary.total_interest_paid:,.2f}")
    click.echo(f"Total cost: {summary.total_paid:,.2f}")
    for debt in debts:
        month = summary.payoff_months.get(debt.id)
        label = f"month {month}" if month is not None else "not paid off"
        click.echo(f"  {debt.name}: {label}")

    writers = []
    if export_path is not None:
        writers.append(CSVScheduleWriter(export_path.parent, filename=export_path.name))
    if save:
        writers.append(
            CSVScheduleWriter(config.export_dir, filename=f"{chosen.value}_schedule.csv")
        )
    for writer in writers:
        written = writer.write_schedule(schedule=schedule)
        click.echo(f"Schedule written: {written}")


@cli.command("compare")
@click.argument("debts_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--budget", type=float, required=True, help="Total monthly budget for debts")
@click.pass_obj
def compare_command(config: BaseConfig, debts_csv: Path, budget: float) -> None:
    """Run every strategy on DEBTS_CSV and print the results side by side."""

    debts = _load_and_check(debts_csv, budget)
    click.echo(f"{'strategy':<20} {'months':>7} {'interest':>12} {'total':>12}")
    for info in STRATEGY_CATALOG:
        schedule = _run(debts, budget, info.strategy.value, config.MAX_MONTHS, False)
        months = str(schedule.total_months) if schedule.converged else "n/a"
        click.echo(
            f"{info.strategy.value:<20} {months:>7} "
            f"{schedule.total_interest_paid:>12,.2f} {schedule.total_paid:>12,.2f}"
        )


def main() -> None:
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
