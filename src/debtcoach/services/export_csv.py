"""CSV export helpers for payoff schedules."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Protocol

from ..models.debt import Schedule

HEADERS = [
    "month",
    "debt_id",
    "amount",
    "interest",
    "principal",
    "remaining_balance",
    "is_paid_off",
    "total_remaining",
    "total_paid",
    "total_interest_paid",
]


class ScheduleWriter(Protocol):
    """Persists payoff schedules for later retrieval."""

    def write_schedule(self, *, schedule: Schedule) -> Path:  # pragma: no cover - interface
        ...


def _money(value: float) -> str:
    return f"{value:.2f}"


def schedule_rows(schedule: Schedule) -> list[dict[str, str]]:
    """Flatten a schedule into one row per debt per month."""

    rows: list[dict[str, str]] = []
    for snapshot in schedule:
        for record in snapshot.payments:
            rows.append(
                {
                    "month": str(snapshot.month),
                    "debt_id": record.debt_id,
                    "amount": _money(record.amount),
                    "interest": _money(record.interest),
                    "principal": _money(record.principal),
                    "remaining_balance": _money(record.remaining_balance),
                    "is_paid_off": "true" if record.is_paid_off else "false",
                    "total_remaining": _money(snapshot.total_remaining),
                    "total_paid": _money(snapshot.total_paid),
                    "total_interest_paid": _money(snapshot.total_interest_paid),
                }
            )
    return rows


def export_schedule_csv(*, schedule: Schedule, output_path: Path) -> Path:
    """Write ``schedule`` to CSV at ``output_path`` and return the path.

    Columns are deterministic (see ``HEADERS``); amounts are written with two
    decimals for readability, the simulation itself is not rounded.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=HEADERS, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        writer.writerows(schedule_rows(schedule))

    return output_path


class CSVScheduleWriter:
    """:class:`ScheduleWriter` that drops schedules into a directory."""

    def __init__(self, directory: Path, *, filename: str = "payoff_schedule.csv"):
        self.directory = Path(directory)
        self.filename = filename

    def write_schedule(self, *, schedule: Schedule) -> Path:
        return export_schedule_csv(schedule=schedule, output_path=self.directory / self.filename)
