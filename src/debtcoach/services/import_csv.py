"""CSV ingestion for debt lists."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

import pandas as pd

from ..logging_config import get_logger
from ..models.debt import Debt
from .debts import InvalidDebtInput

logger = get_logger(__name__)


@dataclass(slots=True)
class ColumnMapping:
    """Accepted CSV headers for each debt field, after lower-casing."""

    id: tuple[str, ...] = ("id", "debt_id", "debtid")
    name: tuple[str, ...] = ("name", "label")
    balance: tuple[str, ...] = ("balance",)
    interest_rate: tuple[str, ...] = ("interest_rate", "interestrate", "apr", "rate")
    minimum_payment: tuple[str, ...] = ("minimum_payment", "minimumpayment", "min_payment")


def normalize_frame(*, file_path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """Load a CSV file into a DataFrame with consistent column casing."""

    frame = pd.read_csv(file_path, encoding=encoding, dtype=str, keep_default_na=False)
    frame.columns = [c.strip().lower() for c in frame.columns]
    return frame


def _resolve(columns: Iterable[str], candidates: tuple[str, ...]) -> str | None:
    available = set(columns)
    for candidate in candidates:
        if candidate in available:
            return candidate
    return None


def _parse_amount(raw: object, *, field: str, row_number: int) -> float:
    text = str(raw).strip().replace(",", "").lstrip("$")
    if text.endswith("%"):
        text = text[:-1]
    try:
        return float(text)
    except ValueError:
        raise InvalidDebtInput(
            f"Row {row_number}: {field} must be numeric, got {raw!r}"
        ) from None


def parse_debts(*, rows: Iterable[Mapping], mapping: ColumnMapping | None = None) -> list[Debt]:
    """Convert dict-like rows into :class:`Debt` instances.

    Rows without an id are numbered from 1 in file order.
    """

    mapping = mapping or ColumnMapping()
    rows = list(rows)
    columns = rows[0].keys() if rows else ()

    balance_col = _resolve(columns, mapping.balance)
    rate_col = _resolve(columns, mapping.interest_rate)
    minimum_col = _resolve(columns, mapping.minimum_payment)
    missing = [
        label
        for label, column in (
            ("balance", balance_col),
            ("interest_rate", rate_col),
            ("minimum_payment", minimum_col),
        )
        if column is None
    ]
    if rows and missing:
        raise InvalidDebtInput(f"Missing required column(s): {', '.join(missing)}")

    id_col = _resolve(columns, mapping.id)
    name_col = _resolve(columns, mapping.name)

    debts: list[Debt] = []
    for row_number, row in enumerate(rows, start=1):
        raw_id = str(row.get(id_col, "")).strip() if id_col else ""
        debt_id = raw_id or str(row_number)
        name = str(row.get(name_col, "")).strip() if name_col else ""
        debts.append(
            Debt(
                id=debt_id,
                name=name or f"Debt {debt_id}",
                balance=_parse_amount(row[balance_col], field="balance", row_number=row_number),
                interest_rate=_parse_amount(
                    row[rate_col], field="interest_rate", row_number=row_number
                ),
                minimum_payment=_parse_amount(
                    row[minimum_col], field="minimum_payment", row_number=row_number
                ),
            )
        )
    return debts


def load_debts_csv(*, csv_path: Path, mapping: ColumnMapping | None = None) -> list[Debt]:
    """Read ``csv_path`` and return the debts it lists, in file order."""

    frame = normalize_frame(file_path=csv_path)
    rows = frame.to_dict(orient="records")
    debts = parse_debts(rows=rows, mapping=mapping)
    logger.info("Loaded debts from CSV", extra={"path": str(csv_path), "count": len(debts)})
    return debts
