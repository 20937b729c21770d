"""Service module exports."""

from . import debts, export_csv, import_csv, strategies

__all__ = [
    "debts",
    "export_csv",
    "import_csv",
    "strategies",
]
