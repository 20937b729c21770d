"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .models.debt import PayoffStrategy

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got {parsed}")
    return parsed


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "DebtCoach"
    LOG_FILENAME = "debtcoach.log"
    EXPORT_DIRNAME = "exports"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("DEBTCOACH_DEV_MODE", default=True)
        self.MAX_MONTHS = _env_int("DEBTCOACH_MAX_MONTHS", 600)
        self.DEFAULT_STRATEGY = PayoffStrategy.parse(
            os.getenv("DEBTCOACH_DEFAULT_STRATEGY", PayoffStrategy.AVALANCHE.value)
        )

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding logs and exports."""

        data_root = os.getenv("DEBTCOACH_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def export_dir(self) -> Path:
        return Path(self.DATA_DIR) / self.EXPORT_DIRNAME
