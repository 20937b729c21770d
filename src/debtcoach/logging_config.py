"""Logging for plan runs: readable console output and a JSON-lines event file."""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

from .config import BaseConfig

ROOT_LOGGER_NAME = "debtcoach"

# Attribute names every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def plan_fields(record: logging.LogRecord) -> dict[str, object]:
    """Return the ``extra=`` fields attached to ``record``."""

    return {k: v for k, v in vars(record).items() if k not in _RECORD_FIELDS}


class PlanEventFormatter(logging.Formatter):
    """One JSON object per line: event name plus the plan fields logged with it.

    ``logger.warning("Payoff plan did not converge", extra={"strategy": ...})``
    becomes ``{"event": "Payoff plan did not converge", "strategy": ..., ...}``.
    """

    def format(self, record: logging.LogRecord) -> str:
        event = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        for key, value in plan_fields(record).items():
            event.setdefault(key, value)
        if record.exc_info:
            event["error"] = self.formatException(record.exc_info)
        return json.dumps(event, default=str)


def _console_handler(dev_mode: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    if dev_mode:
        handler.setLevel(logging.INFO)
        handler.setFormatter(logging.Formatter("%(levelname)-7s %(name)s: %(message)s"))
    else:
        handler.setLevel(logging.WARNING)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    return handler


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Attach console and rotating event-file handlers to the ``debtcoach`` logger.

    Safe to call repeatedly; handlers from an earlier call are closed first.
    The event file lives at ``<DATA_DIR>/logs/<LOG_FILENAME>``.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    event_file = Path(config.DATA_DIR) / "logs" / config.LOG_FILENAME
    event_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        event_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
    )
    file_handler.setFormatter(PlanEventFormatter())

    logger.addHandler(_console_handler(config.DEV_MODE))
    logger.addHandler(file_handler)
    logger.info(
        "Logging initialized",
        extra={"event_file": str(event_file), "max_months": config.MAX_MONTHS},
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return ``name`` under the ``debtcoach`` namespace (module ``__name__`` works as-is)."""

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
