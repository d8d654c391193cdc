"""Helpers for constructing log file paths."""

from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_PREFIX = "logged_digiVIT_data_"


def log_filename(started_at: datetime) -> str:
    """
    Name the log file after the time the run started.

    Example: "logged_digiVIT_data_9-Oct-2023_14_05_09.csv"
    """
    stamp = f"{started_at.day}-{started_at:%b-%Y_%H_%M_%S}"
    return f"{LOG_PREFIX}{stamp}.csv"


def log_path(base: Path, started_at: Optional[datetime] = None) -> Path:
    """Return the log file path under ``base`` for a run starting now (local time)."""
    when = started_at or datetime.now()
    return Path(base) / log_filename(when)
