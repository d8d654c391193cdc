"""Read a logged run back into samples for offline review."""

import csv
import math
from pathlib import Path
from typing import List

from ..core.models import Sample

COLUMNS = 4


class LogFormatError(ValueError):
    """A row of the log does not have the index/time/counts/mm layout."""


def parse_row(row: List[str], line_no: int = 0) -> Sample:
    """Turn one CSV record into a :class:`Sample`; ``NaN`` marks a failed read."""
    if len(row) != COLUMNS:
        raise LogFormatError(f"line {line_no}: expected {COLUMNS} columns, got {len(row)}")
    try:
        counts = float(row[2])
        return Sample(
            index=int(row[0]),
            elapsed_s=float(row[1]),
            raw_counts=counts if math.isnan(counts) else int(counts),
            position_mm=float(row[3]),
        )
    except ValueError as exc:
        raise LogFormatError(f"line {line_no}: {exc}") from exc


def load_samples(path: Path) -> List[Sample]:
    """
    Load every sample from a log file, in file order.

    Blank lines are skipped; any other row must have exactly four numeric
    columns or :class:`LogFormatError` is raised.
    """
    with Path(path).open("r", newline="", encoding="utf-8") as csvfile:
        return [
            parse_row(row, line_no)
            for line_no, row in enumerate(csv.reader(csvfile), start=1)
            if row
        ]
