"""CSV writing helpers for logged position samples."""

import csv
import logging
import math
from pathlib import Path
from typing import Iterable, List

from ..core.models import Sample

logger = logging.getLogger(__name__)

MISSING = "NaN"


def format_row(sample: Sample) -> List[str]:
    """
    Render one sample as four CSV fields.

    Columns are: sample index, elapsed seconds (2 dp), raw counts, and
    position in millimetres (5 dp). Missing readings are written as ``NaN``.
    """
    if math.isnan(sample.raw_counts):
        counts = MISSING
    else:
        counts = str(int(sample.raw_counts))
    if math.isnan(sample.position_mm):
        mm = MISSING
    else:
        mm = f"{sample.position_mm:.5f}"
    return [str(sample.index), f"{sample.elapsed_s:.2f}", counts, mm]


def append_row(path: Path, sample: Sample) -> None:
    """Open ``path`` in append mode, write one record and close it again."""
    with path.open("a", newline="", encoding="utf-8") as csvfile:
        csv.writer(csvfile).writerow(format_row(sample))
    logger.debug("Appended sample %d to %s", sample.index, path)


def write_rows(path: Path, samples: Iterable[Sample]) -> None:
    """
    Write all samples to ``path`` (no header row), replacing any content.

    Directories are created as needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerows(format_row(sample) for sample in samples)
    logger.info("Wrote log file %s", path)
