"""End-of-run summary statistics."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..core.models import RunStats, Sample


def _mean_std(values: np.ndarray) -> tuple[float, float]:
    """Mean and sample standard deviation; a NaN anywhere poisons both."""
    if values.size == 0:
        return float("nan"), float("nan")
    mean = float(np.mean(values))
    if values.size == 1:
        # A lone reading has no spread, but a missing one still has no value.
        return mean, 0.0 if np.isfinite(mean) else float("nan")
    return mean, float(np.std(values, ddof=1))


def summarize(samples: Sequence[Sample]) -> RunStats:
    """
    Compute mean and standard deviation of counts and millimetres.

    Missing samples are *not* excluded: NaN propagates into every statistic
    of the run, so a single failed poll yields NaN summary values.
    """
    counts = np.array([s.raw_counts for s in samples], dtype=float)
    mm = np.array([s.position_mm for s in samples], dtype=float)
    mean_counts, std_counts = _mean_std(counts)
    mean_mm, std_mm = _mean_std(mm)
    return RunStats(
        sample_count=len(samples),
        mean_counts=mean_counts,
        std_counts=std_counts,
        mean_mm=mean_mm,
        std_mm=std_mm,
    )
