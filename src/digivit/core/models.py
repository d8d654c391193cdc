"""Shared dataclasses for digiVIT runs and samples."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List


@dataclass(frozen=True)
class Sample:
    """One poll of the sensor; NaN counts/position mark a failed read."""

    index: int
    elapsed_s: float
    raw_counts: float
    position_mm: float

    @property
    def is_missing(self) -> bool:
        return math.isnan(self.raw_counts)


@dataclass(frozen=True)
class RunStats:
    sample_count: int
    mean_counts: float
    std_counts: float
    mean_mm: float
    std_mm: float


@dataclass
class RunResult:
    """Outcome of :func:`digivit.core.sampler.run`.

    Unpacks as ``samples, had_error`` for callers that only need those.
    """

    samples: List[Sample]
    had_error: bool
    output_path: Path
    incremental: bool
    stats: RunStats = field(repr=False)

    def __iter__(self) -> Iterator:
        return iter((self.samples, self.had_error))
