"""Acquisition core: the sampling loop and the records it produces.

The loop itself lives in :mod:`digivit.core.sampler`; only the plain
dataclasses are re-exported here so that the I/O and analysis helpers can
import them without pulling in the loop.
"""

from .models import RunResult, RunStats, Sample

__all__ = ["RunResult", "RunStats", "Sample"]
