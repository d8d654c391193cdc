"""Analysis helpers for logged position data."""

from .stats import summarize

__all__ = ["summarize"]
