"""Benchmark statistics over a fixed sample of run timings."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class BenchmarkStats:
    """Min/max/mean of run durations, in whole milliseconds."""

    min_ms: int
    max_ms: int
    mean_ms: int

    @classmethod
    def from_samples(cls, samples: Sequence[int]) -> BenchmarkStats | None:
        """Summarise *samples*; returns None when there are none."""
        if not samples:
            return None
        return cls(
            min_ms=min(samples),
            max_ms=max(samples),
            mean_ms=sum(samples) // len(samples),
        )
