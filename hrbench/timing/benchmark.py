"""Lap benchmarking driven by repeated ``next()`` calls."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator

import numpy as np

from hrbench.clock import Clock, now
from hrbench.config import DEFAULT_OPTIONS, HistogramOptions
from hrbench.errors import IncompleteBenchmarkError, InvalidCapacityError
from hrbench.stats.histogram import Histogram, build_duration_histogram

logger = logging.getLogger(__name__)


class BenchmarkState(Enum):
    """Lifecycle of a benchmark. Transitions only move forward."""

    RAW = "raw"  # still recording timestamps
    AWAITING_CLOSE = "awaiting_close"  # every slot filled, last lap still open
    FINALIZED = "finalized"  # laps hold durations


class Benchmark:
    """Measures ``count`` laps of a workload.

    Typical use::

        bench = Benchmark(1000)
        while bench.next():
            work()
        print(bench.histogram(10))

    Each ``next()`` call that returns True starts a lap; the call that
    returns False closes the last one. Laps are stored as raw clock
    readings in a pre-allocated buffer and converted in place into
    durations (nanoseconds) when the last lap closes.

    A benchmark must be driven from a single thread. Run one per worker
    and combine them with :func:`hrbench.timing.merge.merge_benchmarks`.
    """

    def __init__(
        self,
        count: int,
        clock: Clock = now,
        options: HistogramOptions = DEFAULT_OPTIONS,
    ) -> None:
        if count <= 0:
            raise InvalidCapacityError(count)
        self._clock = clock
        self._options = options
        self._step = 0
        self._laps = np.zeros(count, dtype=np.int64)
        self._start = 0
        self._stop = 0
        self._finalized = False

    @classmethod
    def _from_laps(
        cls,
        laps: np.ndarray,
        start: int,
        stop: int,
        options: HistogramOptions = DEFAULT_OPTIONS,
    ) -> "Benchmark":
        """Build an already finalized benchmark from existing durations."""
        bench = cls.__new__(cls)
        bench._clock = now
        bench._options = options
        bench._step = int(laps.size)
        bench._laps = laps
        bench._start = int(start)
        bench._stop = int(stop)
        bench._finalized = True
        return bench

    @property
    def count(self) -> int:
        return int(self._laps.size)

    @property
    def step(self) -> int:
        return self._step

    @property
    def start(self) -> int:
        """Clock reading at the first lap; 0 until finalized."""
        return self._start

    @property
    def stop(self) -> int:
        """Clock reading that closed the last lap; 0 until finalized."""
        return self._stop

    @property
    def options(self) -> HistogramOptions:
        return self._options

    @property
    def state(self) -> BenchmarkState:
        if self._finalized:
            return BenchmarkState.FINALIZED
        if self._step < self._laps.size:
            return BenchmarkState.RAW
        return BenchmarkState.AWAITING_CLOSE

    @property
    def completed(self) -> bool:
        return self._finalized

    @property
    def elapsed(self) -> int:
        """Total nanoseconds from the first lap to the close."""
        self._must_be_completed()
        return self._stop - self._start

    def next(self) -> bool:
        """Start the next lap, or close the last one and return False."""
        now_ = self._clock()
        if self._step >= self._laps.size:
            self._finalize(now_)
            return False
        self._laps[self._step] = now_
        self._step += 1
        return True

    def __iter__(self) -> Iterator[int]:
        """Drive the benchmark from a ``for`` loop, yielding lap indices."""
        while self.next():
            yield self._step - 1

    def _must_be_completed(self) -> None:
        if not self._finalized:
            raise IncompleteBenchmarkError()

    def _finalize(self, last: int) -> None:
        if self._finalized:
            return
        laps = self._laps
        self._start = int(laps[0])
        np.subtract(laps[1:], laps[:-1], out=laps[:-1])
        laps[-1] = last - laps[-1]
        self._stop = int(last)
        self._finalized = True
        logger.debug(
            "finalized %d laps over %d ns", laps.size, self._stop - self._start
        )

    def laps(self) -> np.ndarray:
        """Duration of every lap in nanoseconds (a copy)."""
        self._must_be_completed()
        return self._laps.copy()

    def histogram(self, bin_count: int) -> Histogram:
        """Histogram of all laps.

        Uses ``bin_count`` bins and the configured clamp percentile
        (p99.9 by default) as the last bucket range; with ``nice_range``
        the range may be widened for rounder bin edges.
        """
        self._must_be_completed()
        opts = self._options.replace(bin_count=bin_count)
        return build_duration_histogram(self._laps, opts)

    def histogram_clamp(self, bin_count: int, minimum: int, maximum: int) -> Histogram:
        """Histogram of all laps with durations clamped to [minimum, maximum].

        Bounds are integer nanoseconds. Laps shorter than ``minimum`` count as
        ``minimum``; ``maximum`` becomes the last bucket boundary so longer
        laps fall in the final bin.
        """
        self._must_be_completed()
        laps = np.maximum(self._laps, np.int64(int(minimum)))
        opts = self._options.replace(
            bin_count=bin_count,
            clamp_maximum=float(maximum),
            clamp_percentile=0.0,
        )
        return build_duration_histogram(laps, opts)

    def __repr__(self) -> str:
        return (
            f"Benchmark(count={self.count}, step={self._step}, "
            f"state={self.state.value}, start={self._start}, stop={self._stop})"
        )
