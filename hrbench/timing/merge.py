"""Combine benchmarks recorded by concurrent workers."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from hrbench.timing.benchmark import Benchmark

logger = logging.getLogger(__name__)


def merge_benchmarks(*benchmarks: Benchmark) -> Optional[Benchmark]:
    """Merge finalized benchmarks into one.

    Laps are concatenated in argument order and the result spans from the
    earliest start to the latest stop. Returns None when called without
    benchmarks. Inputs are not modified.
    """

    if not benchmarks:
        return None

    start: Optional[int] = None
    stop: Optional[int] = None
    laps = []
    for bench in benchmarks:
        laps.append(bench.laps())
        if start is None or bench.start < start:
            start = bench.start
        if stop is None or bench.stop > stop:
            stop = bench.stop

    merged = np.concatenate(laps)
    logger.debug("merged %d benchmarks into %d laps", len(benchmarks), merged.size)
    return Benchmark._from_laps(
        merged, start=start, stop=stop, options=benchmarks[0].options
    )
