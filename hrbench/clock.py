"""Monotonic clock used for lap timestamps."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]

NS_PER_US = 1_000
NS_PER_MS = 1_000_000
NS_PER_SEC = 1_000_000_000


def now() -> int:
    """Current monotonic instant in nanoseconds."""

    return time.perf_counter_ns()


def since(start: int, clock: Clock = now) -> int:
    """Nanoseconds elapsed since an earlier reading of ``clock``."""

    return clock() - start
