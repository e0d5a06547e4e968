"""Exceptions raised on benchmark misuse."""

from __future__ import annotations


class BenchmarkError(RuntimeError):
    """Base class for caller-contract violations."""


class InvalidCapacityError(BenchmarkError, ValueError):
    """Raised when a benchmark is created with fewer than one sample."""

    def __init__(self, count: int) -> None:
        super().__init__(f"must have count at least 1, got {count}")
        self.count = count


class IncompleteBenchmarkError(BenchmarkError):
    """Raised when results are read before the last lap was closed."""

    def __init__(self, message: str = "benchmarking incomplete") -> None:
        super().__init__(message)
