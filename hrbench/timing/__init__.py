"""Lap timers and merging."""

from hrbench.timing.benchmark import Benchmark, BenchmarkState
from hrbench.timing.merge import merge_benchmarks

__all__ = ["Benchmark", "BenchmarkState", "merge_benchmarks"]
