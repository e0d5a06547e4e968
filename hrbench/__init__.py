"""High-resolution lap benchmarking."""

from importlib import metadata

from hrbench.clock import now, since
from hrbench.config import DEFAULT_OPTIONS, HistogramOptions, load_options
from hrbench.errors import (
    BenchmarkError,
    IncompleteBenchmarkError,
    InvalidCapacityError,
)
from hrbench.stats.histogram import Histogram, HistogramBin, format_duration
from hrbench.timing.benchmark import Benchmark, BenchmarkState
from hrbench.timing.merge import merge_benchmarks
from hrbench.utils import setup_file_logger


def get_version() -> str:
    """Return package version if available, else placeholder."""
    try:
        return metadata.version("hrbench")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = [
    "Benchmark",
    "BenchmarkError",
    "BenchmarkState",
    "DEFAULT_OPTIONS",
    "Histogram",
    "HistogramBin",
    "HistogramOptions",
    "IncompleteBenchmarkError",
    "InvalidCapacityError",
    "format_duration",
    "get_version",
    "load_options",
    "merge_benchmarks",
    "now",
    "setup_file_logger",
    "since",
]
