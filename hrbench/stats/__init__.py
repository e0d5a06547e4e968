"""Duration summaries."""

from hrbench.stats.histogram import (
    Histogram,
    HistogramBin,
    build_duration_histogram,
    build_histogram,
    format_duration,
)

__all__ = [
    "Histogram",
    "HistogramBin",
    "build_duration_histogram",
    "build_histogram",
    "format_duration",
]
