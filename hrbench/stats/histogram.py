"""Histogram summaries of lap durations."""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

import numpy as np

from hrbench.clock import NS_PER_MS, NS_PER_SEC, NS_PER_US
from hrbench.config import DEFAULT_OPTIONS, HistogramOptions

logger = logging.getLogger(__name__)

BAR_WIDTH = 40
BAR_CHAR = "█"


@dataclass
class HistogramBin:
    """One bucket; ``start`` is its lower edge in nanoseconds."""

    start: float = 0.0
    count: int = 0
    # Count relative to the fullest bin, in [0, 1].
    width: float = 0.0
    and_above: bool = False


@dataclass
class Histogram:
    """Summary statistics and buckets for a set of durations (nanoseconds)."""

    minimum: float = 0.0
    average: float = 0.0
    maximum: float = 0.0
    p50: float = 0.0
    p90: float = 0.0
    p99: float = 0.0
    p999: float = 0.0
    p9999: float = 0.0
    bins: List[HistogramBin] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(b.count for b in self.bins)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to plain Python types."""
        return asdict(self)

    def format_stats(self) -> str:
        d = format_duration
        return (
            f"  avg {d(self.average)};  min {d(self.minimum)};  "
            f"p50 {d(self.p50)};  max {d(self.maximum)};\n"
            f"  p90 {d(self.p90)};  p99 {d(self.p99)};  "
            f"p999 {d(self.p999)};  p9999 {d(self.p9999)};\n"
        )

    def format_bins(self, bar_width: int = BAR_WIDTH) -> str:
        if not self.bins:
            return ""
        labels = [
            format_duration(b.start) + ("+" if b.and_above else "") for b in self.bins
        ]
        label_width = max(len(label) for label in labels)
        count_width = max(len(str(b.count)) for b in self.bins)
        lines = []
        for label, b in zip(labels, self.bins):
            bar = BAR_CHAR * int(round(b.width * bar_width))
            lines.append(
                f" {label:>{label_width}} [{b.count:>{count_width}}] {bar}".rstrip()
            )
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.format_stats() + self.format_bins()


def format_duration(ns: float) -> str:
    """Render nanoseconds with the largest fitting unit, e.g. ``1.5µs``."""

    if ns < 0:
        return "-" + format_duration(-ns)
    if ns == 0:
        return "0s"
    for unit, scale in (("s", NS_PER_SEC), ("ms", NS_PER_MS), ("µs", NS_PER_US)):
        if ns >= scale:
            return _trim(ns / scale) + unit
    return _trim(ns) + "ns"


def _trim(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


def _nice_number(span: float, round_: bool) -> float:
    """Closest 1, 2, 5 x 10^k step to ``span``."""

    exp = math.floor(math.log10(span))
    frac = span / 10**exp
    if round_:
        if frac < 1.5:
            nice = 1.0
        elif frac < 3:
            nice = 2.0
        elif frac < 7:
            nice = 5.0
        else:
            nice = 10.0
    else:
        if frac <= 1:
            nice = 1.0
        elif frac <= 2:
            nice = 2.0
        elif frac <= 5:
            nice = 5.0
        else:
            nice = 10.0
    return nice * 10**exp


def _calculate_steps(
    low: float, high: float, bin_count: int, nice: bool
) -> Tuple[float, float]:
    """Return (first bin edge, bin spacing)."""

    span = high - low
    if span <= 0:
        return low, 1.0
    if not nice:
        return low, span / bin_count
    spacing = _nice_number(_nice_number(span, False) / max(bin_count - 1, 1), True)
    return math.floor(low / spacing) * spacing, spacing


def _percentile(sorted_values: np.ndarray, q: float) -> float:
    """Nearest-rank lookup of fraction ``q`` in already sorted data."""

    n = sorted_values.size
    i = int(math.floor(q * n + 0.5))
    i = min(max(i, 0), n - 1)
    return float(sorted_values[i])


def build_histogram(
    values: Iterable[float], options: HistogramOptions = DEFAULT_OPTIONS
) -> Histogram:
    """Bucket ``values`` into ``options.bin_count`` bins.

    The upper range is the maximum value, or the ``clamp_percentile``
    percentile when set, or ``clamp_maximum`` when set. Anything past the
    range is counted in the last bin, which is then marked ``and_above``.
    """

    bin_count = options.bin_count
    data = np.sort(np.asarray(list(values), dtype=np.float64))
    hist = Histogram(bins=[HistogramBin() for _ in range(bin_count)])
    if data.size == 0:
        return hist

    hist.minimum = float(data[0])
    hist.maximum = float(data[-1])
    hist.average = float(data.mean())
    hist.p50 = _percentile(data, 0.50)
    hist.p90 = _percentile(data, 0.90)
    hist.p99 = _percentile(data, 0.99)
    hist.p999 = _percentile(data, 0.999)
    hist.p9999 = _percentile(data, 0.9999)

    upper = hist.maximum
    if options.clamp_percentile > 0:
        upper = _percentile(data, options.clamp_percentile / 100.0)
    if options.clamp_maximum > 0:
        upper = float(options.clamp_maximum)

    minimum, spacing = _calculate_steps(
        hist.minimum, upper, bin_count, options.nice_range
    )
    for i, b in enumerate(hist.bins):
        b.start = spacing * i + minimum
    hist.bins[0].start = hist.minimum

    index = np.floor((data - minimum) / spacing).astype(np.int64)
    index = np.clip(index, 0, bin_count - 1)
    counts = np.bincount(index, minlength=bin_count)
    hist.bins[-1].and_above = bool((data > upper).any())

    fullest = int(counts.max())
    for b, c in zip(hist.bins, counts):
        b.count = int(c)
        b.width = b.count / fullest

    logger.debug(
        "histogram of %d values: range [%s, %s), spacing %s",
        data.size,
        format_duration(minimum),
        format_duration(upper),
        format_duration(spacing),
    )
    return hist


def build_duration_histogram(
    durations: Iterable[int], options: HistogramOptions = DEFAULT_OPTIONS
) -> Histogram:
    """Histogram of integer nanosecond durations."""

    return build_histogram(np.asarray(durations, dtype=np.int64), options)
