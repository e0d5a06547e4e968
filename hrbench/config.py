"""Configuration dataclasses for histogram summaries."""

from __future__ import annotations

import dataclasses
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict

import yaml


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError(f"{name} must be an integer, got {value!r}")


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise ValueError(f"{name} must be a number, got {value!r}")


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise ValueError(f"{name} must be true or false, got {value!r}")


@dataclass(frozen=True)
class HistogramOptions:
    """Controls how lap durations are bucketed.

    ``clamp_maximum`` and ``clamp_percentile`` pick the lower edge of the
    last bucket; a value of 0 leaves the respective option unset. An
    explicit maximum wins over the percentile.
    """

    bin_count: int = 10
    nice_range: bool = True
    clamp_maximum: float = 0.0
    # Percent, e.g. 99.9 for the p999 lap.
    clamp_percentile: float = 99.9

    def __post_init__(self) -> None:
        # Frozen: normalize YAML scalars (e.g. ``1e6`` loads as a string).
        object.__setattr__(self, "bin_count", _as_int("bin_count", self.bin_count))
        object.__setattr__(self, "nice_range", _as_bool("nice_range", self.nice_range))
        object.__setattr__(
            self, "clamp_maximum", _as_float("clamp_maximum", self.clamp_maximum)
        )
        object.__setattr__(
            self,
            "clamp_percentile",
            _as_float("clamp_percentile", self.clamp_percentile),
        )
        if self.bin_count <= 0:
            raise ValueError(f"bin_count must be larger than 0, got {self.bin_count}")
        if self.clamp_maximum < 0:
            raise ValueError(
                f"clamp_maximum must not be negative, got {self.clamp_maximum}"
            )
        if not 0 <= self.clamp_percentile < 100:
            raise ValueError(
                f"clamp_percentile must be in [0, 100), got {self.clamp_percentile}"
            )

    def replace(self, **changes: Any) -> "HistogramOptions":
        """Return a copy with the given fields overridden."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the options to a plain dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistogramOptions":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown histogram options: {', '.join(unknown)}")
        return cls(**data)


DEFAULT_OPTIONS = HistogramOptions()


def load_options(path: Path) -> HistogramOptions:
    """Load histogram options from a YAML mapping.

    Missing keys keep their defaults. The mapping may be nested under a
    top-level ``histogram`` key.
    """

    with Path(path).open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}")
    if "histogram" in data:
        extra = sorted(set(data) - {"histogram"})
        if extra:
            raise ValueError(f"Unknown top-level keys in {path}: {', '.join(extra)}")
        data = data["histogram"] or {}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping under 'histogram' in {path}")
    return HistogramOptions.from_dict(data)
