"""Windowed statistics evaluated by the adaptive frame.

Every statistic receives the newest ``window + extra`` samples oldest
first and returns a single float.  Degenerate windows (flat range, zero
deviation, zero sums) return 0.0.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from cycle_engine.filters.coefficients import safe_div


@runtime_checkable
class WindowedStatistic(Protocol):
    """A reduction over the adaptive window."""

    @property
    def extra(self) -> int:
        """Samples needed beyond the window itself (e.g. 1 for differences)."""
        ...

    def compute(self, samples: np.ndarray) -> float: ...


class RangeSpan:
    extra = 0

    def compute(self, samples: np.ndarray) -> float:
        return float(samples.max() - samples.min())


class StochasticPercent:
    """Position of the newest sample inside the window range, 0..1."""

    extra = 0

    def compute(self, samples: np.ndarray) -> float:
        low = samples.min()
        return safe_div(float(samples[-1] - low), float(samples.max() - low))


class MeanAbsoluteDeviation:
    extra = 0

    def compute(self, samples: np.ndarray) -> float:
        return float(np.abs(samples - samples.mean()).mean())


class CommodityChannel:
    """``(last - mean) / (constant * mean absolute deviation)``."""

    extra = 0

    def __init__(self, constant: float = 0.015):
        self.constant = constant

    def compute(self, samples: np.ndarray) -> float:
        mean = samples.mean()
        deviation = float(np.abs(samples - mean).mean())
        return safe_div(float(samples[-1] - mean), self.constant * deviation)


class UpDownRatio:
    """Share of upward movement in the window: ``up / (up + down)``.

    This is the RSI kernel scaled to 0..1.
    """

    extra = 1

    def compute(self, samples: np.ndarray) -> float:
        diffs = np.diff(samples)
        up = float(diffs[diffs > 0].sum())
        down = float(-diffs[diffs < 0].sum())
        return safe_div(up, up + down)


class CenterOfGravity:
    """Ehlers center of gravity, centred on zero for a flat window."""

    extra = 0

    def compute(self, samples: np.ndarray) -> float:
        newest_first = samples[::-1]
        n = newest_first.size
        weights = np.arange(1, n + 1, dtype=np.float64)
        numerator = float(np.dot(weights, newest_first))
        denominator = float(newest_first.sum())
        if denominator == 0.0:
            return 0.0
        return -numerator / denominator + (n + 1) / 2.0


STATISTICS: dict[str, type] = {
    "range": RangeSpan,
    "stochastic": StochasticPercent,
    "mean_deviation": MeanAbsoluteDeviation,
    "cci": CommodityChannel,
    "up_down": UpDownRatio,
    "center_of_gravity": CenterOfGravity,
}


def create_statistic(name: str, **kwargs) -> WindowedStatistic:
    """Create a windowed statistic by name.

    Raises:
        KeyError: If ``name`` is not a known statistic.
    """
    cls = STATISTICS.get(name)
    if cls is None:
        available = ", ".join(sorted(STATISTICS))
        raise KeyError(f"Unknown statistic '{name}'. Available: {available}")
    return cls(**kwargs)
