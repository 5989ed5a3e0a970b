"""Adaptive-lookback frame.

Wraps a windowed statistic and resizes its lookback every bar from the
current dominant-cycle estimate.  The window used at bar ``i`` is derived
from the period published at bar ``i`` (no lag).
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from itertools import islice
from typing import Iterable

import numpy as np

from cycle_engine.adaptive.statistics import WindowedStatistic
from cycle_engine.filters.coefficients import clamp


class AdaptiveWindow:
    """``window = clamp(ceil(fraction * period), 1, cap)``."""

    __slots__ = ("fraction", "cap")

    def __init__(self, fraction: float = 1.0, cap: int = 48):
        if fraction <= 0:
            raise ValueError(f"fraction must be > 0, got {fraction}")
        if cap < 1:
            raise ValueError(f"cap must be >= 1, got {cap}")
        self.fraction = fraction
        self.cap = int(cap)

    def size(self, period: float) -> int:
        return int(clamp(math.ceil(self.fraction * period), 1, self.cap))


@dataclass(slots=True)
class FrameResult:
    """Per-bar values and the window length each one was computed over."""

    values: np.ndarray
    windows: np.ndarray


class AdaptiveIndicatorFrame:
    """Apply ``statistic`` over a period-driven trailing window.

    History is bounded by ``cap + statistic.extra`` samples and pre-filled
    with zeros, so early windows see zero for bars that do not exist yet.
    """

    def __init__(self, statistic: WindowedStatistic, fraction: float = 1.0, cap: int = 48):
        self.statistic = statistic
        self.sizer = AdaptiveWindow(fraction, cap)
        depth = self.sizer.cap + statistic.extra
        self._history: deque[float] = deque([0.0] * depth, maxlen=depth)
        self.window = 1
        self.value = 0.0

    @property
    def cap(self) -> int:
        return self.sizer.cap

    def update(self, value: float, period: float) -> float:
        self._history.appendleft(float(value))
        self.window = self.sizer.size(period)
        n = self.window + self.statistic.extra
        samples = np.fromiter(islice(self._history, n), dtype=np.float64, count=n)[::-1]
        self.value = self.statistic.compute(samples)
        return self.value

    def run(self, values: Iterable[float], periods: Iterable[float]) -> FrameResult:
        out: list[float] = []
        windows: list[int] = []
        for value, period in zip(values, periods, strict=True):
            out.append(self.update(value, period))
            windows.append(self.window)
        return FrameResult(
            values=np.array(out, dtype=np.float64),
            windows=np.array(windows, dtype=np.int64),
        )

    def reset(self) -> None:
        self._history.extend([0.0] * self._history.maxlen)
        self.window = 1
        self.value = 0.0
