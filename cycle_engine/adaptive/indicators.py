"""Cycle-adaptive oscillators.

Each oscillator runs an ``AdaptiveIndicatorFrame`` over the series named by
its ``source`` (the filtered series, or raw price for center of gravity)
with a window derived from the dominant cycle, then optionally smooths the
result with an averaging super smoother.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable

import numpy as np

from cycle_engine.adaptive.frame import AdaptiveIndicatorFrame, FrameResult
from cycle_engine.adaptive.statistics import (
    CenterOfGravity,
    CommodityChannel,
    StochasticPercent,
    UpDownRatio,
    WindowedStatistic,
)
from cycle_engine.filters.recursive import AveragingSuperSmoother

logger = logging.getLogger(__name__)

DEFAULT_CAP = 48
DEFAULT_SMOOTH_LENGTH = 10


class AdaptiveOscillator:
    """Adaptive frame followed by an optional super smoother.

    Args:
        fraction: Multiplier applied to the period to size the window.
        cap: Largest window allowed.
        smooth_length: Super smoother length, or ``None`` for raw output.
    """

    default_fraction: float = 1.0
    smoothed: bool = True
    # Series the pipeline feeds to ``update``: "filtered" or "price"
    source: str = "filtered"

    def __init__(
        self,
        fraction: float | None = None,
        cap: int = DEFAULT_CAP,
        smooth_length: float | None = DEFAULT_SMOOTH_LENGTH,
    ):
        self.fraction = self.default_fraction if fraction is None else fraction
        self.frame = AdaptiveIndicatorFrame(self._statistic(), self.fraction, cap)
        self.smoother = (
            AveragingSuperSmoother(smooth_length)
            if self.smoothed and smooth_length is not None
            else None
        )
        self.value = 0.0

    def _statistic(self) -> WindowedStatistic:
        raise NotImplementedError

    @property
    def window(self) -> int:
        return self.frame.window

    @property
    def cap(self) -> int:
        return self.frame.cap

    def check_band(self, max_period: float) -> bool:
        """Return False (and warn) when the cap truncates reachable windows."""
        if math.ceil(self.fraction * max_period) > self.cap:
            logger.warning(
                "%s cap %d is below the window implied by max_period %s (fraction %s)",
                type(self).__name__, self.cap, max_period, self.fraction,
            )
            return False
        return True

    def update(self, value: float, period: float) -> float:
        raw = self.frame.update(value, period)
        self.value = self.smoother.update(raw) if self.smoother is not None else raw
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
        self.frame.reset()
        if self.smoother is not None:
            self.smoother.reset()
        self.value = 0.0


class AdaptiveStochastic(AdaptiveOscillator):
    """Stochastic %K over one full dominant cycle, 0..1."""

    def _statistic(self) -> WindowedStatistic:
        return StochasticPercent()


class AdaptiveRsi(AdaptiveOscillator):
    """RSI over half a dominant cycle, scaled 0..1."""

    default_fraction = 0.5

    def _statistic(self) -> WindowedStatistic:
        return UpDownRatio()


class AdaptiveCci(AdaptiveOscillator):
    def __init__(self, *args, constant: float = 0.015, **kwargs):
        self.constant = constant
        super().__init__(*args, **kwargs)

    def _statistic(self) -> WindowedStatistic:
        return CommodityChannel(self.constant)


class AdaptiveCenterOfGravity(AdaptiveOscillator):
    """Center of gravity of raw prices over half a dominant cycle, unsmoothed.

    The statistic divides by the window sum, so it needs a series that stays
    on one side of zero.  On positive prices the output lies within
    ``+-(window - 1) / 2``.
    """

    default_fraction = 0.5
    smoothed = False
    source = "price"

    def _statistic(self) -> WindowedStatistic:
        return CenterOfGravity()


INDICATORS: dict[str, type[AdaptiveOscillator]] = {
    "stochastic": AdaptiveStochastic,
    "rsi": AdaptiveRsi,
    "cci": AdaptiveCci,
    "center_of_gravity": AdaptiveCenterOfGravity,
}


def create_indicator(name: str, **kwargs) -> AdaptiveOscillator:
    """Create an adaptive oscillator by name.

    Raises:
        KeyError: If ``name`` is not a known indicator.
    """
    cls = INDICATORS.get(name)
    if cls is None:
        available = ", ".join(sorted(INDICATORS))
        raise KeyError(f"Unknown adaptive indicator '{name}'. Available: {available}")
    return cls(**kwargs)
