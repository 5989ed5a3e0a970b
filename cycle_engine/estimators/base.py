"""Shared behaviour of the dominant-cycle estimators.

Every estimator produces a raw period per bar through ``_raw_period``.  The
base class clamps it into the period band, smooths it with its own
averaging super smoother and clamps the smoothed value again, so the
published period never leaves the band.  The smoother starts from the zero
bootstrap, so the first bars publish ``min_period``.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from cycle_engine.filters.coefficients import clamp
from cycle_engine.filters.recursive import AveragingSuperSmoother
from cycle_engine.models.state import QuadraturePair
from cycle_engine.quadrature.transformers import StabilizedPhasor

DEFAULT_MIN_PERIOD = 10
DEFAULT_MAX_PERIOD = 48
DEFAULT_SMOOTH_LENGTH = 20


def validate_band(min_period: float, max_period: float) -> None:
    """Reject a period band that cannot be clamped into.

    Raises:
        ValueError: If ``min_period < 1`` or ``min_period > max_period``.
    """
    if min_period < 1:
        raise ValueError(f"min_period must be >= 1, got {min_period}")
    if min_period > max_period:
        raise ValueError(
            f"min_period ({min_period}) must not exceed max_period ({max_period})"
        )


class BaseEstimator:
    """Clamp, smooth and bookkeeping around ``_raw_period``."""

    name: str = ""
    uses_quadrature: bool = False

    def __init__(
        self,
        min_period: float = DEFAULT_MIN_PERIOD,
        max_period: float = DEFAULT_MAX_PERIOD,
        smooth_length: float = DEFAULT_SMOOTH_LENGTH,
    ):
        validate_band(min_period, max_period)
        self.min_period = min_period
        self.max_period = max_period
        self._smoother = AveragingSuperSmoother(smooth_length)
        self.raw_period = float(min_period)
        self.period = float(min_period)
        self.bars = 0

    def _raw_period(self, filtered: float, pair: QuadraturePair | None) -> float:
        raise NotImplementedError

    def _reset_state(self) -> None:
        """Clear estimator-specific memory."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update(self, filtered: float, pair: QuadraturePair | None = None) -> float:
        if self.uses_quadrature and pair is None:
            raise ValueError(f"Estimator '{self.name}' requires a quadrature pair")
        raw = self._raw_period(float(filtered), pair)
        self.raw_period = clamp(raw, self.min_period, self.max_period)
        smoothed = self._smoother.update(self.raw_period)
        self.period = clamp(smoothed, self.min_period, self.max_period)
        self.bars += 1
        return self.period

    def run(
        self,
        filtered: Iterable[float],
        pairs: Sequence[QuadraturePair] | None = None,
    ) -> np.ndarray:
        """Estimate the period for every bar of ``filtered``."""
        if pairs is None:
            out = [self.update(v) for v in filtered]
        else:
            out = [self.update(v, p) for v, p in zip(filtered, pairs, strict=True)]
        return np.array(out, dtype=np.float64)

    def reset(self) -> None:
        self._smoother.reset()
        self.raw_period = float(self.min_period)
        self.period = float(self.min_period)
        self.bars = 0
        self._reset_state()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(min_period={self.min_period}, "
            f"max_period={self.max_period})"
        )


class QuadratureEstimator(BaseEstimator):
    """Estimator driven by consecutive analytic-signal samples.

    Args:
        stabilize: Build the phasor internally with a ``StabilizedPhasor``
            over the filtered series instead of reading the generator's
            pair.  A stabilized estimator does not need a pair, so
            ``uses_quadrature`` is False.  Defaults to the class's
            ``stabilize_default``.
    """

    stabilize_default: bool = False

    def __init__(self, *args, stabilize: bool | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.stabilize = self.stabilize_default if stabilize is None else stabilize
        self.phasor = StabilizedPhasor() if self.stabilize else None
        self.uses_quadrature = not self.stabilize
        self.prev = QuadraturePair()
        self.current = QuadraturePair()

    def _from_pair(self, pair: QuadraturePair, prev: QuadraturePair) -> float:
        raise NotImplementedError

    def _raw_period(self, filtered: float, pair: QuadraturePair | None) -> float:
        if self.phasor is not None:
            pair = self.phasor.update(filtered)
        raw = self._from_pair(pair, self.prev)
        self.prev = pair
        self.current = pair
        return raw

    def _reset_state(self) -> None:
        self.prev = QuadraturePair()
        self.current = QuadraturePair()
        if self.phasor is not None:
            self.phasor.reset()
