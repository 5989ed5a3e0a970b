"""Phase accumulation.

The phase of the analytic signal is measured every bar and the bar-to-bar
phase deltas are summed backwards in time; the number of bars needed for
the sum to reach a full 360 degree revolution is the period.  The count is
interpolated within the bar whose delta completes the revolution.
"""

from __future__ import annotations

import math
from collections import deque

from cycle_engine.estimators.base import QuadratureEstimator
from cycle_engine.estimators.registry import register_estimator
from cycle_engine.filters.coefficients import clamp
from cycle_engine.models.state import QuadraturePair


def quadrant_phase(in_phase: float, quadrature: float) -> float:
    """Phase in degrees [0, 360) from ``atan(|q/i|)`` with quadrant correction.

    A zero in-phase component points straight along the quadrature axis;
    the zero phasor reads 0.0.
    """
    if in_phase == 0.0:
        if quadrature > 0.0:
            return 90.0
        if quadrature < 0.0:
            return 270.0
        return 0.0
    phase = math.degrees(math.atan(abs(quadrature / in_phase)))
    if in_phase < 0.0 and quadrature >= 0.0:
        return 180.0 - phase
    if in_phase < 0.0 and quadrature < 0.0:
        return 180.0 + phase
    if in_phase > 0.0 and quadrature < 0.0:
        return 360.0 - phase
    return phase


@register_estimator("phase_accumulation")
class PhaseAccumulation(QuadratureEstimator):
    """Count the bars it takes the phase to wrap once.

    Runs on a stabilized phasor by default; see ``QuadratureEstimator``.

    Args:
        min_delta: Smallest accepted phase step in degrees.  Defaults to
            ``360 / max_period``.
        max_delta: Largest accepted phase step in degrees.  Defaults to
            ``360 / min_period``.
    """

    stabilize_default = True

    def __init__(
        self,
        *args,
        min_delta: float | None = None,
        max_delta: float | None = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.min_delta = 360.0 / self.max_period if min_delta is None else min_delta
        self.max_delta = 360.0 / self.min_period if max_delta is None else max_delta
        if self.min_delta <= 0.0:
            raise ValueError(f"min_delta must be > 0, got {self.min_delta}")
        if self.min_delta > self.max_delta:
            raise ValueError(
                f"min_delta ({self.min_delta}) must not exceed max_delta ({self.max_delta})"
            )
        self.depth = int(math.ceil(self.max_period)) + 1
        self.phase = 0.0
        self.inst_period = 0.0
        self._deltas: deque[float] = deque(maxlen=self.depth)

    def _from_pair(self, pair: QuadraturePair, prev: QuadraturePair) -> float:
        phase = quadrant_phase(pair.in_phase, pair.quadrature)
        delta = self.phase - phase
        # Unwrap the 0/360 crossing
        if self.phase < 90.0 and phase > 270.0:
            delta = 360.0 + self.phase - phase
        self.phase = phase
        self._deltas.appendleft(clamp(delta, self.min_delta, self.max_delta))

        total = 0.0
        for count, step in enumerate(self._deltas):
            if total + step > 360.0:
                self.inst_period = count + (360.0 - total) / step
                break
            total += step
        return self.inst_period

    def _reset_state(self) -> None:
        super()._reset_state()
        self.phase = 0.0
        self.inst_period = 0.0
        self._deltas.clear()
