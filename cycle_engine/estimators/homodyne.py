"""Homodyne discriminator.

Multiplies the current analytic-signal sample by the conjugate of the
previous one; the angle of that product is the phase advance per bar, so
the period is ``2*pi / |im/re|``.
"""

from __future__ import annotations

import math

from cycle_engine.estimators.base import QuadratureEstimator
from cycle_engine.estimators.registry import register_estimator
from cycle_engine.filters.coefficients import safe_div
from cycle_engine.models.state import QuadraturePair


@register_estimator("homodyne")
class HomodyneDiscriminator(QuadratureEstimator):
    """Period from the complex product of consecutive quadrature samples.

    The published discriminator takes the ratio of the raw ``re`` and
    ``im`` of the latest two samples, which is ``smoothing=1.0`` here.  The
    default 0.2 departs from that form and averages ``re`` and ``im`` over
    roughly five bars before the ratio.  With 1.0 the estimate on
    peak-normalized pairs settles up to a bar and a half from the period.

    Args:
        smoothing: EMA weight applied to ``re`` and ``im`` before the ratio
            is taken.  1.0 disables the smoothing.
    """

    def __init__(self, *args, smoothing: float = 0.2, **kwargs):
        super().__init__(*args, **kwargs)
        if not 0.0 < smoothing <= 1.0:
            raise ValueError(f"smoothing must be in (0, 1], got {smoothing}")
        self.smoothing = smoothing
        self.re = 0.0
        self.im = 0.0

    def _from_pair(self, pair: QuadraturePair, prev: QuadraturePair) -> float:
        re = pair.in_phase * prev.in_phase + pair.quadrature * prev.quadrature
        im = prev.in_phase * pair.quadrature - pair.in_phase * prev.quadrature
        w = self.smoothing
        self.re = w * re + (1.0 - w) * self.re
        self.im = w * im + (1.0 - w) * self.im
        if self.re == 0.0 or self.im == 0.0:
            return 0.0
        return safe_div(2.0 * math.pi, abs(self.im / self.re))

    def _reset_state(self) -> None:
        super()._reset_state()
        self.re = 0.0
        self.im = 0.0
