"""Dual differentiator: period from the rate of change of both components.

For a unit phasor turning ``w`` radians per bar the denominator is
``sin(w)``, so the raw period is ``2*pi / sin(w)``.  Runs on a stabilized
phasor by default; see ``QuadratureEstimator``.
"""

from __future__ import annotations

import math

from cycle_engine.estimators.base import QuadratureEstimator
from cycle_engine.estimators.registry import register_estimator
from cycle_engine.filters.coefficients import safe_div
from cycle_engine.models.state import QuadraturePair


@register_estimator("dual_differentiator")
class DualDifferentiator(QuadratureEstimator):
    stabilize_default = True

    def _from_pair(self, pair: QuadraturePair, prev: QuadraturePair) -> float:
        i_dot = pair.in_phase - prev.in_phase
        q_dot = pair.quadrature - prev.quadrature
        denominator = pair.quadrature * i_dot - pair.in_phase * q_dot
        return safe_div(2.0 * math.pi * pair.magnitude_sq, denominator)
