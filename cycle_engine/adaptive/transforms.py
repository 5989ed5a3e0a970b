"""Fisher and inverse Fisher transforms for oscillator outputs."""

from __future__ import annotations

import math

from cycle_engine.filters.coefficients import clamp

FISHER_LIMIT = 0.999


def fisher_transform(value: float) -> float:
    """``0.5 * ln((1 + x) / (1 - x))`` with ``x`` clamped to +-0.999."""
    x = clamp(value, -FISHER_LIMIT, FISHER_LIMIT)
    return 0.5 * math.log((1.0 + x) / (1.0 - x))


def inverse_fisher_transform(value: float, gain: float = 3.0) -> float:
    """``(exp(2*gain*v) - 1) / (exp(2*gain*v) + 1)``, bounded to (-1, 1)."""
    # tanh is the same expression without overflow for large inputs
    return math.tanh(gain * value)


class FisherTransform:
    """Streaming Fisher transform of an oscillator bounded to [0, 1].

    The input is re-centred to [-1, 1] before transforming.  ``trigger`` is
    the previous bar's output, the usual signal line.
    """

    def __init__(self) -> None:
        self.value = 0.0
        self.trigger = 0.0

    def update(self, oscillator: float) -> float:
        self.trigger = self.value
        self.value = fisher_transform(2.0 * (oscillator - 0.5))
        return self.value

    def reset(self) -> None:
        self.value = 0.0
        self.trigger = 0.0
