"""Streaming recursive (IIR) filters.

Each filter owns a ``FilterState`` and advances one bar per ``update``.
For the first ``order`` bars the output is exactly 0.0 and any history that
does not exist yet reads as zero, so a filter never echoes raw input during
warm-up.  Coefficients are derived once at construction; ``retune`` swaps
them without touching the recursive state.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from cycle_engine.filters.coefficients import (
    band_coefficients,
    high_pass_alpha,
    super_smoother_coefficients,
)
from cycle_engine.models.state import FilterState

logger = logging.getLogger(__name__)


class RecursiveFilter:
    """Base class: warm-up handling, state bookkeeping and batch runs."""

    order: int = 2
    input_depth: int = 2

    def __init__(self) -> None:
        self.state = FilterState(order=self.order, input_depth=self.input_depth)

    def _step(self, value: float) -> float:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update(self, value: float) -> float:
        """Consume one bar and return the filter output for it."""
        value = float(value)
        if self.state.count < self.order:
            output = 0.0
        else:
            output = self._step(value)
        self.state.push(value, output)
        return output

    def run(self, values: Iterable[float]) -> np.ndarray:
        """Feed ``values`` through ``update`` and return all outputs."""
        return np.array([self.update(v) for v in values], dtype=np.float64)

    def reset(self) -> None:
        self.state.clear()

    @property
    def last(self) -> float:
        return self.state.prev_output(1)


# ----------------------------------------------------------------------
# High-pass
# ----------------------------------------------------------------------


class OnePoleHighPass(RecursiveFilter):
    """1-pole high-pass: ``(1 - a/2)(x - x1) + (1 - a) y1``."""

    order = 1
    input_depth = 1

    def __init__(self, length: float = 48):
        super().__init__()
        self.retune(length)

    def retune(self, length: float) -> None:
        self.length = length
        self.alpha = high_pass_alpha(length, two_pole=False)
        logger.debug("OnePoleHighPass(%s): alpha=%.6f", length, self.alpha)

    def _step(self, value: float) -> float:
        s = self.state
        a = self.alpha
        return (1.0 - a / 2.0) * (value - s.prev_input(1)) + (1.0 - a) * s.prev_output(1)


class TwoPoleHighPass(RecursiveFilter):
    """2-pole high-pass with pass-band gain ``(1 - a/2)^2``."""

    order = 2
    input_depth = 2

    def __init__(self, length: float = 48):
        super().__init__()
        self.retune(length)

    @staticmethod
    def _gain(alpha: float) -> float:
        return (1.0 - alpha / 2.0) ** 2

    def retune(self, length: float) -> None:
        self.length = length
        self.alpha = high_pass_alpha(length, two_pole=True)
        self.gain = self._gain(self.alpha)
        logger.debug(
            "%s(%s): alpha=%.6f gain=%.6f",
            type(self).__name__, length, self.alpha, self.gain,
        )

    def _step(self, value: float) -> float:
        s = self.state
        a = self.alpha
        return (
            self.gain * (value - 2.0 * s.prev_input(1) + s.prev_input(2))
            + 2.0 * (1.0 - a) * s.prev_output(1)
            - (1.0 - a) ** 2 * s.prev_output(2)
        )


class TwoPoleHighPassV2(TwoPoleHighPass):
    """Alternate published 2-pole high-pass with gain ``((1 - a)/2)^2``.

    Poles and zeros match ``TwoPoleHighPass`` so the frequency shape is the
    same; only the pass-band level is lower.
    """

    @staticmethod
    def _gain(alpha: float) -> float:
        return ((1.0 - alpha) / 2.0) ** 2


# ----------------------------------------------------------------------
# Low-pass
# ----------------------------------------------------------------------


class SuperSmoother(RecursiveFilter):
    """2-pole Butterworth low-pass: ``c1 x + c2 y1 + c3 y2``."""

    order = 2
    input_depth = 0

    def __init__(self, length: float = 10):
        super().__init__()
        self.retune(length)

    def retune(self, length: float) -> None:
        self.length = length
        self.c1, self.c2, self.c3 = super_smoother_coefficients(length)
        logger.debug(
            "%s(%s): c1=%.6f c2=%.6f c3=%.6f",
            type(self).__name__, length, self.c1, self.c2, self.c3,
        )

    def _step(self, value: float) -> float:
        s = self.state
        return self.c1 * value + self.c2 * s.prev_output(1) + self.c3 * s.prev_output(2)


class AveragingSuperSmoother(SuperSmoother):
    """Super smoother fed with the 2-bar average of its input.

    The extra zero at Nyquist removes the 2-bar ripple that the plain form
    lets through.
    """

    input_depth = 1

    def _step(self, value: float) -> float:
        s = self.state
        return (
            self.c1 * (value + s.prev_input(1)) / 2.0
            + self.c2 * s.prev_output(1)
            + self.c3 * s.prev_output(2)
        )


# ----------------------------------------------------------------------
# Band filters
# ----------------------------------------------------------------------


class BandPass(RecursiveFilter):
    """2-pole resonator centred on ``length`` bars."""

    order = 2
    input_depth = 2

    def __init__(self, length: float = 20, bandwidth: float = 0.15):
        super().__init__()
        self.retune(length, bandwidth)

    def retune(self, length: float, bandwidth: float | None = None) -> None:
        self.length = length
        if bandwidth is not None:
            self.bandwidth = bandwidth
        self.alpha, self.beta = band_coefficients(length, self.bandwidth)
        logger.debug(
            "%s(%s, %s): alpha=%.6f beta=%.6f",
            type(self).__name__, length, self.bandwidth, self.alpha, self.beta,
        )

    def _step(self, value: float) -> float:
        s = self.state
        a, b = self.alpha, self.beta
        return (
            0.5 * (1.0 - a) * (value - s.prev_input(2))
            + b * (1.0 + a) * s.prev_output(1)
            - a * s.prev_output(2)
        )


class BandStop(BandPass):
    """Notch at ``length`` bars with unity gain elsewhere."""

    def _step(self, value: float) -> float:
        s = self.state
        a, b = self.alpha, self.beta
        return (
            0.5 * (1.0 + a) * (value - 2.0 * b * s.prev_input(1) + s.prev_input(2))
            + b * (1.0 + a) * s.prev_output(1)
            - a * s.prev_output(2)
        )


# ----------------------------------------------------------------------
# Roofing
# ----------------------------------------------------------------------

HIGH_PASS_VARIANTS: dict[str, type[RecursiveFilter]] = {
    "standard": TwoPoleHighPass,
    "v2": TwoPoleHighPassV2,
    "one_pole": OnePoleHighPass,
}


class RoofingFilter:
    """High-pass followed by an averaging super smoother.

    Passes cycles between ``lower_length`` and ``upper_length`` bars and
    removes both trend and aliasing noise.
    """

    def __init__(
        self,
        upper_length: float = 48,
        lower_length: float = 10,
        high_pass: str = "standard",
    ):
        cls = HIGH_PASS_VARIANTS.get(high_pass)
        if cls is None:
            available = ", ".join(sorted(HIGH_PASS_VARIANTS))
            raise KeyError(f"Unknown high-pass variant '{high_pass}'. Available: {available}")
        self.variant = high_pass
        self.high_pass = cls(upper_length)
        self.smoother = AveragingSuperSmoother(lower_length)

    @property
    def order(self) -> int:
        return max(self.high_pass.order, self.smoother.order)

    @property
    def upper_length(self) -> float:
        return self.high_pass.length

    @property
    def lower_length(self) -> float:
        return self.smoother.length

    def update(self, value: float) -> float:
        return self.smoother.update(self.high_pass.update(value))

    def run(self, values: Iterable[float]) -> np.ndarray:
        return np.array([self.update(v) for v in values], dtype=np.float64)

    def retune(
        self,
        upper_length: float | None = None,
        lower_length: float | None = None,
    ) -> None:
        if upper_length is not None:
            self.high_pass.retune(upper_length)
        if lower_length is not None:
            self.smoother.retune(lower_length)

    def reset(self) -> None:
        self.high_pass.reset()
        self.smoother.reset()
