"""Analytic-signal (in-phase / quadrature) generators.

Three variants are provided and they are not interchangeable:

* ``ClassicHilbertTransformer`` - 12-tap FIR Hilbert approximation over
  the peak-normalized input.  Accurate 90 degree shift for periods 6-50.
  The FIR is centred 11 bars back, so the in-phase component is the
  normalized input delayed by 11 bars and the whole pair lags by that much.
* ``PeakNormalizedHilbertTransformer`` - quadrature from the one-bar
  difference of the normalized input, normalized by its own decaying
  peak.  Nearly zero lag, amplitude-independent.
* ``StabilizedPhasor`` - unit-length phasor from a centred difference with
  the two components brought to equal amplitude.  One bar of lag, no
  peak clipping.

The first two start with automatic gain control: a decaying peak tracker
divides the input so the in-phase component stays within [-1, 1].
"""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Iterable

import numpy as np

from cycle_engine.filters.coefficients import clamp, safe_div
from cycle_engine.models.state import QuadraturePair

logger = logging.getLogger(__name__)

DEFAULT_PEAK_DECAY = 0.991
DEFAULT_PHASOR_SMOOTHING = 0.1

# Taps at lags 0, 2, 4, ..., 22 of the classic transformer
CLASSIC_TAPS = np.array(
    [0.091, 0.111, 0.143, 0.2, 0.333, 1.0, -1.0, -0.333, -0.2, -0.143, -0.111, -0.091]
)
CLASSIC_GAIN = 1.865
CLASSIC_DELAY = len(CLASSIC_TAPS) - 1


class DecayingPeak:
    """Peak magnitude that decays geometrically when not refreshed."""

    __slots__ = ("decay", "value")

    def __init__(self, decay: float = DEFAULT_PEAK_DECAY):
        if not 0.0 < decay < 1.0:
            raise ValueError(f"decay must be in (0, 1), got {decay}")
        self.decay = decay
        self.value = 0.0

    def update(self, sample: float) -> float:
        self.value = max(self.decay * self.value, abs(sample))
        return self.value

    def normalize(self, sample: float) -> float:
        """Refresh the peak with ``sample`` and return ``sample / peak``."""
        return safe_div(sample, self.update(sample))

    def reset(self) -> None:
        self.value = 0.0


class QuadratureTransformer:
    """One ``QuadraturePair`` per input sample, plus a batch helper."""

    name: str = ""

    def __init__(self):
        self.current = QuadraturePair()

    def _pair(self, value: float) -> QuadraturePair:
        raise NotImplementedError

    def update(self, value: float) -> QuadraturePair:
        self.current = self._pair(float(value))
        return self.current

    def run(self, values: Iterable[float]) -> tuple[np.ndarray, np.ndarray]:
        """Return ``(in_phase, quadrature)`` arrays for ``values``."""
        pairs = [self.update(v) for v in values]
        in_phase = np.array([p.in_phase for p in pairs], dtype=np.float64)
        quadrature = np.array([p.quadrature for p in pairs], dtype=np.float64)
        return in_phase, quadrature

    def reset(self) -> None:
        self.current = QuadraturePair()


class PeakNormalizedTransformer(QuadratureTransformer):
    """AGC front end: the input is divided by its decaying peak first."""

    def __init__(self, decay: float = DEFAULT_PEAK_DECAY):
        super().__init__()
        self.peak = DecayingPeak(decay)

    def _from_real(self, real: float) -> QuadraturePair:
        raise NotImplementedError

    def _pair(self, value: float) -> QuadraturePair:
        return self._from_real(self.peak.normalize(value))

    def reset(self) -> None:
        super().reset()
        self.peak.reset()


class ClassicHilbertTransformer(PeakNormalizedTransformer):
    name = "classic"

    def __init__(self, decay: float = DEFAULT_PEAK_DECAY):
        super().__init__(decay)
        size = 2 * CLASSIC_DELAY + 1
        self._history: deque[float] = deque([0.0] * size, maxlen=size)

    def _from_real(self, real: float) -> QuadraturePair:
        self._history.appendleft(real)
        # Even lags only; odd lags carry no weight
        lagged = np.fromiter(
            (self._history[k] for k in range(0, len(self._history), 2)),
            dtype=np.float64,
            count=len(CLASSIC_TAPS),
        )
        return QuadraturePair(
            in_phase=self._history[CLASSIC_DELAY],
            quadrature=float(np.dot(CLASSIC_TAPS, lagged)) / CLASSIC_GAIN,
        )

    def reset(self) -> None:
        super().reset()
        self._history.extend([0.0] * self._history.maxlen)


class PeakNormalizedHilbertTransformer(PeakNormalizedTransformer):
    name = "peak_normalized"

    def __init__(self, decay: float = DEFAULT_PEAK_DECAY):
        super().__init__(decay)
        self.quadrature_peak = DecayingPeak(decay)
        self._prev_real = 0.0

    def _from_real(self, real: float) -> QuadraturePair:
        diff = real - self._prev_real
        self._prev_real = real
        return QuadraturePair(in_phase=real, quadrature=self.quadrature_peak.normalize(diff))

    def reset(self) -> None:
        super().reset()
        self.quadrature_peak.reset()
        self._prev_real = 0.0


class StabilizedPhasor(QuadratureTransformer):
    """Unit phasor that turns by exactly the cycle's angular step per bar.

    The in-phase component is the input one bar ago, ``x[1]``, and the
    quadrature is the centred difference ``(x[0] - x[2]) / 2``.  For a
    sinusoid of angular frequency ``w`` that difference is the quadrature of
    ``x[1]`` scaled by ``sin(w)``.  ``cos(w)`` is estimated as the ratio of
    the smoothed products ``x[1] * (x[0] + x[2])`` and ``2 * x[1]**2`` (a
    sinusoid satisfies it bar by bar), the difference is divided by the
    implied ``sin(w)`` and the pair is scaled to unit length.

    Args:
        smoothing: EMA weight of the two products.
    """

    name = "stabilized"

    def __init__(self, smoothing: float = DEFAULT_PHASOR_SMOOTHING):
        super().__init__()
        if not 0.0 < smoothing <= 1.0:
            raise ValueError(f"smoothing must be in (0, 1], got {smoothing}")
        self.smoothing = smoothing
        self._samples: deque[float] = deque([0.0] * 3, maxlen=3)
        self._cross = 0.0
        self._power = 0.0

    @property
    def cos_step(self) -> float:
        """Current estimate of ``cos(w)``."""
        return clamp(safe_div(self._cross, 2.0 * self._power), -1.0, 1.0)

    def _pair(self, value: float) -> QuadraturePair:
        self._samples.appendleft(value)
        x0, x1, x2 = self._samples
        w = self.smoothing
        self._cross = w * x1 * (x0 + x2) + (1.0 - w) * self._cross
        self._power = w * x1 * x1 + (1.0 - w) * self._power
        cos_step = self.cos_step
        sin_step = math.sqrt(1.0 - cos_step * cos_step)
        quadrature = safe_div(0.5 * (x0 - x2), sin_step)
        magnitude = math.hypot(x1, quadrature)
        return QuadraturePair(
            in_phase=safe_div(x1, magnitude),
            quadrature=safe_div(quadrature, magnitude),
        )

    def reset(self) -> None:
        super().reset()
        self._samples.extend([0.0] * 3)
        self._cross = 0.0
        self._power = 0.0


QUADRATURE_VARIANTS: dict[str, type[QuadratureTransformer]] = {
    ClassicHilbertTransformer.name: ClassicHilbertTransformer,
    PeakNormalizedHilbertTransformer.name: PeakNormalizedHilbertTransformer,
    StabilizedPhasor.name: StabilizedPhasor,
}


def create_quadrature(name: str, **kwargs) -> QuadratureTransformer:
    """Create a quadrature generator by variant name.

    Raises:
        KeyError: If ``name`` is not a known variant.
    """
    cls = QUADRATURE_VARIANTS.get(name)
    if cls is None:
        available = ", ".join(sorted(QUADRATURE_VARIANTS))
        raise KeyError(f"Unknown quadrature variant '{name}'. Available: {available}")
    logger.debug("Creating quadrature generator: %s", name)
    return cls(**kwargs)
