"""Spectral dominant-cycle estimators.

Each estimator builds a power value for every integer candidate period in
``[min_period, max_period]`` on every bar, smooths each candidate's power
over time, normalizes against a decaying running maximum and reports the
power-weighted centroid of the candidates whose normalized power is at
least ``threshold``.

Cost per bar is ``O((max_period - min_period) * window)``, which dominates
engine runtime.  The cosine/sine tables are built once at construction so
each bar is a single matrix-vector product.
"""

from __future__ import annotations

import logging
import math
from collections import deque

import numpy as np

from cycle_engine.estimators.base import BaseEstimator
from cycle_engine.estimators.registry import register_estimator
from cycle_engine.filters.recursive import BandPass
from cycle_engine.models.state import QuadraturePair

logger = logging.getLogger(__name__)

DEFAULT_POWER_SMOOTHING = 0.2
DEFAULT_MAX_POWER_DECAY = 0.995
DEFAULT_THRESHOLD = 0.5


class SpectralEstimator(BaseEstimator):
    """Power spectrum -> running-max normalization -> centroid."""

    def __init__(
        self,
        *args,
        power_smoothing: float = DEFAULT_POWER_SMOOTHING,
        max_power_decay: float = DEFAULT_MAX_POWER_DECAY,
        threshold: float = DEFAULT_THRESHOLD,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        if not 0.0 < power_smoothing <= 1.0:
            raise ValueError(f"power_smoothing must be in (0, 1], got {power_smoothing}")
        if not 0.0 < max_power_decay <= 1.0:
            raise ValueError(f"max_power_decay must be in (0, 1], got {max_power_decay}")
        self.power_smoothing = power_smoothing
        self.max_power_decay = max_power_decay
        self.threshold = threshold
        self.periods = np.arange(
            int(math.ceil(self.min_period)), int(math.floor(self.max_period)) + 1,
            dtype=np.float64,
        )
        if self.periods.size == 0:
            raise ValueError(
                f"No integer candidate period in [{self.min_period}, {self.max_period}]"
            )
        self.power = np.zeros_like(self.periods)
        self.normalized = np.zeros_like(self.periods)
        self.max_power = 0.0

    def _spectrum(self, filtered: float) -> np.ndarray:
        """Instantaneous power per candidate period."""
        raise NotImplementedError

    def _raw_period(self, filtered: float, pair: QuadraturePair | None) -> float:
        w = self.power_smoothing
        self.power = w * self._spectrum(filtered) + (1.0 - w) * self.power
        self.max_power = max(self.max_power_decay * self.max_power, float(self.power.max()))
        if self.max_power <= 0.0:
            self.normalized = np.zeros_like(self.power)
            return 0.0
        self.normalized = self.power / self.max_power

        mask = self.normalized >= self.threshold
        weight = float(self.normalized[mask].sum())
        if weight == 0.0:
            return 0.0
        return float(np.dot(self.periods[mask], self.normalized[mask])) / weight

    def _reset_state(self) -> None:
        self.power = np.zeros_like(self.periods)
        self.normalized = np.zeros_like(self.periods)
        self.max_power = 0.0


def _fourier_tables(periods: np.ndarray, lags: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """``(cos, sin)`` tables of shape ``(len(periods), len(lags))``."""
    angle = 2.0 * np.pi * np.outer(1.0 / periods, lags)
    return np.cos(angle), np.sin(angle)


@register_estimator("dft")
class DftSpectralEstimate(SpectralEstimator):
    """Discrete Fourier transform of the trailing window.

    A candidate's power is the square of ``cos_part**2 + sin_part**2``,
    which narrows the band of candidates above the threshold.

    Args:
        window: Number of trailing samples transformed each bar.  Defaults
            to ``max_period + 1`` (lags 0 through ``max_period``).
    """

    def __init__(self, *args, window: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.window = int(window or math.ceil(self.max_period) + 1)
        if self.window < 1:
            raise ValueError(f"window must be >= 1, got {self.window}")
        self._cos, self._sin = _fourier_tables(self.periods, np.arange(self.window))
        self._history: deque[float] = deque([0.0] * self.window, maxlen=self.window)
        logger.debug(
            "DFT estimator: %d candidates x %d samples", self.periods.size, self.window
        )

    def _spectrum(self, filtered: float) -> np.ndarray:
        self._history.appendleft(filtered)
        samples = np.fromiter(self._history, dtype=np.float64, count=self.window)
        cos_part = self._cos @ samples
        sin_part = self._sin @ samples
        sq_sum = cos_part * cos_part + sin_part * sin_part
        return sq_sum * sq_sum

    def _reset_state(self) -> None:
        super()._reset_state()
        self._history.extend([0.0] * self.window)


@register_estimator("autocorrelation")
class AutocorrelationPeriodogram(SpectralEstimator):
    """Fourier transform of the autocorrelation function.

    Args:
        avg_length: Samples in each Pearson correlation.  0 uses the lag
            itself as the averaging length.
        min_lag: Smallest lag included in the transform.
    """

    def __init__(self, *args, avg_length: int = 3, min_lag: int = 3, **kwargs):
        super().__init__(*args, **kwargs)
        if avg_length < 0:
            raise ValueError(f"avg_length must be >= 0, got {avg_length}")
        self.avg_length = avg_length
        self.max_lag = int(math.ceil(self.max_period))
        self.min_lag = min(min_lag, self.max_lag)
        self.lags = np.arange(self.max_lag + 1)
        depth = self.max_lag + (avg_length or self.max_lag)
        self._history: deque[float] = deque([0.0] * depth, maxlen=depth)
        tx_lags = np.arange(self.min_lag, self.max_lag + 1)
        self._cos, self._sin = _fourier_tables(self.periods, tx_lags)
        self.correlation = np.zeros(self.max_lag + 1)

    def _pearson(self, samples: np.ndarray, lag: int) -> float:
        m = self.avg_length or lag
        if m < 2:
            return 0.0
        x = samples[:m]
        y = samples[lag:lag + m]
        sx, sy = x.sum(), y.sum()
        sxx, syy, sxy = np.dot(x, x), np.dot(y, y), np.dot(x, y)
        denominator = (m * sxx - sx * sx) * (m * syy - sy * sy)
        if denominator <= 0.0:
            return 0.0
        return float((m * sxy - sx * sy) / math.sqrt(denominator))

    def _spectrum(self, filtered: float) -> np.ndarray:
        self._history.appendleft(filtered)
        samples = np.fromiter(self._history, dtype=np.float64, count=len(self._history))
        self.correlation = np.array([self._pearson(samples, int(lag)) for lag in self.lags])
        corr = self.correlation[self.min_lag:]
        cos_part = self._cos @ corr
        sin_part = self._sin @ corr
        sq_sum = cos_part * cos_part + sin_part * sin_part
        return sq_sum * sq_sum

    def _reset_state(self) -> None:
        super()._reset_state()
        self._history.extend([0.0] * self._history.maxlen)
        self.correlation = np.zeros(self.max_lag + 1)


@register_estimator("comb")
class CombFilterSpectralEstimate(SpectralEstimator):
    """Bank of band-pass filters, one per candidate period.

    A candidate's power is the mean square of its band-pass output over one
    candidate cycle.

    Args:
        bandwidth: Fractional half-bandwidth of every band-pass filter.
    """

    def __init__(self, *args, bandwidth: float = 0.15, **kwargs):
        super().__init__(*args, **kwargs)
        self.bandwidth = bandwidth
        self.filters = [BandPass(float(p), bandwidth) for p in self.periods]
        depth = int(self.periods[-1])
        self._outputs = np.zeros((self.periods.size, depth))
        # Row i averages over its own period: the newest periods[i] columns
        self._mask = np.arange(depth)[None, :] < self.periods[:, None]
        logger.debug(
            "Comb estimator: %d band-pass filters, bandwidth=%s",
            len(self.filters), bandwidth,
        )

    def _spectrum(self, filtered: float) -> np.ndarray:
        outputs = np.array([f.update(filtered) for f in self.filters])
        self._outputs = np.roll(self._outputs, 1, axis=1)
        self._outputs[:, 0] = outputs
        squares = np.where(self._mask, self._outputs * self._outputs, 0.0)
        return squares.sum(axis=1) / self.periods

    def _reset_state(self) -> None:
        super()._reset_state()
        for f in self.filters:
            f.reset()
        self._outputs = np.zeros_like(self._outputs)
