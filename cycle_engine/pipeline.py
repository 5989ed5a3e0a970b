"""Roofing filter -> quadrature -> dominant-cycle estimator -> adaptive oscillator.

``CyclePipeline`` wires independently constructible stages together from a
``PipelineConfig`` and publishes every stage's output into named,
append-only series.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Iterable, Iterator

import numpy as np
import pandas as pd

from cycle_engine.adaptive.indicators import create_indicator
from cycle_engine.estimators import QuadratureEstimator, create_estimator
from cycle_engine.filters.recursive import RoofingFilter
from cycle_engine.models.config import EstimatorConfig, PipelineConfig, RoofingConfig
from cycle_engine.models.series import Series
from cycle_engine.models.state import CycleReading
from cycle_engine.quadrature.transformers import create_quadrature

logger = logging.getLogger(__name__)

# Output keys
FILTERED = "filtered"
IN_PHASE = "inPhase"
QUADRATURE = "quadrature"
PERIOD = "period"
DOMINANT_CYCLE = "dominantCycle"
WINDOW = "window"
VALUE = "value"


class CycleResult(Mapping):
    """Read-only mapping of output key -> ``Series``."""

    def __init__(self, keys: Iterable[str]):
        self._series: dict[str, Series] = {key: Series() for key in keys}

    def __getitem__(self, key: str) -> Series:
        return self._series[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._series)

    def __len__(self) -> int:
        return len(self._series)

    def _append(self, key: str, value: float) -> None:
        self._series[key].append(value)

    def to_frame(self) -> pd.DataFrame:
        """All series as DataFrame columns, one row per bar."""
        return pd.DataFrame({key: s.to_numpy() for key, s in self._series.items()})


class CyclePipeline:
    """Streaming dominant-cycle pipeline over a single price series."""

    def __init__(self, config: PipelineConfig | None = None):
        self.config = config or PipelineConfig()
        roofing = self.config.roofing
        est = self.config.estimator

        self.roofing = RoofingFilter(roofing.upper_length, roofing.lower_length, roofing.high_pass)
        self.estimator = create_estimator(
            est.name,
            min_period=est.min_period,
            max_period=est.max_period,
            smooth_length=est.smooth_length,
            **est.params,
        )
        self.quadrature = (
            create_quadrature(est.quadrature) if self.estimator.uses_quadrature else None
        )

        self.indicator = None
        adaptive = self.config.adaptive
        if adaptive is not None:
            self.indicator = create_indicator(
                adaptive.indicator,
                fraction=adaptive.fraction,
                cap=adaptive.cap or int(math.ceil(est.max_period)),
                smooth_length=adaptive.smooth_length,
            )
            self.indicator.check_band(est.max_period)

        self.result = CycleResult(self._keys())
        self.bars = 0
        logger.info(
            "Cycle pipeline: roofing(%s, %s, %s) -> %s%s%s",
            roofing.upper_length,
            roofing.lower_length,
            roofing.high_pass,
            est.name,
            f" [{est.quadrature}]" if self.quadrature is not None else "",
            f" -> {adaptive.indicator}" if adaptive is not None else "",
        )

    def _keys(self) -> list[str]:
        keys = [FILTERED]
        if self.quadrature is not None or isinstance(self.estimator, QuadratureEstimator):
            keys += [IN_PHASE, QUADRATURE]
        keys += [PERIOD, DOMINANT_CYCLE]
        if self.indicator is not None:
            keys += [WINDOW, VALUE]
        return keys

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update(self, price: float) -> CycleReading:
        """Advance every stage by one bar."""
        filtered = self.roofing.update(price)
        pair = self.quadrature.update(filtered) if self.quadrature is not None else None
        dominant = self.estimator.update(filtered, pair)
        if isinstance(self.estimator, QuadratureEstimator):
            # The phasor the estimator consumed, stabilized or generated
            pair = self.estimator.current

        reading = CycleReading(
            index=self.bars,
            filtered=filtered,
            period=self.estimator.raw_period,
            dominant_cycle=dominant,
        )
        self.result._append(FILTERED, filtered)
        if pair is not None:
            reading.in_phase = pair.in_phase
            reading.quadrature = pair.quadrature
            self.result._append(IN_PHASE, pair.in_phase)
            self.result._append(QUADRATURE, pair.quadrature)
        self.result._append(PERIOD, reading.period)
        self.result._append(DOMINANT_CYCLE, dominant)

        if self.indicator is not None:
            source = price if self.indicator.source == "price" else filtered
            reading.value = self.indicator.update(source, dominant)
            reading.window = self.indicator.window
            self.result._append(WINDOW, reading.window)
            self.result._append(VALUE, reading.value)

        self.bars += 1
        return reading

    def run(self, prices: Iterable[float]) -> CycleResult:
        """Feed every price and return the accumulated result."""
        start = self.bars
        for price in prices:
            self.update(price)
        logger.info(
            "Processed %d bars (total %d), last dominant cycle %.2f",
            self.bars - start, self.bars, self.estimator.period,
        )
        return self.result

    def reset(self) -> None:
        self.roofing.reset()
        if self.quadrature is not None:
            self.quadrature.reset()
        self.estimator.reset()
        if self.indicator is not None:
            self.indicator.reset()
        self.result = CycleResult(self._keys())
        self.bars = 0


def estimate_dominant_cycle(
    values: Iterable[float],
    estimator: str = "homodyne",
    min_period: int = 10,
    max_period: int = 48,
    upper_length: int = 48,
    lower_length: int = 10,
    quadrature: str = "peak_normalized",
    **params,
) -> np.ndarray:
    """Smoothed dominant cycle for every bar of ``values``."""
    config = PipelineConfig(
        roofing=RoofingConfig(upper_length=upper_length, lower_length=lower_length),
        estimator=EstimatorConfig(
            name=estimator,
            min_period=min_period,
            max_period=max_period,
            quadrature=quadrature,
            params=params,
        ),
    )
    return CyclePipeline(config).run(values)[DOMINANT_CYCLE].to_numpy()
