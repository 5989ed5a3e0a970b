"""Adaptive cycle / DSP engine for Ehlers-style technical analysis.

This package contains pure numeric logic with no I/O dependencies: causal
recursive filters, quadrature generators, dominant-cycle estimators and
cycle-adaptive oscillators, plus a pipeline that chains them.
"""

from cycle_engine.models import (
    AdaptiveConfig,
    EstimatorConfig,
    PipelineConfig,
    RoofingConfig,
    Series,
)
from cycle_engine.pipeline import CyclePipeline, CycleResult, estimate_dominant_cycle

__version__ = "0.1.0"

__all__ = [
    "AdaptiveConfig",
    "CyclePipeline",
    "CycleResult",
    "EstimatorConfig",
    "PipelineConfig",
    "RoofingConfig",
    "Series",
    "estimate_dominant_cycle",
]
