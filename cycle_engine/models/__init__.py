"""Data models: series, filter state and configuration."""

from cycle_engine.models.config import (
    AdaptiveConfig,
    EstimatorConfig,
    PipelineConfig,
    RoofingConfig,
)
from cycle_engine.models.series import Series
from cycle_engine.models.state import CycleReading, FilterState, QuadraturePair

__all__ = [
    "AdaptiveConfig",
    "CycleReading",
    "EstimatorConfig",
    "FilterState",
    "PipelineConfig",
    "QuadraturePair",
    "RoofingConfig",
    "Series",
]
