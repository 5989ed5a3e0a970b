"""Cycle-adaptive windowed statistics and oscillators."""

from cycle_engine.adaptive.frame import AdaptiveIndicatorFrame, AdaptiveWindow, FrameResult
from cycle_engine.adaptive.indicators import (
    INDICATORS,
    AdaptiveCci,
    AdaptiveCenterOfGravity,
    AdaptiveOscillator,
    AdaptiveRsi,
    AdaptiveStochastic,
    create_indicator,
)
from cycle_engine.adaptive.statistics import (
    STATISTICS,
    CenterOfGravity,
    CommodityChannel,
    MeanAbsoluteDeviation,
    RangeSpan,
    StochasticPercent,
    UpDownRatio,
    WindowedStatistic,
    create_statistic,
)
from cycle_engine.adaptive.transforms import (
    FisherTransform,
    fisher_transform,
    inverse_fisher_transform,
)

__all__ = [
    "INDICATORS",
    "STATISTICS",
    "AdaptiveCci",
    "AdaptiveCenterOfGravity",
    "AdaptiveIndicatorFrame",
    "AdaptiveOscillator",
    "AdaptiveRsi",
    "AdaptiveStochastic",
    "AdaptiveWindow",
    "CenterOfGravity",
    "CommodityChannel",
    "FisherTransform",
    "FrameResult",
    "MeanAbsoluteDeviation",
    "RangeSpan",
    "StochasticPercent",
    "UpDownRatio",
    "WindowedStatistic",
    "create_indicator",
    "create_statistic",
    "fisher_transform",
    "inverse_fisher_transform",
]
