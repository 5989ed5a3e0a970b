"""Recursive DSP filters (pure math, no I/O)."""

from cycle_engine.filters.batch import (
    band_pass,
    band_stop,
    high_pass,
    roofing_filter,
    super_smoother,
)
from cycle_engine.filters.recursive import (
    HIGH_PASS_VARIANTS,
    AveragingSuperSmoother,
    BandPass,
    BandStop,
    OnePoleHighPass,
    RecursiveFilter,
    RoofingFilter,
    SuperSmoother,
    TwoPoleHighPass,
    TwoPoleHighPassV2,
)

__all__ = [
    "HIGH_PASS_VARIANTS",
    "AveragingSuperSmoother",
    "BandPass",
    "BandStop",
    "OnePoleHighPass",
    "RecursiveFilter",
    "RoofingFilter",
    "SuperSmoother",
    "TwoPoleHighPass",
    "TwoPoleHighPassV2",
    "band_pass",
    "band_stop",
    "high_pass",
    "roofing_filter",
    "super_smoother",
]
