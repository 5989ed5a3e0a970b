"""Whole-series helpers over the streaming filters.

Each function builds a fresh filter, feeds every value in order and
returns the outputs as a list, so the result is identical to calling
``update`` bar by bar.
"""

from typing import Sequence

from cycle_engine.filters.recursive import (
    HIGH_PASS_VARIANTS,
    BandPass,
    BandStop,
    RoofingFilter,
    SuperSmoother,
)


def high_pass(values: Sequence[float], length: float = 48, variant: str = "standard") -> list[float]:
    """High-pass ``values`` with the named variant ("standard", "v2", "one_pole")."""
    cls = HIGH_PASS_VARIANTS.get(variant)
    if cls is None:
        available = ", ".join(sorted(HIGH_PASS_VARIANTS))
        raise KeyError(f"Unknown high-pass variant '{variant}'. Available: {available}")
    return cls(length).run(values).tolist()


def super_smoother(values: Sequence[float], length: float = 10) -> list[float]:
    return SuperSmoother(length).run(values).tolist()


def roofing_filter(
    values: Sequence[float],
    upper_length: float = 48,
    lower_length: float = 10,
    high_pass: str = "standard",
) -> list[float]:
    return RoofingFilter(upper_length, lower_length, high_pass).run(values).tolist()


def band_pass(values: Sequence[float], length: float = 20, bandwidth: float = 0.15) -> list[float]:
    return BandPass(length, bandwidth).run(values).tolist()


def band_stop(values: Sequence[float], length: float = 20, bandwidth: float = 0.15) -> list[float]:
    return BandStop(length, bandwidth).run(values).tolist()
