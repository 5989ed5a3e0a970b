"""Quadrature (Hilbert transform) generators."""

from cycle_engine.quadrature.transformers import (
    QUADRATURE_VARIANTS,
    ClassicHilbertTransformer,
    DecayingPeak,
    PeakNormalizedHilbertTransformer,
    PeakNormalizedTransformer,
    QuadratureTransformer,
    StabilizedPhasor,
    create_quadrature,
)

__all__ = [
    "QUADRATURE_VARIANTS",
    "ClassicHilbertTransformer",
    "DecayingPeak",
    "PeakNormalizedHilbertTransformer",
    "PeakNormalizedTransformer",
    "QuadratureTransformer",
    "StabilizedPhasor",
    "create_quadrature",
]
