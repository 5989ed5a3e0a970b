"""Dominant-cycle estimator plugin system.

Public API:
- DominantCycleEstimator: Protocol that all estimators must implement
- BaseEstimator: clamp/smooth scaffolding shared by the built-ins
- register_estimator: Decorator to register an estimator class
- create_estimator: Factory function to instantiate estimators by name
- list_estimators: Discover all registered estimators
- get_estimator_class: Get estimator class by name without instantiating

Importing this package auto-registers all built-in estimators.
"""

from cycle_engine.estimators.base import BaseEstimator, QuadratureEstimator, validate_band
from cycle_engine.estimators.protocol import DominantCycleEstimator
from cycle_engine.estimators.registry import (
    create_estimator,
    get_estimator_class,
    list_estimators,
    register_estimator,
)

# Import built-in estimators to trigger auto-registration
from cycle_engine.estimators.dual_differentiator import DualDifferentiator
from cycle_engine.estimators.homodyne import HomodyneDiscriminator
from cycle_engine.estimators.phase_accumulation import PhaseAccumulation, quadrant_phase
from cycle_engine.estimators.spectral import (
    AutocorrelationPeriodogram,
    CombFilterSpectralEstimate,
    DftSpectralEstimate,
    SpectralEstimator,
)

__all__ = [
    "AutocorrelationPeriodogram",
    "BaseEstimator",
    "CombFilterSpectralEstimate",
    "DftSpectralEstimate",
    "DominantCycleEstimator",
    "DualDifferentiator",
    "HomodyneDiscriminator",
    "PhaseAccumulation",
    "QuadratureEstimator",
    "SpectralEstimator",
    "create_estimator",
    "get_estimator_class",
    "list_estimators",
    "quadrant_phase",
    "register_estimator",
    "validate_band",
]
