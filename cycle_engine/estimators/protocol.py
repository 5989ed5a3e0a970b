"""Estimator protocol defining the interface all dominant-cycle estimators implement."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from cycle_engine.models.state import QuadraturePair


@runtime_checkable
class DominantCycleEstimator(Protocol):
    """Protocol that all dominant-cycle estimators must implement.

    An estimator consumes one filtered sample per bar (plus the quadrature
    pair when ``uses_quadrature`` is true) and publishes a smoothed period
    that always lies inside ``[min_period, max_period]``.
    """

    @property
    def name(self) -> str:
        """Registered estimator name (e.g. 'homodyne')."""
        ...

    @property
    def uses_quadrature(self) -> bool:
        """Whether ``update`` requires a ``QuadraturePair``."""
        ...

    @property
    def min_period(self) -> float: ...

    @property
    def max_period(self) -> float: ...

    @property
    def raw_period(self) -> float:
        """Clamped, unsmoothed period of the latest bar."""
        ...

    @property
    def period(self) -> float:
        """Smoothed, clamped period of the latest bar."""
        ...

    def update(self, filtered: float, pair: QuadraturePair | None = None) -> float:
        """Consume one bar and return the smoothed period.

        Raises:
            ValueError: If the estimator needs a quadrature pair and none
                was given.
        """
        ...

    def reset(self) -> None: ...
