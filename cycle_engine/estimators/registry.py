"""Name -> class registry for dominant-cycle estimators.

Every registered class is constructed with the period-band keywords
``min_period``, ``max_period`` and ``smooth_length`` (see
``BaseEstimator``) plus its own tuning keywords, e.g. ``smoothing`` for
``homodyne`` or ``bandwidth`` for ``comb``.  The pipeline builds its
estimator from ``EstimatorConfig.name`` through ``create_estimator``.

Usage:
    @register_estimator("my_estimator")
    class MyEstimator(BaseEstimator):
        def _raw_period(self, filtered, pair):
            ...

    estimator = create_estimator("my_estimator", min_period=8, max_period=40)
    names = list_estimators()
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

# estimator name -> BaseEstimator subclass
_REGISTRY: dict[str, type] = {}


def register_estimator(name: str):
    """Class decorator that makes an estimator constructible by ``name``.

    The name is stamped on the class as ``name``, which is what
    ``DominantCycleEstimator.name`` reports.

    Raises:
        ValueError: If another estimator already claimed ``name``.
    """

    def decorator(cls):
        if name in _REGISTRY:
            raise ValueError(
                f"Estimator '{name}' is already registered by {_REGISTRY[name].__name__}"
            )
        cls.name = name
        _REGISTRY[name] = cls
        logger.debug("Registered estimator: %s -> %s", name, cls.__name__)
        return cls

    return decorator


def get_estimator_class(name: str) -> type:
    """Estimator class registered as ``name``, without constructing it.

    Raises:
        KeyError: If no estimator is registered under ``name``.
    """
    cls = _REGISTRY.get(name)
    if cls is None:
        available = ", ".join(sorted(_REGISTRY.keys())) or "(none)"
        raise KeyError(
            f"Unknown estimator '{name}'. Available: {available}"
        )
    return cls


def create_estimator(name: str, **kwargs: Any):
    """Construct the estimator registered as ``name``.

    Args:
        name: Registered estimator name, e.g. ``"homodyne"`` or ``"dft"``.
        **kwargs: ``min_period``, ``max_period`` and ``smooth_length`` for
            the period band, plus estimator-specific keywords.  An inverted
            or sub-1 band raises ``ValueError`` from the constructor.

    Raises:
        KeyError: If no estimator is registered under ``name``.
    """
    return get_estimator_class(name)(**kwargs)


def list_estimators() -> list[str]:
    """Sorted names of every registered estimator, built-ins included."""
    return sorted(_REGISTRY.keys())
