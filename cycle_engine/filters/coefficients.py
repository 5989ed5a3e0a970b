"""Closed-form coefficient derivation for the recursive filters.

All functions are pure.  Angles handed to cos/sin are clamped into
``[ANGLE_MIN, ANGLE_MAX]`` radians and pole radii into the same range, so
very short or very long lengths degrade gracefully instead of producing
unstable or NaN coefficients.
"""

from __future__ import annotations

import math

ANGLE_MIN = 0.01
ANGLE_MAX = 0.99

# sqrt(2) as published for the 2-pole Butterworth placement
ROOT2 = 1.414


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_angle(angle: float) -> float:
    return clamp(angle, ANGLE_MIN, ANGLE_MAX)


def safe_div(numerator: float, denominator: float) -> float:
    """Division that yields 0.0 instead of raising or producing inf."""
    if denominator == 0.0:
        return 0.0
    return numerator / denominator


def _check_length(length: float) -> None:
    if length <= 0:
        raise ValueError(f"length must be > 0, got {length}")


def high_pass_alpha(length: float, two_pole: bool = True) -> float:
    """Alpha of the Ehlers high-pass for a cut-off ``length`` in bars.

    The 2-pole form scales the angle by 0.707 so the cascade of both poles
    lands on the requested -3 dB point.
    """
    _check_length(length)
    scale = 0.707 if two_pole else 1.0
    angle = clamp_angle(scale * 2.0 * math.pi / length)
    cos_a = math.cos(angle)
    return (cos_a + math.sin(angle) - 1.0) / cos_a


def super_smoother_coefficients(length: float) -> tuple[float, float, float]:
    """Return ``(c1, c2, c3)`` of the 2-pole Butterworth super smoother."""
    _check_length(length)
    a1 = math.exp(-ROOT2 * math.pi / length)
    b1 = 2.0 * a1 * math.cos(clamp_angle(ROOT2 * math.pi / length))
    c2 = b1
    c3 = -a1 * a1
    c1 = 1.0 - c2 - c3
    return c1, c2, c3


def band_coefficients(length: float, bandwidth: float) -> tuple[float, float]:
    """Return ``(alpha, beta)`` for band-pass/band-stop centred on ``length``.

    ``bandwidth`` is the fractional half-bandwidth (0.15 gives the common
    0.3 full-bandwidth design).
    """
    _check_length(length)
    if not 0.0 < bandwidth < 1.0:
        raise ValueError(f"bandwidth must be in (0, 1), got {bandwidth}")
    beta = math.cos(clamp_angle(2.0 * math.pi / length))
    gamma = 1.0 / math.cos(clamp_angle(4.0 * math.pi * bandwidth / length))
    alpha = gamma - math.sqrt(max(gamma * gamma - 1.0, 0.0))
    return clamp(alpha, ANGLE_MIN, ANGLE_MAX), beta
