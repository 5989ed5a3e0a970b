"""Tests for quadrature generators."""

import math

import numpy as np
import pytest

from cycle_engine.filters import RoofingFilter
from cycle_engine.quadrature import (
    QUADRATURE_VARIANTS,
    ClassicHilbertTransformer,
    DecayingPeak,
    PeakNormalizedHilbertTransformer,
    StabilizedPhasor,
    create_quadrature,
)
from cycle_engine.quadrature.transformers import CLASSIC_DELAY, CLASSIC_TAPS


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _sine(period: float, n: int = 300, amplitude: float = 1.0) -> list[float]:
    return [amplitude * math.sin(2 * math.pi * i / period) for i in range(n)]


def _noisy(n: int = 300, seed: int = 3) -> list[float]:
    rng = np.random.default_rng(seed)
    return list(np.cumsum(rng.normal(0.0, 1.0, n)) + 100.0)


class TestDecayingPeak:
    """Tests for the AGC peak tracker."""

    def test_decays_then_refreshes(self):
        peak = DecayingPeak(0.5)
        assert peak.update(-4.0) == 4.0
        assert peak.update(1.0) == 2.0
        assert peak.update(3.0) == 3.0

    def test_normalize_zero_is_zero(self):
        assert DecayingPeak().normalize(0.0) == 0.0

    def test_invalid_decay(self):
        with pytest.raises(ValueError):
            DecayingPeak(1.5)


class TestClassicHilbert:
    """Tests for the 12-tap classic transformer."""

    def test_taps_are_antisymmetric(self):
        """The taps sum to zero so a constant has no quadrature."""
        assert float(CLASSIC_TAPS.sum()) == pytest.approx(0.0, abs=1e-12)
        in_phase, quadrature = ClassicHilbertTransformer().run([5.0] * 60)
        assert np.all(in_phase[:CLASSIC_DELAY] == 0.0)
        assert np.all(in_phase[CLASSIC_DELAY:] == 1.0)
        assert quadrature[-1] == pytest.approx(0.0, abs=1e-12)

    def test_in_phase_is_normalized(self):
        in_phase, _ = ClassicHilbertTransformer().run(_noisy())
        assert np.all(np.abs(in_phase) <= 1.0)

    def test_impulse_response_is_the_tap_table(self):
        """A unit impulse walks through the taps at even lags."""
        t = ClassicHilbertTransformer()
        first = t.update(1.0)
        assert first.in_phase == 0.0
        assert first.quadrature == pytest.approx(0.091 / 1.865)
        # Peak decays but stays positive, so zeros remain zero
        responses = [t.update(0.0).quadrature for _ in range(22)]
        assert responses[9] == pytest.approx(1.0 / 1.865)  # lag 10
        assert responses[0] == 0.0  # odd lag

    def test_in_phase_sits_at_the_centre_tap(self):
        """The in-phase output is the normalized input 11 bars earlier."""
        t = ClassicHilbertTransformer()
        in_phase = [t.update(v).in_phase for v in [1.0] + [0.0] * 15]
        assert in_phase.index(1.0) == CLASSIC_DELAY == 11


class TestPeakNormalizedHilbert:
    """Tests for the differencing transformer."""

    def test_outputs_bounded(self):
        in_phase, quadrature = PeakNormalizedHilbertTransformer().run(_noisy())
        assert np.all(np.abs(in_phase) <= 1.0)
        assert np.all(np.abs(quadrature) <= 1.0)

    def test_phasor_rotates_one_way_on_a_sine(self):
        """Consecutive samples of a steady cycle always turn the same direction."""
        filtered = RoofingFilter(48, 10).run(_sine(20, n=300))
        in_phase, quadrature = PeakNormalizedHilbertTransformer().run(filtered)
        cross = in_phase[1:] * quadrature[:-1] - in_phase[:-1] * quadrature[1:]
        assert np.all(cross[150:] > 0.0)

    def test_amplitude_independent(self):
        """Scaling the input leaves the normalized pair unchanged."""
        small = PeakNormalizedHilbertTransformer().run(_sine(20, amplitude=0.5))
        large = PeakNormalizedHilbertTransformer().run(_sine(20, amplitude=500.0))
        np.testing.assert_allclose(small[0], large[0], atol=1e-12)
        np.testing.assert_allclose(small[1], large[1], atol=1e-12)


class TestStabilizedPhasor:
    """Tests for the equal-amplitude centred-difference phasor."""

    def test_unit_length(self):
        in_phase, quadrature = StabilizedPhasor().run(_noisy())
        magnitude = np.hypot(in_phase, quadrature)
        np.testing.assert_allclose(magnitude[5:], 1.0, atol=1e-9)

    @pytest.mark.parametrize("period", [10, 25, 48])
    def test_constant_step_on_a_sine(self, period):
        """Each bar turns the phasor by exactly 2*pi / period."""
        in_phase, quadrature = StabilizedPhasor().run(_sine(period))
        cross = in_phase[1:] * quadrature[:-1] - in_phase[:-1] * quadrature[1:]
        np.testing.assert_allclose(cross[10:], math.sin(2 * math.pi / period), atol=1e-9)

    def test_no_clipping(self):
        """The in-phase never sticks at a crest the way the AGC variants do."""
        in_phase, _ = StabilizedPhasor().run(_sine(40))
        assert np.all(np.diff(in_phase[50:]) != 0.0)
        in_phase, _ = PeakNormalizedHilbertTransformer().run(_sine(40))
        assert np.any((in_phase[50:-1] == 1.0) & (in_phase[51:] == 1.0))

    def test_smoothing_validated(self):
        with pytest.raises(ValueError):
            StabilizedPhasor(smoothing=0.0)


class TestFactory:
    """Tests for variant selection by name."""

    def test_known_variants(self):
        assert set(QUADRATURE_VARIANTS) == {"classic", "peak_normalized", "stabilized"}
        assert isinstance(create_quadrature("classic"), ClassicHilbertTransformer)
        assert isinstance(create_quadrature("peak_normalized"), PeakNormalizedHilbertTransformer)

    def test_unknown_variant(self):
        with pytest.raises(KeyError, match="Unknown quadrature variant"):
            create_quadrature("fft")

    @pytest.mark.parametrize("name", ["classic", "peak_normalized", "stabilized"])
    def test_reset_matches_fresh(self, name):
        values = _noisy(120)
        t = create_quadrature(name)
        first = t.run(values)
        t.reset()
        second = t.run(values)
        np.testing.assert_array_equal(first[0], second[0])
        np.testing.assert_array_equal(first[1], second[1])

    def test_variants_differ(self):
        """The two generators are not numerically interchangeable."""
        values = _noisy(120)
        _, classic = create_quadrature("classic").run(values)
        _, peak = create_quadrature("peak_normalized").run(values)
        assert not np.allclose(classic, peak)
