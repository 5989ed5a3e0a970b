"""Tests for the adaptive frame, statistics, oscillators and transforms."""

import logging
import math

import numpy as np
import pytest

from cycle_engine.adaptive import (
    AdaptiveCenterOfGravity,
    AdaptiveIndicatorFrame,
    AdaptiveRsi,
    AdaptiveStochastic,
    AdaptiveWindow,
    CenterOfGravity,
    CommodityChannel,
    FisherTransform,
    MeanAbsoluteDeviation,
    RangeSpan,
    StochasticPercent,
    UpDownRatio,
    WindowedStatistic,
    create_indicator,
    create_statistic,
    fisher_transform,
    inverse_fisher_transform,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _periods(n: int = 200) -> list[float]:
    """Period stream drifting across the 10-48 band."""
    return [29.0 + 19.0 * math.sin(2 * math.pi * i / 90) for i in range(n)]


def _wave(n: int = 200) -> list[float]:
    return [math.sin(2 * math.pi * i / 20) for i in range(n)]


class TestAdaptiveWindow:
    """Tests for window sizing from the period."""

    def test_ceil_of_fraction(self):
        assert AdaptiveWindow(0.5, 48).size(20.2) == 11
        assert AdaptiveWindow(1.0, 48).size(20.0) == 20

    def test_clamped_to_cap_and_one(self):
        sizer = AdaptiveWindow(1.0, 30)
        assert sizer.size(200.0) == 30
        assert sizer.size(0.1) == 1
        assert sizer.size(0.0) == 1

    def test_invalid(self):
        with pytest.raises(ValueError):
            AdaptiveWindow(0.0, 10)
        with pytest.raises(ValueError):
            AdaptiveWindow(1.0, 0)


class TestStatistics:
    """Tests for the windowed reductions (samples are oldest first)."""

    def test_range(self):
        assert RangeSpan().compute(np.array([3.0, 1.0, 4.0])) == 3.0

    def test_stochastic(self):
        assert StochasticPercent().compute(np.array([1.0, 2.0, 3.0, 4.0])) == 1.0
        assert StochasticPercent().compute(np.array([4.0, 2.0, 3.0])) == 0.5
        assert StochasticPercent().compute(np.array([2.0, 2.0])) == 0.0

    def test_mean_absolute_deviation(self):
        assert MeanAbsoluteDeviation().compute(np.array([1.0, 2.0, 3.0])) == pytest.approx(2 / 3)

    def test_commodity_channel(self):
        assert CommodityChannel().compute(np.array([1.0, 2.0, 3.0])) == pytest.approx(100.0)
        assert CommodityChannel().compute(np.array([5.0, 5.0])) == 0.0

    def test_up_down_ratio(self):
        stat = UpDownRatio()
        assert stat.extra == 1
        assert stat.compute(np.array([1.0, 2.0, 1.0, 3.0])) == pytest.approx(0.75)
        assert stat.compute(np.array([1.0, 1.0])) == 0.0

    def test_center_of_gravity(self):
        """A flat window sits at zero; weight on the newest bar pulls it positive."""
        assert CenterOfGravity().compute(np.array([1.0, 1.0, 1.0])) == pytest.approx(0.0)
        assert CenterOfGravity().compute(np.array([1.0, 1.0, 5.0])) > 0.0
        assert CenterOfGravity().compute(np.array([0.0, 0.0])) == 0.0

    @pytest.mark.parametrize("name", ["range", "stochastic", "mean_deviation", "cci", "up_down", "center_of_gravity"])
    def test_factory(self, name):
        assert isinstance(create_statistic(name), WindowedStatistic)

    def test_factory_unknown(self):
        with pytest.raises(KeyError, match="Unknown statistic"):
            create_statistic("median")


class TestAdaptiveIndicatorFrame:
    """Tests for the adaptive-lookback frame."""

    def test_window_tracks_period_without_lag(self):
        """The window at bar i comes from the period at bar i."""
        periods = _periods()
        frame = AdaptiveIndicatorFrame(RangeSpan(), fraction=0.5, cap=48)
        result = frame.run(_wave(), periods)
        expected = [min(max(math.ceil(0.5 * p), 1), 48) for p in periods]
        assert result.windows.tolist() == expected

    def test_uses_newest_samples(self):
        frame = AdaptiveIndicatorFrame(RangeSpan(), fraction=1.0, cap=10)
        for value in range(1, 11):
            out = frame.update(float(value), 3.0)
        assert out == 2.0  # range of [8, 9, 10]
        assert frame.window == 3

    def test_warm_up_sees_zeros(self):
        """Bars before the first one read as zero inside the window."""
        frame = AdaptiveIndicatorFrame(RangeSpan(), fraction=1.0, cap=10)
        assert frame.update(5.0, 3.0) == 5.0

    def test_extra_history_for_differences(self):
        """Up/down sums see window + 1 samples."""
        frame = AdaptiveIndicatorFrame(UpDownRatio(), fraction=1.0, cap=5)
        for value in [10.0, 9.0, 10.0, 11.0]:
            out = frame.update(value, 2.0)
        assert out == 1.0  # diffs over [9, 10, 11]

    def test_cap_bounds_history(self):
        frame = AdaptiveIndicatorFrame(RangeSpan(), fraction=1.0, cap=4)
        frame.run(range(100), [1000.0] * 100)
        assert frame.window == 4
        assert frame.value == 3.0

    def test_reset_matches_fresh(self):
        frame = AdaptiveIndicatorFrame(StochasticPercent(), fraction=1.0, cap=48)
        first = frame.run(_wave(), _periods())
        frame.reset()
        second = frame.run(_wave(), _periods())
        np.testing.assert_array_equal(first.values, second.values)

    def test_mismatched_lengths(self):
        frame = AdaptiveIndicatorFrame(RangeSpan())
        with pytest.raises(ValueError):
            frame.run([1.0, 2.0], [10.0])


class TestAdaptiveOscillators:
    """Tests for the composed oscillators."""

    def test_defaults(self):
        assert AdaptiveStochastic().fraction == 1.0
        assert AdaptiveRsi().fraction == 0.5
        assert AdaptiveCenterOfGravity().smoother is None
        assert AdaptiveStochastic().smoother is not None

    @pytest.mark.parametrize("name", ["stochastic", "rsi", "cci", "center_of_gravity"])
    def test_run_reports_windows(self, name):
        indicator = create_indicator(name)
        result = indicator.run(_wave(), _periods())
        assert len(result.values) == 200
        assert np.all(np.isfinite(result.values))
        expected = [min(max(math.ceil(indicator.fraction * p), 1), 48) for p in _periods()]
        assert result.windows.tolist() == expected

    def test_unsmoothed_stochastic_bounded(self):
        result = AdaptiveStochastic(smooth_length=None).run(_wave(), _periods())
        assert np.all((result.values >= 0.0) & (result.values <= 1.0))

    def test_unknown_indicator(self):
        with pytest.raises(KeyError, match="Unknown adaptive indicator"):
            create_indicator("macd")

    def test_check_band_warns(self, caplog):
        indicator = AdaptiveStochastic(cap=20)
        with caplog.at_level(logging.WARNING):
            assert indicator.check_band(48) is False
        assert "cap 20" in caplog.text
        assert AdaptiveStochastic(cap=48).check_band(48) is True


class TestFisher:
    """Tests for Fisher and inverse Fisher transforms."""

    def test_fisher_symmetric_and_finite(self):
        assert fisher_transform(0.0) == 0.0
        assert fisher_transform(0.5) == pytest.approx(-fisher_transform(-0.5))
        assert math.isfinite(fisher_transform(1.0))
        assert fisher_transform(5.0) == fisher_transform(0.999)

    def test_inverse_undoes_fisher(self):
        assert inverse_fisher_transform(fisher_transform(0.3), gain=1.0) == pytest.approx(0.3)

    def test_inverse_bounded(self):
        assert inverse_fisher_transform(1000.0) == pytest.approx(1.0)
        assert inverse_fisher_transform(-1000.0) == pytest.approx(-1.0)

    def test_streaming_trigger_is_previous_value(self):
        fisher = FisherTransform()
        first = fisher.update(0.8)
        second = fisher.update(0.2)
        assert fisher.trigger == first
        assert second == pytest.approx(-first)
