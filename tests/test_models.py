"""Tests for series and filter state models."""

import numpy as np
import pytest

from cycle_engine.models import CycleReading, FilterState, QuadraturePair, Series


class TestSeries:
    """Tests for the append-only Series."""

    def test_append_and_index(self):
        """Appended values are readable by position, newest last."""
        s = Series([1, 2, 3])
        s.append(4)
        assert len(s) == 4
        assert s[0] == 1.0
        assert s[-1] == 4.0
        assert s.last == 4.0

    def test_ago_reads_zero_before_first_bar(self):
        """Lookbacks past the start of the series read as zero."""
        s = Series([10.0, 20.0])
        assert s.ago(0) == 20.0
        assert s.ago(1) == 10.0
        assert s.ago(2) == 0.0
        assert Series().ago(0) == 0.0

    def test_ago_rejects_negative_lag(self):
        with pytest.raises(ValueError):
            Series([1.0]).ago(-1)

    def test_tail_left_pads_with_zeros(self):
        """tail() is oldest first and zero-padded when history is short."""
        s = Series([1.0, 2.0])
        np.testing.assert_array_equal(s.tail(4), [0.0, 0.0, 1.0, 2.0])
        np.testing.assert_array_equal(s.tail(1), [2.0])
        assert s.tail(0).size == 0

    def test_history_is_immutable(self):
        """Series exposes no way to rewrite a past bar."""
        s = Series([1.0, 2.0])
        with pytest.raises(TypeError):
            s[0] = 5.0

    def test_rounded_returns_copy(self):
        """Rounding for display leaves the stored values untouched."""
        s = Series([1.23456789])
        assert s.rounded(2) == [1.23]
        assert s[0] == 1.23456789

    def test_equality_and_numpy(self):
        a = Series([1.0, 2.0])
        assert a == Series([1.0, 2.0])
        assert a != Series([1.0])
        assert a.to_numpy().dtype == np.float64


class TestFilterState:
    """Tests for FilterState recursive memory."""

    def test_prefilled_with_zeros(self):
        state = FilterState(order=2, input_depth=2)
        assert state.prev_input(1) == 0.0
        assert state.prev_input(2) == 0.0
        assert state.prev_output(2) == 0.0
        assert state.count == 0

    def test_push_is_newest_first(self):
        """The most recent push is lag 1."""
        state = FilterState(order=2, input_depth=2)
        state.push(1.0, 10.0)
        state.push(2.0, 20.0)
        state.push(3.0, 30.0)
        assert state.prev_input(1) == 3.0
        assert state.prev_input(2) == 2.0
        assert state.prev_output(1) == 30.0
        assert state.prev_output(2) == 20.0
        assert state.count == 3

    def test_zero_input_depth(self):
        """A filter that needs no input history keeps none."""
        state = FilterState(order=2, input_depth=0)
        state.push(5.0, 1.0)
        assert len(state.inputs) == 0
        assert state.prev_output(1) == 1.0

    def test_clear(self):
        state = FilterState(order=1, input_depth=1)
        state.push(5.0, 1.0)
        state.clear()
        assert state.prev_input(1) == 0.0
        assert state.prev_output(1) == 0.0
        assert state.count == 0


class TestSmallRecords:
    """Tests for QuadraturePair and CycleReading."""

    def test_quadrature_magnitude(self):
        assert QuadraturePair(3.0, 4.0).magnitude_sq == 25.0

    def test_reading_optional_fields_default_none(self):
        reading = CycleReading(index=0, filtered=0.0, period=10.0, dominant_cycle=10.0)
        assert reading.in_phase is None
        assert reading.window is None
        assert reading.value is None
