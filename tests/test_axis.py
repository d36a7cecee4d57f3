"""
Tests for vertical axis range calculation and the weekly view threshold.
"""

import pytest

from weightcal.analytics.axis import (
    MIN_DAYS_FOR_WEEKLY_VIEW,
    axis_ticks,
    has_enough_data_for_weekly_view,
    lower_bound,
    offset_points,
    tick_label,
    upper_bound,
)
from weightcal.models import DayRecord, Metric, PlottedPoint

from conftest import make_records


class TestLowerBound:
    def test_default_when_empty(self):
        assert lower_bound([]) == 50
        assert lower_bound(None) == 50

    def test_default_when_all_null(self):
        assert lower_bound([None, None]) == 50

    def test_snaps_down_to_multiple_of_five(self):
        # floor(68.1)=68 -> max(50, 68)=68 -> floor(68/5)*5 = 65
        assert lower_bound([72.3, 68.1]) == 65

    def test_never_below_default(self):
        assert lower_bound([40.2, 45.0]) == 50

    def test_ignores_nulls(self):
        assert lower_bound([None, 103.7, None]) == 100

    def test_custom_default(self):
        assert lower_bound([], default=40) == 40
        assert lower_bound([47.9], default=40) == 45


class TestUpperBound:
    def test_default_when_empty(self):
        assert upper_bound([]) == 200

    def test_max_above_default(self):
        assert upper_bound([210.0, 195.0]) == 210.0

    def test_default_when_values_lower(self):
        assert upper_bound([72.3, 68.1]) == 200

    def test_custom_default(self):
        assert upper_bound([72.3, None], default=70) == 72.3


class TestWeeklyViewThreshold:
    def _records(self, count):
        return make_records(2024, 2, {day: 70.0 for day in range(1, count + 1)})

    def test_threshold_constant(self):
        assert MIN_DAYS_FOR_WEEKLY_VIEW == 12

    def test_eleven_readings_not_enough(self):
        assert has_enough_data_for_weekly_view(self._records(11), 2, Metric.MORNING) is False

    def test_twelve_readings_enough(self):
        assert has_enough_data_for_weekly_view(self._records(12), 2, Metric.MORNING) is True

    def test_blank_records_do_not_count(self):
        records = self._records(11) + [DayRecord(2024, 2, day) for day in range(12, 32)]
        assert has_enough_data_for_weekly_view(records, 2, Metric.MORNING) is False

    def test_uses_selected_metric(self):
        assert has_enough_data_for_weekly_view(self._records(20), 2, Metric.EVENING) is False

    def test_other_month_does_not_count(self):
        assert has_enough_data_for_weekly_view(self._records(20), 3, Metric.MORNING) is False

    def test_empty(self):
        assert has_enough_data_for_weekly_view(None, 2, Metric.MORNING) is False


class TestAxisTicks:
    def test_ticks_include_upper(self):
        ticks = axis_ticks(65, 70, 0.5)
        assert len(ticks) == 11
        assert ticks[0] == 0
        assert ticks[-1] == pytest.approx(5.0)

    def test_ticks_stop_before_upper(self):
        assert axis_ticks(65, 66.2, 0.5) == pytest.approx([0.0, 0.5, 1.0])

    def test_small_step(self):
        assert axis_ticks(65, 65.3, 0.1) == pytest.approx([0.0, 0.1, 0.2, 0.3])

    def test_empty_range(self):
        assert axis_ticks(70, 65, 0.5) == []

    def test_invalid_step(self):
        with pytest.raises(ValueError):
            axis_ticks(65, 70, 0)


class TestOffset:
    def test_offset_and_restore(self):
        points = [PlottedPoint(1, 72.5), PlottedPoint(2, 70.0)]
        shifted = offset_points(points, 65)
        assert shifted == [PlottedPoint(1, 7.5), PlottedPoint(2, 5.0)]
        assert [tick_label(p.y, 65) for p in shifted] == [72.5, 70.0]


class TestNonexistentDays:
    def test_threshold_ignores_day_31_of_april(self):
        records = make_records(2024, 3, {day: 70.0 for day in range(20, 32)})
        assert len(records) == 12
        assert has_enough_data_for_weekly_view(records, 3, Metric.MORNING) is False
