"""
Tests for day / week-of-month / month-of-year bucketing.
"""

import pytest

from weightcal.analytics.aggregation import (
    by_day,
    by_month,
    by_week,
    calc_weight_stats,
    metric_values,
    week_windows,
)
from weightcal.calendar_utils import month_length
from weightcal.models import DayRecord, Metric, PlottedPoint

from conftest import make_records

MARCH = 2  # 0-based


class TestByDay:
    """Test daily series."""

    def test_only_days_with_values(self):
        records = make_records(2024, MARCH, {1: 70.0, 2: None, 3: 71.0, 4: None, 5: 72.0})
        assert by_day(records, MARCH, Metric.MORNING) == [
            PlottedPoint(1, 70.0),
            PlottedPoint(3, 71.0),
            PlottedPoint(5, 72.0),
        ]

    def test_every_point_has_underlying_value(self):
        records = make_records(2024, MARCH, {d: (60.0 + d if d % 3 else None) for d in range(1, 32)})
        points = by_day(records, MARCH, Metric.MORNING)
        by_key = {r.day: r for r in records}
        assert points
        for point in points:
            assert by_key[point.x].morning_weight == point.y

    def test_other_months_excluded(self):
        records = make_records(2024, MARCH, {1: 70.0}) + make_records(2024, 3, {2: 80.0})
        assert by_day(records, MARCH, Metric.MORNING) == [PlottedPoint(1, 70.0)]

    def test_evening_metric(self):
        records = [
            DayRecord(2024, MARCH, 1, morning_weight=70.0),
            DayRecord(2024, MARCH, 2, evening_weight=71.5),
        ]
        assert by_day(records, MARCH, Metric.EVENING) == [PlottedPoint(2, 71.5)]

    def test_sorted_by_day(self):
        records = make_records(2024, MARCH, {10: 70.0, 2: 71.0, 5: 72.0})
        assert [p.x for p in by_day(records, MARCH, Metric.MORNING)] == [2, 5, 10]

    @pytest.mark.parametrize('records', [None, []])
    def test_empty_input(self, records):
        assert by_day(records, MARCH, Metric.MORNING) == []


class TestWeekWindows:
    """Test fixed 7-day windows within a month."""

    def test_february_leap_year(self):
        assert week_windows(2024, 1) == [(1, 1, 7), (2, 8, 7), (3, 15, 7), (4, 22, 7), (5, 29, 1)]

    def test_february_non_leap_year(self):
        assert week_windows(2023, 1) == [(1, 1, 7), (2, 8, 7), (3, 15, 7), (4, 22, 7)]

    def test_thirty_one_days(self):
        assert week_windows(2024, MARCH)[-1] == (5, 29, 3)

    @pytest.mark.parametrize('year', [2023, 2024])
    def test_windows_cover_month(self, year):
        for month in range(12):
            length = month_length(year, month)
            windows = week_windows(year, month)
            assert sum(size for _, _, size in windows) == length
            assert windows[-1][2] == length - 7 * ((length - 1) // 7)
            assert [index for index, _, _ in windows] == list(range(1, len(windows) + 1))


class TestByWeek:
    """Test week-of-month averages."""

    def test_averages_and_skips_empty_weeks(self):
        records = make_records(2024, MARCH, {1: 70.0, 2: 72.0, 15: 80.0, 31: 90.0})
        assert by_week(records, 2024, MARCH, Metric.MORNING) == [
            PlottedPoint(1, 71.0),
            PlottedPoint(3, 80.0),
            PlottedPoint(5, 90.0),
        ]

    def test_last_day_of_month_is_counted(self):
        records = make_records(2024, 1, {29: 65.0})
        assert by_week(records, 2024, 1, Metric.MORNING) == [PlottedPoint(5, 65.0)]

    def test_null_readings_are_not_zero(self):
        records = [DayRecord(2024, MARCH, day) for day in range(1, 8)]
        records[3].morning_weight = 70.0
        assert by_week(records, 2024, MARCH, Metric.MORNING) == [PlottedPoint(1, 70.0)]

    def test_all_blank_month(self):
        records = [DayRecord(2024, MARCH, day) for day in range(1, 32)]
        assert by_week(records, 2024, MARCH, Metric.MORNING) == []

    def test_other_year_excluded(self):
        records = make_records(2023, MARCH, {1: 60.0}) + make_records(2024, MARCH, {1: 70.0})
        assert by_week(records, 2024, MARCH, Metric.MORNING) == [PlottedPoint(1, 70.0)]

    def test_unrounded_average(self):
        records = make_records(2024, MARCH, {1: 70.1, 2: 70.2, 3: 70.4})
        [point] = by_week(records, 2024, MARCH, Metric.MORNING)
        assert point.y == pytest.approx((70.1 + 70.2 + 70.4) / 3)

    def test_idempotent(self):
        records = make_records(2024, MARCH, {1: 70.0, 9: 71.0, 30: 72.0})
        first = by_week(records, 2024, MARCH, Metric.MORNING)
        assert by_week(records, 2024, MARCH, Metric.MORNING) == first

    @pytest.mark.parametrize('records', [None, []])
    def test_empty_input(self, records):
        assert by_week(records, 2024, MARCH, Metric.MORNING) == []


class TestByMonth:
    """Test month-of-year averages."""

    def test_averages_per_month(self):
        records = (
            make_records(2024, 0, {1: 70.0, 2: 72.0})
            + [DayRecord(2024, 1, day) for day in range(1, 30)]
            + make_records(2024, MARCH, {5: 80.0})
        )
        assert by_month(records, 2024, Metric.MORNING) == [
            PlottedPoint(1, 71.0),
            PlottedPoint(3, 80.0),
        ]

    def test_keys_are_one_based_months(self):
        records = make_records(2024, 11, {24: 75.0})
        assert by_month(records, 2024, Metric.MORNING) == [PlottedPoint(12, 75.0)]

    def test_other_year_excluded(self):
        records = make_records(2023, 0, {1: 60.0}) + make_records(2024, 0, {1: 70.0})
        assert by_month(records, 2024, Metric.MORNING) == [PlottedPoint(1, 70.0)]

    def test_evening_metric(self):
        records = make_records(2024, 4, {1: 68.0, 2: 69.0}, field='evening_weight')
        assert by_month(records, 2024, Metric.EVENING) == [PlottedPoint(5, 68.5)]
        assert by_month(records, 2024, Metric.MORNING) == []

    @pytest.mark.parametrize('records', [None, []])
    def test_empty_input(self, records):
        assert by_month(records, 2024, Metric.MORNING) == []


class TestMetricValues:
    def test_skips_null(self):
        records = make_records(2024, MARCH, {1: 70.0, 2: None, 3: 71.0})
        assert metric_values(records, Metric.MORNING) == [70.0, 71.0]

    def test_month_filter(self):
        records = make_records(2024, MARCH, {1: 70.0}) + make_records(2024, 3, {1: 71.0})
        assert metric_values(records, Metric.MORNING, month=3) == [71.0]


class TestCalcWeightStats:
    def test_first_last_change(self):
        records = make_records(2024, MARCH, {1: 72.0, 2: None, 10: 70.5})
        stats = calc_weight_stats(records)
        morning = stats['morning_weight']
        assert morning['first'] == 72.0
        assert morning['last'] == 70.5
        assert morning['change'] == pytest.approx(-1.5)
        assert morning['mean'] == pytest.approx(71.25)
        assert morning['days'] == 2
        assert 'evening_weight' not in stats

    def test_empty(self):
        assert calc_weight_stats([]) == {}


class TestNonexistentDays:
    """Rows for days past the month's length (e.g. April 31) are ignored."""

    def _april_with_day_31(self):
        return make_records(2024, 3, {30: 70.0, 31: 99.0})

    def test_by_month(self):
        assert by_month(self._april_with_day_31(), 2024, Metric.MORNING) == [PlottedPoint(4, 70.0)]

    def test_by_day(self):
        assert by_day(self._april_with_day_31(), 3, Metric.MORNING) == [PlottedPoint(30, 70.0)]

    def test_metric_values(self):
        assert metric_values(self._april_with_day_31(), Metric.MORNING) == [70.0]

    def test_weight_stats(self):
        stats = calc_weight_stats(self._april_with_day_31())
        assert stats['morning_weight']['days'] == 1
        assert stats['morning_weight']['last'] == 70.0
