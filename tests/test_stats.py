"""
Tests for window statistics.
"""
import pytest

from whoop_mcp import stats
from whoop_mcp.models import DailyRecord, DayValue


def records_from(recoveries, start_day=1):
    return [
        DailyRecord(date=f"2024-01-{start_day + i:02d}", recovery_score=score)
        for i, score in enumerate(recoveries)
    ]


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, digits, expected",
        [
            (2.5, 0, 3),
            (3.5, 0, 4),
            (-2.5, 0, -2),
            (61.0, 0, 61),
            (7.25, 1, 7.3),
            (12.04, 1, 12.0),
            (0.125, 2, 0.13),
        ],
    )
    def test_ties_go_up(self, value, digits, expected):
        assert stats.round_half_up(value, digits) == pytest.approx(expected)

    def test_whole_rounding_returns_int(self):
        assert isinstance(stats.round_half_up(16.39), int)


class TestAggregate:
    def test_means_ignore_missing_values(self):
        records = [
            DailyRecord("2024-01-01", recovery_score=60, strain=10.0, sleep_hours=7.0),
            DailyRecord("2024-01-02", recovery_score=None, strain=None, sleep_hours=None),
            DailyRecord("2024-01-03", recovery_score=81, strain=12.5, sleep_hours=8.0),
        ]
        window = stats.aggregate(records)

        assert window.avg_recovery == 71  # 70.5 rounds up
        assert window.avg_strain == pytest.approx(11.3)  # 11.25
        assert window.avg_sleep == pytest.approx(7.5)
        assert window.avg_hrv is None
        assert window.avg_rhr is None

    def test_empty_window_is_all_none(self):
        window = stats.aggregate([])
        assert window.avg_recovery is None
        assert window.avg_strain is None
        assert window.avg_sleep is None
        assert window.days_above_threshold == 0

    def test_all_missing_window_is_all_none(self):
        window = stats.aggregate([DailyRecord.empty("2024-01-01"), DailyRecord.empty("2024-01-02")])
        assert window.avg_recovery is None
        assert window.avg_sleep is None

    def test_days_above_threshold_is_inclusive_and_skips_missing(self):
        records = records_from([70, 69, None, 95, 71])
        assert stats.aggregate(records, threshold=70).days_above_threshold == 3
        assert stats.count_at_least(records, 96) == 0

    def test_vitals_average_to_integers(self):
        records = [
            DailyRecord("2024-01-01", hrv=60.0, resting_heart_rate=52.0),
            DailyRecord("2024-01-02", hrv=65.0, resting_heart_rate=None),
        ]
        window = stats.aggregate(records)
        assert window.avg_hrv == 63  # 62.5
        assert window.avg_rhr == 52


class TestTotals:
    def test_total_rounds_and_skips_missing(self):
        records = [
            DailyRecord("2024-01-01", strain=10.04, calories=2000.4),
            DailyRecord("2024-01-02", strain=None, calories=None),
            DailyRecord("2024-01-03", strain=5.02, calories=1999.8),
        ]
        assert stats.total(records, stats.strain, 1) == pytest.approx(15.1)
        assert stats.total(records, stats.calories) == 4000

    def test_total_of_nothing_is_none(self):
        assert stats.total([DailyRecord.empty("2024-01-01")], stats.calories) is None


class TestBestWorstDay:
    def test_best_and_worst_recovery(self):
        records = [
            DailyRecord("2024-01-01", recovery_score=80),
            DailyRecord("2024-01-02", recovery_score=45),
        ]
        assert stats.best_day(records, stats.recovery) == DayValue("2024-01-01", 80)
        assert stats.worst_day(records, stats.recovery) == DayValue("2024-01-02", 45)

    def test_ties_keep_the_earliest_day(self):
        records = records_from([50, 90, 90, 20, 20])
        assert stats.best_day(records, stats.recovery).date == "2024-01-02"
        assert stats.worst_day(records, stats.recovery).date == "2024-01-04"

    def test_missing_values_never_win(self):
        records = records_from([None, 40, None])
        assert stats.best_day(records, stats.recovery) == DayValue("2024-01-02", 40)
        assert stats.best_day(records_from([None, None]), stats.recovery) is None


class TestDistribution:
    def test_tiers(self):
        records = records_from([100, 67, 66, 34, 33, 0, None])
        distribution = stats.recovery_distribution(records)
        assert (distribution.green, distribution.yellow, distribution.red) == (2, 2, 2)


class TestWeekdayPattern:
    def test_weekday_names(self):
        assert stats.weekday_name("2024-01-07") == "Sunday"
        assert stats.weekday_name("2024-01-08") == "Monday"
        assert stats.weekday_name("2024-01-13") == "Saturday"

    def test_averages_by_weekday(self):
        # 2024-01-01 is a Monday
        records = records_from([60, 70, None, 80, 40, 50, 90, 61])
        pattern = stats.weekday_pattern(records)

        assert pattern.avg_by_day == {
            "Sunday": 90,
            "Monday": 61,  # 60 and 61 -> 60.5
            "Tuesday": 70,
            "Thursday": 80,
            "Friday": 40,
            "Saturday": 50,
        }
        assert list(pattern.avg_by_day) == ["Sunday", "Monday", "Tuesday", "Thursday", "Friday", "Saturday"]
        assert pattern.best_day == "Sunday"
        assert pattern.worst_day == "Friday"

    def test_weekday_ties_go_to_earlier_weekday(self):
        # Saturday 2024-01-06 and Sunday 2024-01-07 both 75
        records = [
            DailyRecord("2024-01-06", recovery_score=75),
            DailyRecord("2024-01-07", recovery_score=75),
        ]
        pattern = stats.weekday_pattern(records)
        assert pattern.best_day == "Sunday"
        assert pattern.worst_day == "Sunday"

    def test_no_data(self):
        pattern = stats.weekday_pattern(records_from([None, None]))
        assert pattern.best_day is None
        assert pattern.worst_day is None
        assert pattern.avg_by_day == {}


def test_split_halves_gives_odd_day_to_second_half():
    first, second = stats.split_halves(records_from([1, 2, 3, 4, 5]))
    assert [r.recovery_score for r in first] == [1, 2]
    assert [r.recovery_score for r in second] == [3, 4, 5]
