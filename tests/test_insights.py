"""
Tests for trend labels, percent changes and the insight rules.
"""
import pytest

from whoop_mcp import insights
from whoop_mcp.insights import DEFAULT_POLICY, InsightPolicy
from whoop_mcp.models import ChangeSet, Findings, RecoveryDistribution, StrainRecoveryBalance, WindowStats


def week(recovery=None, strain=None, sleep=None, good_days=3):
    return WindowStats(avg_recovery=recovery, avg_strain=strain, avg_sleep=sleep, days_above_threshold=good_days)


class TestPercentChange:
    def test_rounds_half_up(self):
        assert insights.percent_change(110, 100) == 10
        assert insights.percent_change(71, 61) == 16
        assert insights.percent_change(10.5, 10) == 5
        assert insights.percent_change(90, 100) == -10

    @pytest.mark.parametrize("current, previous", [(None, 50), (50, None), (50, 0)])
    def test_missing_or_zero_baseline(self, current, previous):
        assert insights.percent_change(current, previous) is None

    def test_compare_windows(self):
        changes = insights.compare_windows(week(71, 12.0, 7.5), week(61, 10.0, None))
        assert changes == ChangeSet(recovery_change=16, strain_change=20, sleep_change=None)


class TestTrendLabel:
    @pytest.mark.parametrize(
        "first, second, expected",
        [
            (60, 70, insights.IMPROVING),
            (70, 60, insights.DECLINING),
            (60, 62, insights.STABLE),
            (100, 105, insights.STABLE),  # exactly 5% is not enough
            (100, 95, insights.STABLE),
            (None, 60, insights.INSUFFICIENT_DATA),
            (60, None, insights.INSUFFICIENT_DATA),
            (0, 60, insights.INSUFFICIENT_DATA),
        ],
    )
    def test_labels(self, first, second, expected):
        assert insights.trend_label(first, second) == expected

    def test_tolerance_comes_from_policy(self):
        assert insights.trend_label(60, 62, InsightPolicy(trend_tolerance_pct=1)) == insights.IMPROVING


class TestStrainRecoveryBalance:
    @pytest.mark.parametrize(
        "strain, recovery, ratio, status",
        [
            (15.0, 50, 3.0, insights.OVERREACHING),
            (5.0, 80, 0.63, insights.UNDERTRAINED),
            (12.0, 70, 1.71, insights.BALANCED),
            (14.0, 70, 2.0, insights.BALANCED),
        ],
    )
    def test_status(self, strain, recovery, ratio, status):
        balance = insights.strain_recovery_balance(strain, recovery)
        assert balance.status == status
        assert balance.ratio == pytest.approx(ratio)

    @pytest.mark.parametrize("strain, recovery", [(None, 70), (10.0, None), (10.0, 0)])
    def test_missing_inputs(self, strain, recovery):
        assert insights.strain_recovery_balance(strain, recovery) == StrainRecoveryBalance()


class TestWeeklyFindings:
    def findings(self, this_week, last_week, policy=DEFAULT_POLICY):
        changes = insights.compare_windows(this_week, last_week)
        balance = insights.strain_recovery_balance(this_week.avg_strain, this_week.avg_recovery, policy)
        return insights.weekly_findings(this_week, last_week, changes, balance, policy)

    def test_improving_week_in_rule_order(self):
        result = self.findings(week(71, 12.0, 8.1, good_days=5), week(61, 11.0, 7.6))

        assert result.insights == [
            "Recovery improved by 16% this week",
            "Great sleep average of 8.1 hours this week",
            "Strong week with 5 days of 70%+ recovery",
            "Strain and recovery are balanced (ratio 1.69)",
        ]
        assert result.recommendations == ["Good time to push harder in workouts"]

    def test_rough_week(self):
        result = self.findings(week(40, 15.0, 6.2, good_days=1), week(60, 12.0, 7.0))

        assert result.insights == [
            "Recovery declined by 33% this week",
            "Average sleep this week is 6.2 hours (below recommended 7-9 hours)",
            "Only 1 days with good recovery this week",
            "High strain with low recovery - risk of overtraining",
            "Strain is outpacing recovery (ratio 3.75) - you may be overreaching",
        ]
        assert result.recommendations == [
            "Consider prioritizing sleep and reducing strain",
            "Aim for at least 7 hours of sleep per night",
            "Focus on recovery - lighter workouts, more sleep",
            "Take a rest day or do active recovery",
            "Schedule lighter days until recovery catches up with strain",
        ]

    def test_quiet_week_produces_nothing(self):
        result = self.findings(week(65, None, 7.5, good_days=3), week(65, None, 7.5))
        assert result == Findings()

    def test_no_last_week_skips_direction(self):
        result = self.findings(week(65, None, None, good_days=3), week(None, None, None))
        assert result.insights == []

    def test_undertrained(self):
        result = self.findings(week(80, 4.0, 7.5, good_days=3), week(80, 4.0, 7.5))
        assert result.insights == ["Recovery is well ahead of strain (ratio 0.5) - you may be undertrained"]
        assert result.recommendations == ["Recovery can support more load - consider increasing training strain"]

    def test_custom_rules(self):
        def always(ctx, policy, out):
            out.insights.append(f"avg {ctx.this_week.avg_recovery}")

        changes = ChangeSet()
        result = insights.weekly_findings(week(50), week(50), changes, StrainRecoveryBalance(), rules=[always])
        assert result.insights == ["avg 50"]


class TestMonthlyFindings:
    def test_great_month(self):
        averages = WindowStats(avg_recovery=74, avg_strain=14.2, avg_sleep=7.8)
        distribution = RecoveryDistribution(green=22, yellow=6, red=2)

        result = insights.monthly_findings(averages, distribution, total_strain=426.1)

        assert result.insights == [
            "Excellent month! Average recovery of 74% indicates great health and fitness",
            "Strong consistency with 22 green recovery days this month",
            "High training volume this month with 426.1 total strain",
        ]
        assert result.recommendations == []

    def test_hard_month(self):
        averages = WindowStats(avg_recovery=45, avg_strain=10.0, avg_sleep=6.4)
        distribution = RecoveryDistribution(green=4, yellow=18, red=8)

        result = insights.monthly_findings(averages, distribution, total_strain=300.0)

        assert result.insights == [
            "Challenging month with 45% average recovery - consider more rest",
            "8 red recovery days - look for patterns (stress, poor sleep, overtraining)",
            "Sleep debt accumulating - averaging only 6.4 hours per night",
        ]

    def test_thresholds_are_strict(self):
        averages = WindowStats(avg_recovery=60, avg_sleep=7.0)
        distribution = RecoveryDistribution(green=20, red=5)
        assert insights.monthly_findings(averages, distribution, total_strain=400.0).insights == []

    def test_no_data(self):
        result = insights.monthly_findings(WindowStats(), RecoveryDistribution(), None)
        assert result == Findings()
