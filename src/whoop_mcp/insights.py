"""
Trend labels, percent changes and rule-based coaching insights.

All thresholds live in ``InsightPolicy`` so they can be tuned or overridden in
one place. Weekly and monthly rules are plain functions evaluated in a fixed
order; every rule that matches contributes to the result.
"""
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from whoop_mcp.models import ChangeSet, Findings, RecoveryDistribution, StrainRecoveryBalance, WindowStats
from whoop_mcp.stats import round_half_up

IMPROVING = "improving"
DECLINING = "declining"
STABLE = "stable"
INSUFFICIENT_DATA = "insufficient data"

OVERREACHING = "overreaching"
UNDERTRAINED = "undertrained"
BALANCED = "balanced"


@dataclass(frozen=True)
class InsightPolicy:
    # Trend labels
    trend_tolerance_pct: float = 5.0
    # Week over week
    good_recovery_cutoff: float = 70
    min_sleep_hours: float = 7.0
    great_sleep_hours: float = 8.0
    strong_week_days: int = 5
    weak_week_days: int = 2
    overtraining_strain: float = 14
    overtraining_recovery: float = 50
    # Strain / (recovery / 10)
    overreaching_ratio: float = 2.0
    undertrained_ratio: float = 1.0
    # Monthly
    green_recovery_cutoff: float = 67
    yellow_recovery_cutoff: float = 34
    excellent_month_recovery: float = 70
    challenging_month_recovery: float = 50
    consistent_green_days: int = 20
    many_red_days: int = 5
    high_monthly_strain: float = 400


DEFAULT_POLICY = InsightPolicy()


def percent_change(current: Optional[float], previous: Optional[float]) -> Optional[int]:
    if current is None or previous is None or previous == 0:
        return None
    return round_half_up(((current - previous) / previous) * 100)


def trend_label(first: Optional[float], second: Optional[float], policy: InsightPolicy = DEFAULT_POLICY) -> str:
    """Compare two averages; a change must exceed the tolerance to count."""
    if first is None or second is None or first == 0:
        return INSUFFICIENT_DATA
    diff = ((second - first) / first) * 100
    if diff > policy.trend_tolerance_pct:
        return IMPROVING
    if diff < -policy.trend_tolerance_pct:
        return DECLINING
    return STABLE


def compare_windows(current: WindowStats, previous: WindowStats) -> ChangeSet:
    return ChangeSet(
        recovery_change=percent_change(current.avg_recovery, previous.avg_recovery),
        strain_change=percent_change(current.avg_strain, previous.avg_strain),
        sleep_change=percent_change(current.avg_sleep, previous.avg_sleep),
    )


def strain_recovery_balance(
    avg_strain: Optional[float], avg_recovery: Optional[float], policy: InsightPolicy = DEFAULT_POLICY
) -> StrainRecoveryBalance:
    if avg_strain is None or not avg_recovery:
        return StrainRecoveryBalance()
    ratio = avg_strain / (avg_recovery / 10)
    if ratio > policy.overreaching_ratio:
        status = OVERREACHING
    elif ratio < policy.undertrained_ratio:
        status = UNDERTRAINED
    else:
        status = BALANCED
    return StrainRecoveryBalance(ratio=round_half_up(ratio, 2), status=status)


@dataclass(frozen=True)
class WeekContext:
    this_week: WindowStats
    last_week: WindowStats
    changes: ChangeSet
    balance: StrainRecoveryBalance


WeeklyRule = Callable[[WeekContext, InsightPolicy, Findings], None]


def recovery_direction_rule(ctx: WeekContext, policy: InsightPolicy, out: Findings) -> None:
    current, previous = ctx.this_week.avg_recovery, ctx.last_week.avg_recovery
    change = ctx.changes.recovery_change
    if current is None or previous is None or change is None:
        return
    if current > previous:
        out.insights.append(f"Recovery improved by {change}% this week")
    elif current < previous:
        out.insights.append(f"Recovery declined by {abs(change)}% this week")
        out.recommendations.append("Consider prioritizing sleep and reducing strain")


def sleep_duration_rule(ctx: WeekContext, policy: InsightPolicy, out: Findings) -> None:
    avg_sleep = ctx.this_week.avg_sleep
    if avg_sleep is None:
        return
    if avg_sleep < policy.min_sleep_hours:
        out.insights.append(f"Average sleep this week is {avg_sleep:g} hours (below recommended 7-9 hours)")
        out.recommendations.append("Aim for at least 7 hours of sleep per night")
    elif avg_sleep >= policy.great_sleep_hours:
        out.insights.append(f"Great sleep average of {avg_sleep:g} hours this week")


def recovery_consistency_rule(ctx: WeekContext, policy: InsightPolicy, out: Findings) -> None:
    good_days = ctx.this_week.days_above_threshold
    if good_days >= policy.strong_week_days:
        out.insights.append(f"Strong week with {good_days} days of {policy.good_recovery_cutoff:g}%+ recovery")
        out.recommendations.append("Good time to push harder in workouts")
    elif good_days <= policy.weak_week_days:
        out.insights.append(f"Only {good_days} days with good recovery this week")
        out.recommendations.append("Focus on recovery - lighter workouts, more sleep")


def overtraining_rule(ctx: WeekContext, policy: InsightPolicy, out: Findings) -> None:
    avg_strain, avg_recovery = ctx.this_week.avg_strain, ctx.this_week.avg_recovery
    if avg_strain is None or avg_recovery is None:
        return
    if avg_strain > policy.overtraining_strain and avg_recovery < policy.overtraining_recovery:
        out.insights.append("High strain with low recovery - risk of overtraining")
        out.recommendations.append("Take a rest day or do active recovery")


def balance_rule(ctx: WeekContext, policy: InsightPolicy, out: Findings) -> None:
    status = ctx.balance.status
    if status == OVERREACHING:
        out.insights.append(f"Strain is outpacing recovery (ratio {ctx.balance.ratio:g}) - you may be overreaching")
        out.recommendations.append("Schedule lighter days until recovery catches up with strain")
    elif status == UNDERTRAINED:
        out.insights.append(f"Recovery is well ahead of strain (ratio {ctx.balance.ratio:g}) - you may be undertrained")
        out.recommendations.append("Recovery can support more load - consider increasing training strain")
    elif status == BALANCED:
        out.insights.append(f"Strain and recovery are balanced (ratio {ctx.balance.ratio:g})")


WEEKLY_RULES: Sequence[WeeklyRule] = (
    recovery_direction_rule,
    sleep_duration_rule,
    recovery_consistency_rule,
    overtraining_rule,
    balance_rule,
)


def weekly_findings(
    this_week: WindowStats,
    last_week: WindowStats,
    changes: ChangeSet,
    balance: StrainRecoveryBalance,
    policy: InsightPolicy = DEFAULT_POLICY,
    rules: Sequence[WeeklyRule] = WEEKLY_RULES,
) -> Findings:
    ctx = WeekContext(this_week=this_week, last_week=last_week, changes=changes, balance=balance)
    findings = Findings()
    for rule in rules:
        rule(ctx, policy, findings)
    return findings


@dataclass(frozen=True)
class MonthContext:
    averages: WindowStats
    distribution: RecoveryDistribution
    total_strain: Optional[float]


MonthlyRule = Callable[[MonthContext, InsightPolicy, Findings], None]


def monthly_recovery_rule(ctx: MonthContext, policy: InsightPolicy, out: Findings) -> None:
    avg = ctx.averages.avg_recovery
    if avg is None:
        return
    if avg >= policy.excellent_month_recovery:
        out.insights.append(f"Excellent month! Average recovery of {avg}% indicates great health and fitness")
    elif avg < policy.challenging_month_recovery:
        out.insights.append(f"Challenging month with {avg}% average recovery - consider more rest")


def green_days_rule(ctx: MonthContext, policy: InsightPolicy, out: Findings) -> None:
    if ctx.distribution.green > policy.consistent_green_days:
        out.insights.append(f"Strong consistency with {ctx.distribution.green} green recovery days this month")


def red_days_rule(ctx: MonthContext, policy: InsightPolicy, out: Findings) -> None:
    if ctx.distribution.red > policy.many_red_days:
        out.insights.append(
            f"{ctx.distribution.red} red recovery days - look for patterns (stress, poor sleep, overtraining)"
        )


def sleep_debt_rule(ctx: MonthContext, policy: InsightPolicy, out: Findings) -> None:
    avg_sleep = ctx.averages.avg_sleep
    if avg_sleep is not None and avg_sleep < policy.min_sleep_hours:
        out.insights.append(f"Sleep debt accumulating - averaging only {avg_sleep:g} hours per night")


def training_volume_rule(ctx: MonthContext, policy: InsightPolicy, out: Findings) -> None:
    if ctx.total_strain is not None and ctx.total_strain > policy.high_monthly_strain:
        out.insights.append(f"High training volume this month with {ctx.total_strain:g} total strain")


MONTHLY_RULES: Sequence[MonthlyRule] = (
    monthly_recovery_rule,
    green_days_rule,
    red_days_rule,
    sleep_debt_rule,
    training_volume_rule,
)


def monthly_findings(
    averages: WindowStats,
    distribution: RecoveryDistribution,
    total_strain: Optional[float],
    policy: InsightPolicy = DEFAULT_POLICY,
    rules: Sequence[MonthlyRule] = MONTHLY_RULES,
) -> Findings:
    ctx = MonthContext(averages=averages, distribution=distribution, total_strain=total_strain)
    findings = Findings()
    for rule in rules:
        rule(ctx, policy, findings)
    return findings
