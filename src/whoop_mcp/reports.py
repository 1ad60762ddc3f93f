"""
Text reports for the WHOOP tools.

Each ``render_*`` function takes the structured output of one tool and returns
the text block shown to the user. Missing values print as "N/A".
"""
from typing import Any, Dict, List, Optional

from whoop_mcp.stats import round_half_up

NA = "N/A"

CONTRIBUTOR_ICONS = {
    "HIGHER_POSITIVE": "📈",
    "LOWER_POSITIVE": "📉",
    "HIGHER_NEGATIVE": "⬆️",
    "LOWER_NEGATIVE": "⬇️",
    "EQUAL": "➡️",
}


def fmt(value: Any, suffix: str = "") -> str:
    if value is None:
        return NA
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}{suffix}"


def fmt_fixed(value: Optional[float], digits: int = 1, suffix: str = "") -> str:
    if value is None:
        return NA
    return f"{value:.{digits}f}{suffix}"


def fmt_change(change: Optional[int]) -> str:
    if change is None:
        return NA
    sign = "+" if change >= 0 else ""
    return f"{sign}{change}%"


def fmt_fraction(fraction: Optional[float]) -> str:
    """Gauge fill fraction (0..1) as a whole percentage."""
    if fraction is None:
        return NA
    return f"{round_half_up(fraction * 100)}%"


def _title(icon: str, label: str) -> List[str]:
    return [f"{icon} {label}", "═" * (len(label) + 3), ""]


def _section(icon: str, label: str) -> List[str]:
    return [f"{icon} {label}", "─" * (len(label) + 3)]


def _bullets(lines: List[str], icon: str, label: str, entries: List[str]) -> None:
    if not entries:
        return
    lines.extend(_section(icon, label))
    lines.extend(f"  • {entry}" for entry in entries)
    lines.append("")


def _contributor_lines(contributors: List[Dict[str, Any]], unknown_icon: str = "➡️") -> List[str]:
    lines = []
    for contributor in contributors:
        icon = CONTRIBUTOR_ICONS.get(contributor.get("status") or "", unknown_icon)
        lines.extend(
            [
                f"  {icon} {fmt(contributor.get('title'))}",
                f"     Current: {fmt(contributor.get('value'))}",
                f"     Baseline (30-day): {fmt(contributor.get('baseline'))}",
                "",
            ]
        )
    return lines


def _coach_lines(coach_insight: Optional[str]) -> List[str]:
    if not coach_insight:
        return []
    return [*_section("💡", "COACH INSIGHT"), coach_insight, ""]


def _statistic_icon(state: Optional[str]) -> str:
    state = state or ""
    if "POSITIVE" in state:
        return "✅"
    if "NEGATIVE" in state:
        return "⚠️"
    return "➡️"


def render_overview(output: Dict[str, Any]) -> str:
    cycle = output["cycleInfo"]
    live = output["liveMetrics"]
    lines = _title("🏠", "WHOOP OVERVIEW")
    lines.extend(
        [
            f"📅 Date: {fmt(cycle['cycleDay'])} ({fmt(cycle['cycleDateDisplay'])})",
            f"🔄 Cycle ID: {fmt(cycle['cycleId'])}",
            f"💤 Sleep State: {fmt(cycle['sleepState'])}",
            "",
            *_section("📊", "LIVE METRICS"),
            f"  Recovery: {fmt(live['recoveryScore'], '%')}",
            f"  Strain: {fmt_fixed(live['dayStrain'])}",
            f"  Sleep: {fmt_fixed(live['sleepHours'], suffix=' hours')}",
            f"  Calories: {fmt(live['calories'])}",
            "",
        ]
    )

    if output["gauges"]:
        lines.extend(_section("🎯", "SCORES"))
        for gauge in output["gauges"]:
            lines.append(
                f"  {fmt(gauge['title'])}: {fmt(gauge['scoreDisplay'])}{gauge['scoreSuffix'] or ''}"
                f" ({fmt_fraction(gauge['fillPercentage'])})"
            )
        lines.append("")

    if output["activities"]:
        lines.extend(_section("📋", "TODAY'S ACTIVITIES"))
        for index, activity in enumerate(output["activities"], start=1):
            lines.extend(
                [
                    f"  {index}. {fmt(activity['title'])} ({fmt(activity['type'])})",
                    f"     Score: {fmt(activity['scoreDisplay'])}",
                    f"     Time: {fmt(activity['startTime'])} - {fmt(activity['endTime'])}",
                    "",
                ]
            )

    if output["statistics"]:
        lines.extend(_section("📈", "KEY STATISTICS"))
        for stat in output["statistics"]:
            lines.extend(
                [
                    f"  {_statistic_icon(stat['state'])} {fmt(stat['title'])}",
                    f"     Current: {fmt(stat['currentValue'])}",
                    f"     30-day avg: {fmt(stat['thirtyDayAverage'])}",
                    "",
                ]
            )

    return "\n".join(lines)


def _score_percent(score: Optional[str]) -> str:
    if score is None or score == NA:
        return NA
    return f"{score}%"


def _deep_dive_header(icon: str, label: str, title: Optional[str], score_label: str) -> List[str]:
    return [*_title(icon, label), f"📅 {fmt(title)}", "", *_section("🎯", score_label)]


def render_recovery(output: Dict[str, Any]) -> str:
    score = output["recoveryScore"]
    style = (score["style"] or "UNKNOWN").replace("_", " ")
    lines = _deep_dive_header("💪", "RECOVERY DEEP DIVE", output["title"], "RECOVERY SCORE")
    lines.extend([f"  {_score_percent(score['score'])} ({style})", "", *_section("📊", "CONTRIBUTORS")])
    lines.extend(_contributor_lines(output["contributors"]))
    lines.extend(_coach_lines(output["coachInsight"]))
    return "\n".join(lines)


def render_sleep(output: Dict[str, Any]) -> str:
    score = output["sleepScore"]
    lines = _deep_dive_header("😴", "SLEEP DEEP DIVE", output["title"], "SLEEP PERFORMANCE")
    lines.extend(
        [
            f"  {_score_percent(score['score'])} ({fmt_fraction(score['percentage'])} of need)",
            "",
            *_section("📊", "CONTRIBUTORS"),
        ]
    )
    lines.extend(_contributor_lines(output["contributors"]))
    lines.extend(_coach_lines(output["coachInsight"]))
    return "\n".join(lines)


def render_strain(output: Dict[str, Any]) -> str:
    score = output["strainScore"]
    lines = _deep_dive_header("🔥", "STRAIN DEEP DIVE", output["title"], "STRAIN SCORE")
    lines.append(f"  {fmt(score['score'])} ({fmt_fraction(score['percentage'])})")
    if score["target"]:
        lines.append(f"  Target: {fmt_fraction(score['target'])}")
    if score["lowerOptimal"] and score["higherOptimal"]:
        lower = round_half_up(score["lowerOptimal"] * 100)
        higher = round_half_up(score["higherOptimal"] * 100)
        lines.append(f"  Optimal Range: {lower}-{higher}%")

    lines.extend(["", *_section("📊", "CONTRIBUTORS")])
    lines.extend(_contributor_lines(output["contributors"], unknown_icon="◯"))

    if output["activities"]:
        lines.extend(_section("🏃", "TODAY'S ACTIVITIES"))
        for activity in output["activities"]:
            lines.extend(
                [
                    f"  {fmt(activity['title'])}",
                    f"     Strain: {fmt(activity['strainScore'])}",
                    f"     Time: {fmt(activity['startTime'])} - {fmt(activity['endTime'])}",
                    f"     Type: {fmt(activity['type'])}",
                    "",
                ]
            )

    lines.extend(_coach_lines(output["coachInsight"]))
    return "\n".join(lines)


def render_history(output: Dict[str, Any]) -> str:
    summary = output["summary"]
    averages = output["averages"]
    patterns = output["weekdayPatterns"]
    trends = output["trends"]
    avg_by_day = patterns["avgByDay"]
    best, worst = patterns["bestRecoveryDay"], patterns["worstRecoveryDay"]

    lines = _title("📊", "WHOOP HISTORICAL DATA")
    lines.extend(
        [
            f"📅 Date Range: {summary['dateRange']['start']} to {summary['dateRange']['end']}",
            f"📈 Days with data: {summary['daysWithData']}/{summary['totalDays']}",
            "",
            *_section("📉", "AVERAGES"),
            f"  Recovery: {fmt(averages['recoveryScore'], '%')}",
            f"  Strain: {fmt(averages['strain'])}",
            f"  Sleep: {fmt(averages['sleepHours'], ' hours')}",
            f"  HRV: {fmt(averages['hrv'], ' ms')}",
            f"  Resting HR: {fmt(averages['restingHeartRate'], ' bpm')}",
            "",
            *_section("📅", "WEEKDAY PATTERNS"),
            f"  Best recovery day: {fmt(best)} ({fmt(avg_by_day.get(best) if best else None, '%')})",
            f"  Worst recovery day: {fmt(worst)} ({fmt(avg_by_day.get(worst) if worst else None, '%')})",
            "",
        ]
    )

    if avg_by_day:
        lines.append("  By day:")
        lines.extend(f"    {day}: {avg}%" for day, avg in avg_by_day.items())
        lines.append("")

    lines.extend(
        [
            *_section("📈", "TRENDS (comparing first half vs second half)"),
            f"  Recovery: {trends['recoveryTrend']}",
            f"  Strain: {trends['strainTrend']}",
            f"  Sleep: {trends['sleepTrend']}",
            "",
        ]
    )
    return "\n".join(lines)


def _week_lines(label: str, week: Dict[str, Any], cutoff: Any) -> List[str]:
    return [
        label,
        f"  Recovery: {fmt(week['avgRecovery'], '%')} avg ({week['daysAboveThreshold']} days above {fmt(cutoff)}%)",
        f"  Strain: {fmt(week['avgStrain'])} avg",
        f"  Sleep: {fmt(week['avgSleep'])} hours avg",
        "",
    ]


def render_trends(output: Dict[str, Any]) -> str:
    wow = output["weekOverWeek"]
    changes = wow["changes"]
    balance = output["strainRecoveryBalance"]
    cutoff = output["recoveryThreshold"]

    lines = _title("📈", "WHOOP TRENDS & ANALYTICS")
    lines.extend(_section("📊", "WEEK OVER WEEK COMPARISON"))
    lines.append("")
    lines.extend(_week_lines("THIS WEEK (last 7 days):", wow["thisWeek"], cutoff))
    lines.extend(_week_lines("LAST WEEK (previous 7 days):", wow["lastWeek"], cutoff))
    lines.extend(
        [
            "CHANGES:",
            f"  Recovery: {fmt_change(changes['recoveryChange'])}",
            f"  Strain: {fmt_change(changes['strainChange'])}",
            f"  Sleep: {fmt_change(changes['sleepChange'])}",
            "",
            *_section("⚖️", "STRAIN / RECOVERY BALANCE"),
            f"  Status: {fmt(balance['status'])} (ratio {fmt(balance['ratio'])})",
            "",
        ]
    )
    _bullets(lines, "💡", "INSIGHTS", output["insights"])
    _bullets(lines, "🎯", "RECOMMENDATIONS", output["recommendations"])
    return "\n".join(lines)


def _highlight(day: Optional[Dict[str, Any]], key: str, suffix: str = "") -> str:
    if not day:
        return NA
    return f"{day['date']} ({fmt(day[key], suffix)})"


def render_monthly(output: Dict[str, Any]) -> str:
    period = output["period"]
    totals = output["totals"]
    averages = output["averages"]
    highlights = output["highlights"]
    distribution = output["distribution"]
    total_calories = totals["totalCalories"]

    lines = _title("📅", "WHOOP MONTHLY SUMMARY")
    lines.extend(
        [
            f"📆 Period: {period['start']} to {period['end']}",
            f"📊 Days with data: {period['daysWithData']}/{period['totalDays']}",
            "",
            *_section("📈", "TOTALS"),
            f"  Total Strain: {fmt(totals['totalStrain'])}",
            f"  Total Calories: {NA if total_calories is None else f'{total_calories:,}'}",
            f"  Total Sleep: {fmt(totals['totalSleepHours'], ' hours')}",
            "",
            *_section("📊", "AVERAGES"),
            f"  Recovery: {fmt(averages['recovery'], '%')}",
            f"  Strain: {fmt(averages['strain'], '/day')}",
            f"  Sleep: {fmt(averages['sleepHours'], ' hours/night')}",
            f"  HRV: {fmt(averages['hrv'], ' ms')}",
            f"  Resting HR: {fmt(averages['rhr'], ' bpm')}",
            "",
            *_section("🏆", "HIGHLIGHTS"),
            f"  Best Recovery: {_highlight(highlights['bestRecoveryDay'], 'score', '%')}",
            f"  Worst Recovery: {_highlight(highlights['worstRecoveryDay'], 'score', '%')}",
            f"  Highest Strain: {_highlight(highlights['highestStrainDay'], 'strain')}",
            f"  Best Sleep: {_highlight(highlights['bestSleepDay'], 'hours', ' hrs')}",
            "",
            *_section("🚦", "RECOVERY DISTRIBUTION"),
            f"  🟢 Green (67-100%): {distribution['greenRecoveryDays']} days",
            f"  🟡 Yellow (34-66%): {distribution['yellowRecoveryDays']} days",
            f"  🔴 Red (0-33%): {distribution['redRecoveryDays']} days",
            "",
        ]
    )
    _bullets(lines, "💡", "INSIGHTS", output["insights"])
    return "\n".join(lines)
