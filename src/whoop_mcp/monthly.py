"""
30-day summary tool for the WHOOP MCP Server
"""
from typing import Annotated, Any, Dict, Optional, Sequence

from mcp.types import CallToolResult
from pydantic import Field

from whoop_mcp import stats
from whoop_mcp.fetching import FetchPolicy, collect_daily_records, daterange, home_record_fetcher, resolve_range
from whoop_mcp.insights import DEFAULT_POLICY, InsightPolicy, monthly_findings
from whoop_mcp.models import DailyRecord, DayValue
from whoop_mcp.reports import render_monthly
from whoop_mcp.responses import tool_error, tool_result

MONTH_DAYS = 30

# Set by the main module
whoop_client = None
fetch_policy = FetchPolicy(delay_s=0.15)
insight_policy = DEFAULT_POLICY


def configure(client, policy: Optional[FetchPolicy] = None, insights: Optional[InsightPolicy] = None):
    """Configure the module with the WHOOP client and pacing policy"""
    global whoop_client, fetch_policy, insight_policy
    whoop_client = client
    if policy is not None:
        fetch_policy = policy
    if insights is not None:
        insight_policy = insights


def _day(day: Optional[DayValue], key: str, digits: Optional[int] = None) -> Optional[Dict[str, Any]]:
    if day is None:
        return None
    value = day.value if digits is None else stats.round_half_up(day.value, digits)
    return {"date": day.date, key: value}


def monthly_output(records: Sequence[DailyRecord], policy: InsightPolicy = DEFAULT_POLICY) -> Dict[str, Any]:
    averages = stats.aggregate(records, policy.good_recovery_cutoff)
    distribution = stats.recovery_distribution(
        records, policy.green_recovery_cutoff, policy.yellow_recovery_cutoff
    )
    total_strain = stats.total(records, stats.strain, 1)
    findings = monthly_findings(averages, distribution, total_strain, policy)
    return {
        "period": {
            "start": records[0].date if records else None,
            "end": records[-1].date if records else None,
            "totalDays": len(records),
            "daysWithData": sum(1 for record in records if record.has_data()),
        },
        "totals": {
            "totalStrain": total_strain,
            "totalCalories": stats.total(records, stats.calories),
            "totalSleepHours": stats.total(records, stats.sleep, 1),
        },
        "averages": {
            "recovery": averages.avg_recovery,
            "strain": averages.avg_strain,
            "sleepHours": averages.avg_sleep,
            "hrv": averages.avg_hrv,
            "rhr": averages.avg_rhr,
        },
        "highlights": {
            "bestRecoveryDay": _day(stats.best_day(records, stats.recovery), "score"),
            "worstRecoveryDay": _day(stats.worst_day(records, stats.recovery), "score"),
            "highestStrainDay": _day(stats.best_day(records, stats.strain), "strain"),
            "bestSleepDay": _day(stats.best_day(records, stats.sleep), "hours", 1),
        },
        "distribution": distribution.to_dict(),
        "insights": findings.insights,
    }


def register_tools(app):
    """Register the monthly summary tool with the MCP server app"""

    @app.tool(title="Get Whoop Monthly Summary")
    async def whoop_get_monthly_summary(
        end_date: Annotated[
            Optional[str], Field(description="End date in YYYY-MM-DD format (defaults to yesterday)")
        ] = None,
    ) -> CallToolResult:
        """Get a comprehensive 30-day summary including total metrics, averages (with HRV and resting
        heart rate), best/worst days and the recovery zone distribution. Great for tracking long-term
        progress."""
        try:
            start, end = resolve_range(MONTH_DAYS, end_date)
            records = await collect_daily_records(
                home_record_fetcher(whoop_client, include_vitals=True), daterange(start, end), fetch_policy
            )
            output = monthly_output(records, insight_policy)
            return tool_result(render_monthly(output), output)
        except Exception as e:
            return tool_error("monthly summary", e)

    return app
