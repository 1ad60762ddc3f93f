"""
Multi-day history tool for the WHOOP MCP Server
"""
from typing import Annotated, Any, Dict, Optional, Sequence

from mcp.types import CallToolResult
from pydantic import Field

from whoop_mcp import stats
from whoop_mcp.fetching import FetchPolicy, collect_daily_records, daterange, home_record_fetcher, resolve_range
from whoop_mcp.insights import DEFAULT_POLICY, InsightPolicy, trend_label
from whoop_mcp.models import DailyRecord
from whoop_mcp.reports import render_history
from whoop_mcp.responses import tool_error, tool_result

# Set by the main module
whoop_client = None
fetch_policy = FetchPolicy(delay_s=0.1)
insight_policy = DEFAULT_POLICY


def configure(client, policy: Optional[FetchPolicy] = None, insights: Optional[InsightPolicy] = None):
    """Configure the module with the WHOOP client and pacing policy"""
    global whoop_client, fetch_policy, insight_policy
    whoop_client = client
    if policy is not None:
        fetch_policy = policy
    if insights is not None:
        insight_policy = insights


def history_output(records: Sequence[DailyRecord], days: int, policy: InsightPolicy = DEFAULT_POLICY) -> Dict[str, Any]:
    first_half, second_half = stats.split_halves(records)
    averages = stats.aggregate(records, policy.good_recovery_cutoff)

    def trend(getter):
        return trend_label(stats.mean(first_half, getter), stats.mean(second_half, getter), policy)

    return {
        "summary": {
            "totalDays": days,
            "daysWithData": len(stats.values(records, stats.recovery)),
            "dateRange": {
                "start": records[0].date if records else None,
                "end": records[-1].date if records else None,
            },
        },
        "averages": {
            "recoveryScore": averages.avg_recovery,
            "strain": averages.avg_strain,
            "sleepHours": averages.avg_sleep,
            "hrv": averages.avg_hrv,
            "restingHeartRate": averages.avg_rhr,
        },
        "dailyData": [record.to_dict() for record in records],
        "weekdayPatterns": stats.weekday_pattern(records).to_dict(),
        "trends": {
            "recoveryTrend": trend(stats.recovery),
            "strainTrend": trend(stats.strain),
            "sleepTrend": trend(stats.sleep),
        },
    }


def register_tools(app):
    """Register the history tool with the MCP server app"""

    @app.tool(title="Get Whoop Historical Data")
    async def whoop_get_history(
        days: Annotated[
            int, Field(ge=1, le=90, description="Number of days of history to fetch (1-90, default 30)")
        ] = 30,
        end_date: Annotated[
            Optional[str],
            Field(description="End date in YYYY-MM-DD format (defaults to yesterday to ensure complete data)"),
        ] = None,
        include_recovery_details: Annotated[
            bool,
            Field(description="Also fetch the recovery deep dive per day for HRV and resting heart rate (slower)"),
        ] = False,
    ) -> CallToolResult:
        """Get historical Whoop data for multiple days including recovery scores, strain, sleep hours,
        and HRV trends. Useful for pattern analysis and tracking progress over time."""
        try:
            start, end = resolve_range(days, end_date)
            records = await collect_daily_records(
                home_record_fetcher(whoop_client, include_vitals=include_recovery_details),
                daterange(start, end),
                fetch_policy,
            )
            output = history_output(records, days, insight_policy)
            return tool_result(render_history(output), output)
        except Exception as e:
            return tool_error("historical data", e)

    return app
