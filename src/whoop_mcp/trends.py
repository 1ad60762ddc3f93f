"""
Week-over-week trends tool for the WHOOP MCP Server
"""
from typing import Annotated, Any, Dict, Optional, Sequence

from mcp.types import CallToolResult
from pydantic import Field

from whoop_mcp import stats
from whoop_mcp.fetching import FetchPolicy, collect_daily_records, daterange, home_record_fetcher, resolve_range
from whoop_mcp.insights import DEFAULT_POLICY, InsightPolicy, compare_windows, strain_recovery_balance, weekly_findings
from whoop_mcp.models import DailyRecord
from whoop_mcp.reports import render_trends
from whoop_mcp.responses import tool_error, tool_result

WINDOW_DAYS = 7

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


def trends_output(records: Sequence[DailyRecord], policy: InsightPolicy = DEFAULT_POLICY) -> Dict[str, Any]:
    """Compare the last seven records against the seven before them."""
    last_week_records = records[-2 * WINDOW_DAYS:-WINDOW_DAYS]
    this_week_records = records[-WINDOW_DAYS:]
    this_week = stats.aggregate(this_week_records, policy.good_recovery_cutoff)
    last_week = stats.aggregate(last_week_records, policy.good_recovery_cutoff)
    changes = compare_windows(this_week, last_week)
    balance = strain_recovery_balance(this_week.avg_strain, this_week.avg_recovery, policy)
    findings = weekly_findings(this_week, last_week, changes, balance, policy)
    return {
        "weekOverWeek": {
            "thisWeek": this_week.to_dict(),
            "lastWeek": last_week.to_dict(),
            "changes": changes.to_dict(),
        },
        "recoveryThreshold": policy.good_recovery_cutoff,
        "strainRecoveryBalance": balance.to_dict(),
        "insights": findings.insights,
        "recommendations": findings.recommendations,
    }


def register_tools(app):
    """Register the trends tool with the MCP server app"""

    @app.tool(title="Get Whoop Trends & Analytics")
    async def whoop_get_trends(
        end_date: Annotated[
            Optional[str], Field(description="End date in YYYY-MM-DD format (defaults to yesterday)")
        ] = None,
    ) -> CallToolResult:
        """Get trend analysis comparing recent performance to historical baselines. Compares last 7 days
        vs previous 7 days and checks the strain/recovery balance. Great for understanding if you're
        improving or need recovery."""
        try:
            start, end = resolve_range(2 * WINDOW_DAYS, end_date)
            records = await collect_daily_records(
                home_record_fetcher(whoop_client), daterange(start, end), fetch_policy
            )
            output = trends_output(records, insight_policy)
            return tool_result(render_trends(output), output)
        except Exception as e:
            return tool_error("trends data", e)

    return app
