"""
Home screen overview tool for the WHOOP MCP Server
"""
import asyncio
from typing import Annotated, Any, Dict, Optional

from mcp.types import CallToolResult
from pydantic import Field

from whoop_mcp import extract
from whoop_mcp.fetching import normalize_date
from whoop_mcp.reports import render_overview
from whoop_mcp.responses import tool_error, tool_result
from whoop_mcp.widgets import CycleMetadata, HomeData, JournalMetadata, LiveMetadata

# The whoop_client will be set by the main module
whoop_client = None


def configure(client):
    """Configure the module with the WHOOP client instance"""
    global whoop_client
    whoop_client = client


def overview_output(home: HomeData) -> Dict[str, Any]:
    cycle = home.metadata.cycle_metadata or CycleMetadata()
    live = home.metadata.whoop_live_metadata or LiveMetadata()
    journal = home.metadata.journal_metadata or JournalMetadata()
    return {
        "cycleInfo": {
            "cycleId": cycle.cycle_id,
            "cycleDay": cycle.cycle_day,
            "cycleDateDisplay": cycle.cycle_date_display,
            "sleepState": cycle.sleep_state,
        },
        "liveMetrics": {
            "recoveryScore": live.recovery_score,
            "dayStrain": live.day_strain,
            "sleepHours": extract.sleep_hours(live.ms_of_sleep),
            "calories": live.calories,
        },
        "gauges": extract.gauges(home),
        "journal": {
            "completed": bool(journal.journal_completed),
            "hasRecovery": bool(journal.has_recovery),
            "enabled": bool(journal.journal_enabled),
        },
        "activities": extract.overview_activities(home),
        "statistics": extract.key_statistics(home),
    }


def register_tools(app):
    """Register the overview tool with the MCP server app"""

    @app.tool(title="Get Whoop Overview")
    async def whoop_get_overview(
        date: Annotated[
            Optional[str], Field(description="Date in YYYY-MM-DD format (defaults to today if not provided)")
        ] = None,
    ) -> CallToolResult:
        """Get comprehensive Whoop data overview including cycle info, live metrics (recovery, strain,
        sleep, calories), gauges, activities, and key health statistics for a specific date"""
        try:
            home = await asyncio.to_thread(whoop_client.get_home_data, normalize_date(date))
            output = overview_output(home)
            return tool_result(render_overview(output), output)
        except Exception as e:
            return tool_error("Whoop overview data", e)

    return app
