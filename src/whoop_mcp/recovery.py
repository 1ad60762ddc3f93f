"""
Recovery deep dive tool for the WHOOP MCP Server
"""
import asyncio
from typing import Annotated, Any, Dict, Optional

from mcp.types import CallToolResult
from pydantic import Field

from whoop_mcp import extract
from whoop_mcp.fetching import normalize_date
from whoop_mcp.reports import render_recovery
from whoop_mcp.responses import tool_error, tool_result
from whoop_mcp.widgets import DeepDive

# The whoop_client will be set by the main module
whoop_client = None


def configure(client):
    """Configure the module with the WHOOP client instance"""
    global whoop_client
    whoop_client = client


def recovery_output(deep_dive: DeepDive) -> Dict[str, Any]:
    gauge = extract.score_gauge(deep_dive)
    tile = extract.contributors_tile(deep_dive)
    return {
        "title": deep_dive.header.title,
        "recoveryScore": {
            "score": (gauge.score_display if gauge else None) or "N/A",
            "percentage": (gauge.gauge_fill_percentage if gauge else None) or 0,
            "style": (gauge.progress_fill_style if gauge else None) or "UNKNOWN",
        },
        "contributors": extract.contributors(tile),
        "coachInsight": extract.coach_insight(tile),
    }


def register_tools(app):
    """Register the recovery tool with the MCP server app"""

    @app.tool(title="Get Whoop Recovery Deep Dive")
    async def whoop_get_recovery(
        date: Annotated[
            Optional[str], Field(description="Date in YYYY-MM-DD format (defaults to today if not provided)")
        ] = None,
    ) -> CallToolResult:
        """Get comprehensive recovery analysis including recovery score, HRV, RHR, respiratory rate,
        sleep performance, and recovery contributors with trends"""
        try:
            deep_dive = await asyncio.to_thread(whoop_client.get_recovery_deep_dive, normalize_date(date))
            output = recovery_output(deep_dive)
            return tool_result(render_recovery(output), output)
        except Exception as e:
            return tool_error("Whoop recovery data", e)

    return app
