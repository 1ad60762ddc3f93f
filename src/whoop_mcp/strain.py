"""
Strain deep dive tool for the WHOOP MCP Server
"""
import asyncio
from typing import Annotated, Any, Dict, Optional

from mcp.types import CallToolResult
from pydantic import Field

from whoop_mcp import extract
from whoop_mcp.fetching import normalize_date
from whoop_mcp.reports import render_strain
from whoop_mcp.responses import tool_error, tool_result
from whoop_mcp.widgets import DeepDive

# The whoop_client will be set by the main module
whoop_client = None


def configure(client):
    """Configure the module with the WHOOP client instance"""
    global whoop_client
    whoop_client = client


def strain_output(deep_dive: DeepDive) -> Dict[str, Any]:
    gauge = extract.score_gauge(deep_dive)
    tile = extract.contributors_tile(deep_dive)

    def gauge_value(name: str):
        # Zero and missing both mean "not set" on this gauge
        return (getattr(gauge, name) if gauge else None) or None

    return {
        "title": deep_dive.header.title,
        "strainScore": {
            "score": (gauge.score_display if gauge else None) or "N/A",
            "percentage": (gauge.gauge_fill_percentage if gauge else None) or 0,
            "target": gauge_value("score_target"),
            "lowerOptimal": gauge_value("lower_optimal_percentage"),
            "higherOptimal": gauge_value("higher_optimal_percentage"),
        },
        "contributors": extract.contributors(tile),
        "activities": extract.deep_dive_activities(deep_dive),
        "coachInsight": extract.coach_insight(tile),
    }


def register_tools(app):
    """Register the strain tool with the MCP server app"""

    @app.tool(title="Get Whoop Strain Deep Dive")
    async def whoop_get_strain(
        date: Annotated[
            Optional[str], Field(description="Date in YYYY-MM-DD format (defaults to today if not provided)")
        ] = None,
    ) -> CallToolResult:
        """Get comprehensive strain analysis including day strain score, heart rate zones, strength
        training time, steps, activities, and strain contributors with trends"""
        try:
            deep_dive = await asyncio.to_thread(whoop_client.get_strain_deep_dive, normalize_date(date))
            output = strain_output(deep_dive)
            return tool_result(render_strain(output), output)
        except Exception as e:
            return tool_error("Whoop strain data", e)

    return app
