"""
Helpers that turn tool output into MCP call results.
"""
import json
from typing import Any, Dict

from loguru import logger
from mcp.types import CallToolResult, TextContent


def _to_json_str(data):
    """Convert data to JSON string if it's not already a string"""
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data, indent=2, default=str)
    except (TypeError, ValueError):
        return str(data)


def tool_result(text: str, structured: Dict[str, Any]) -> CallToolResult:
    # Round-trip through JSON so dataclass leftovers never reach the transport
    payload = json.loads(_to_json_str(structured))
    return CallToolResult(content=[TextContent(type="text", text=text)], structuredContent=payload)


def tool_error(what: str, error: Exception) -> CallToolResult:
    logger.exception(f"Error fetching {what}")
    message = str(error) or type(error).__name__
    return CallToolResult(
        content=[TextContent(type="text", text=f"Error fetching {what}: {message}")],
        isError=True,
    )
