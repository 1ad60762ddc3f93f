"""
Modular MCP Server for WHOOP Data
"""

import sys

from loguru import logger
from mcp.server.fastmcp import FastMCP

from whoop_mcp.client import WhoopClient, WhoopError
from whoop_mcp.config import WhoopSettings
from whoop_mcp.fetching import FetchPolicy

# Import all tool modules
from whoop_mcp import overview
from whoop_mcp import recovery
from whoop_mcp import strain
from whoop_mcp import sleep
from whoop_mcp import history
from whoop_mcp import trends
from whoop_mcp import monthly

HEALTH_PATHS = ("/", "/healthz", "/readyz")
HEALTH_BODY = b'{"status":"ok","service":"whoop-mcp"}'


def setup_logger(level: str) -> None:
    # stdout belongs to the stdio transport
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def init_api(settings: WhoopSettings):
    """Initialize the WHOOP client and make sure it holds a token."""
    client = WhoopClient(settings)
    try:
        client.login()
    except WhoopError as err:
        logger.error(f"WHOOP login failed: {err}")
        return None
    return client


def create_app(client, settings: WhoopSettings) -> FastMCP:
    """Configure every tool module with the client and register its tools"""
    overview.configure(client)
    recovery.configure(client)
    strain.configure(client)
    sleep.configure(client)
    history.configure(client, FetchPolicy.from_millis(settings.history_fetch_delay_ms))
    trends.configure(client, FetchPolicy.from_millis(settings.trends_fetch_delay_ms))
    monthly.configure(client, FetchPolicy.from_millis(settings.monthly_fetch_delay_ms))

    app = FastMCP(
        "WHOOP v1.0",
        host=settings.mcp_host,
        port=settings.mcp_port,
        streamable_http_path=settings.mcp_path,
    )

    app = overview.register_tools(app)
    app = recovery.register_tools(app)
    app = strain.register_tools(app)
    app = sleep.register_tools(app)
    app = history.register_tools(app)
    app = trends.register_tools(app)
    app = monthly.register_tools(app)
    return app


class _HealthWrapper:
    """Answers GET health probes and hands every other request to the MCP app."""

    def __init__(self, inner, mcp_path: str):
        self.inner = inner
        self.probe_paths = tuple(p for p in HEALTH_PATHS if p != mcp_path)

    async def __call__(self, scope, receive, send):
        if scope.get("type") == "http" and scope.get("method") == "GET" and scope.get("path", "") in self.probe_paths:
            await send(
                {
                    "type": "http.response.start",
                    "status": 200,
                    "headers": [(b"content-type", b"application/json")],
                }
            )
            await send({"type": "http.response.body", "body": HEALTH_BODY})
            return
        return await self.inner(scope, receive, send)


def main():
    """Initialize the MCP server and register all tools"""
    settings = WhoopSettings()
    setup_logger(settings.log_level)

    whoop_client = init_api(settings)
    if not whoop_client:
        logger.error("Failed to initialize WHOOP client. Exiting.")
        sys.exit(1)

    logger.info("WHOOP client initialized successfully.")
    app = create_app(whoop_client, settings)

    if settings.mcp_transport == "stdio":
        app.run()
        return

    import uvicorn

    logger.info(
        f"Starting MCP with transport=http, host={settings.mcp_host}, "
        f"port={settings.mcp_port}, path={settings.mcp_path}"
    )
    uvicorn.run(
        _HealthWrapper(app.streamable_http_app(), settings.mcp_path),
        host=settings.mcp_host,
        port=settings.mcp_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
