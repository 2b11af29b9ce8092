"""MCP server setup and configuration."""

from mailscan.config import Config
from mailscan.mcp.tools import register_tools
from mcp.server.fastmcp import FastMCP


def create_server(config: Config, port: int = 8080) -> FastMCP:
    """Create and configure the MCP server with tools."""
    mcp = FastMCP("mailscan_mcp", port=port)
    register_tools(mcp, config)
    return mcp


def run_server(
    config: Config,
    transport: str = "stdio",
    port: int = 8080,
) -> None:
    """Run the MCP server with specified transport."""
    if transport not in ("stdio", "sse"):
        raise ValueError(f"Unknown transport: {transport}")

    mcp = create_server(config, port=port)
    if transport == "stdio":
        mcp.run()
    else:
        mcp.run(transport="sse")
