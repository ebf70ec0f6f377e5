"""MCP host adapter."""

from ethrpc_mcp.server.app import build_tools, create_server, run_stdio

__all__ = ["build_tools", "create_server", "run_stdio"]
