"""
MCP stdio server.

Registers every catalogued tool with the low-level MCP ``Server`` and routes
calls through ToolDispatcher. stdout carries protocol frames only; all
diagnostics go to stderr through loguru.
"""

from __future__ import annotations

from typing import Any, Iterable

from loguru import logger
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from ethrpc_mcp import __version__
from ethrpc_mcp.config.schema import Config
from ethrpc_mcp.rpc.transport import RpcTransport
from ethrpc_mcp.tools.dispatch import ToolDispatcher
from ethrpc_mcp.tools.method_spec import MethodSpec


def build_tools(specs: Iterable[MethodSpec]) -> list[Tool]:
    """MCP tool definitions (name, description, input schema) for the catalog."""
    return [
        Tool(name=spec.tool_name, description=spec.description, inputSchema=spec.input_schema())
        for spec in specs
    ]


def create_server(config: Config, dispatcher: ToolDispatcher) -> Server:
    """Create the MCP server with list/call handlers bound to ``dispatcher``."""
    server = Server(config.server_name, version=config.server_version or __version__)
    tools = build_tools(dispatcher.specs)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return tools

    # Arguments are checked by the tool's own validators so that failures come
    # back as tool text rather than protocol errors.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        logger.debug(f"call_tool {name}")
        blocks = await dispatcher.invoke(name, arguments or {})
        return [TextContent(type="text", text=text) for text in blocks]

    return server


async def run_stdio(config: Config) -> None:
    """Serve over stdin/stdout until the host closes the stream."""
    transport = RpcTransport(config)
    dispatcher = ToolDispatcher(transport)
    server = create_server(config, dispatcher)
    logger.info(f"{config.server_name} MCP server running on stdio ({len(dispatcher)} tools, node {config.rpc_url})")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await transport.close()
        logger.info("MCP server stopped")
