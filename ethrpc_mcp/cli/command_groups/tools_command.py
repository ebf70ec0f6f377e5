"""Tools command group: inspect the catalog and run single tool calls."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table


def register_tools_commands(app: typer.Typer, console: Console) -> None:
    """Register tools command group."""
    tools_app = typer.Typer(help="Inspect and run Ethereum RPC tools")
    app.add_typer(tools_app, name="tools")

    @tools_app.command("list")
    def tools_list() -> None:
        """List available tools."""
        from ethrpc_mcp.tools.catalog import METHOD_SPECS
        from ethrpc_mcp.validation.fields import flatten_params

        table = Table(title="Tools")
        table.add_column("Tool", style="cyan")
        table.add_column("RPC Method")
        table.add_column("Result")
        table.add_column("Arguments", style="dim")

        for spec in METHOD_SPECS.values():
            args = ", ".join(
                p.name if p.validator.required else f"[{p.name}]" for p in flatten_params(spec.params)
            )
            table.add_row(spec.tool_name, spec.rpc_method, spec.response_shape.value, escape(args))
        console.print(table)

    @tools_app.command("call")
    def tools_call(
        name: str = typer.Argument(..., help="Tool name, e.g. get-balance"),
        args: str = typer.Option("{}", "--args", "-a", help="Tool arguments as a JSON object"),
        config_path: Path = typer.Option(None, "--config", "-c", help="Config file path"),
    ) -> None:
        """Run one tool against the configured node and print its output."""
        from ethrpc_mcp.cli.shared.config_utils import load_config_or_exit
        from ethrpc_mcp.rpc.transport import RpcTransport
        from ethrpc_mcp.tools.dispatch import ToolDispatcher

        try:
            arguments: Any = json.loads(args)
        except json.JSONDecodeError as e:
            console.print(f"[red]--args is not valid JSON:[/red] {e}")
            raise typer.Exit(1)
        if not isinstance(arguments, dict):
            console.print("[red]--args must be a JSON object[/red]")
            raise typer.Exit(1)

        config = load_config_or_exit(console, config_path)

        async def run() -> list[str]:
            transport = RpcTransport(config)
            try:
                return await ToolDispatcher(transport).invoke(name, arguments)
            finally:
                await transport.close()

        for block in asyncio.run(run()):
            console.print(block, markup=False, highlight=False)
            console.print()
