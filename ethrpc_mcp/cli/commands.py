"""CLI commands for ethrpc-mcp.

The CLI is the single entry point: ``serve`` runs the MCP stdio server,
``tools`` inspects and exercises the catalog, ``init-config`` writes the
configuration file.
"""

import asyncio
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from ethrpc_mcp import __logo__, __version__
from ethrpc_mcp.cli.command_groups.tools_command import register_tools_commands
from ethrpc_mcp.cli.shared.config_utils import load_config_or_exit
from ethrpc_mcp.cli.shared.logging_utils import configure_logging, ensure_rotating_log_file

app = typer.Typer(
    name="ethrpc-mcp",
    help=f"{__logo__} ethrpc-mcp - Ethereum JSON-RPC tools for MCP hosts",
    no_args_is_help=True,
)

console = Console()
# stdout carries MCP frames while serving
err_console = Console(stderr=True)


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} ethrpc-mcp v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """ethrpc-mcp - Ethereum JSON-RPC tools for MCP hosts."""
    pass


register_tools_commands(app, console)


# ============================================================================
# Server
# ============================================================================


@app.command()
def serve(
    config_path: Path = typer.Option(None, "--config", "-c", help="Config file path"),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging"),
):
    """Start the MCP server on stdin/stdout."""
    from ethrpc_mcp.server.app import run_stdio

    config = load_config_or_exit(err_console, config_path)
    level = "DEBUG" if verbose else config.log_level
    configure_logging(level)
    if config.log_file:
        log_path = ensure_rotating_log_file("serve", level=level)
        logger.info(f"Logs: {log_path}")

    try:
        asyncio.run(run_stdio(config))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception:
        logger.exception("MCP server failed")
        raise typer.Exit(1)


# ============================================================================
# Setup
# ============================================================================


@app.command("init-config")
def init_config(
    config_path: Path = typer.Option(None, "--config", "-c", help="Config file path"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """Write a configuration file with default values."""
    from ethrpc_mcp.config.loader import get_config_path, save_config
    from ethrpc_mcp.config.schema import Config

    path = config_path or get_config_path()
    if path.exists() and not force:
        console.print(f"[yellow]Config already exists at {path}[/yellow] (use --force to overwrite)")
        raise typer.Exit(1)
    # Built-in defaults only; ETHRPC_MCP_* variables still apply on load.
    save_config(Config.model_construct(), path)
    console.print(f"[green]✓[/green] Created config at {path}")


@app.command()
def version():
    """Show version."""
    console.print(f"{__logo__} ethrpc-mcp v{__version__}")


if __name__ == "__main__":
    app()
