"""Config loading for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ethrpc_mcp.config.loader import load_config
from ethrpc_mcp.config.schema import Config
from ethrpc_mcp.utils.exceptions import ConfigError


def load_config_or_exit(console: Console, config_path: Optional[Path] = None) -> Config:
    """Load configuration; report a broken file and exit 1 instead of a traceback."""
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Invalid configuration:[/red] {e.message}")
        raise typer.Exit(1)
