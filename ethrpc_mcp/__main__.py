"""
Entry point for running ethrpc-mcp as a module: python -m ethrpc_mcp
"""

from ethrpc_mcp.cli.commands import app

if __name__ == "__main__":
    app()
