"""Command-line interface for ethrpc-mcp."""
