"""Deterministic text rendering of normalized results."""

from ethrpc_mcp.formatting.formatter import (
    render,
    render_error,
    render_unknown_tool,
    render_validation_error,
    template_context,
)

__all__ = [
    "render",
    "render_error",
    "render_unknown_tool",
    "render_validation_error",
    "template_context",
]
