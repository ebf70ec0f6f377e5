"""Utility functions for ethrpc-mcp."""

from ethrpc_mcp.utils.exceptions import (
    EthRpcMcpError,
    ValidationError,
    DecodeError,
    ConfigError,
    ErrorCategory,
    classify_exception,
    sanitize_error_message,
    tool_error_handler,
)

__all__ = [
    "EthRpcMcpError",
    "ValidationError",
    "DecodeError",
    "ConfigError",
    "ErrorCategory",
    "classify_exception",
    "sanitize_error_message",
    "tool_error_handler",
]
