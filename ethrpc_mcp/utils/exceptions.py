"""
Exception hierarchy and error handling utilities for ethrpc-mcp.

Provides:
- Custom exception classes with error codes
- Error categorization (validation, decode, config, fatal)
- Safe error message formatting (no credential leak from RPC URLs)
- A decorator that turns unexpected tool failures into result text
"""

from __future__ import annotations

import asyncio
import functools
import json
import re
from enum import Enum
from typing import Any, Callable, TypeVar

import httpx
from loguru import logger

F = TypeVar("F", bound=Callable[..., Any])


class ErrorCategory(Enum):
    """Error categories for classification."""
    VALIDATION = "validation"
    DECODE = "decode"
    CONFIG = "config"
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    FATAL = "fatal"


class EthRpcMcpError(Exception):
    """Base exception for all ethrpc-mcp errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ValidationError(EthRpcMcpError):
    """Caller input rejected before any network call."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", category=ErrorCategory.VALIDATION, details=details)
        self.field = field


class DecodeError(EthRpcMcpError):
    """Node payload could not be interpreted for the expected response shape."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(
            message,
            code="DECODE_ERROR",
            category=ErrorCategory.DECODE,
            details={"value": value} if value is not None else {},
        )


class ConfigError(EthRpcMcpError):
    """Configuration file could not be loaded."""

    def __init__(self, message: str, path: str | None = None):
        details = {"path": path} if path else {}
        super().__init__(message, code="CONFIG_ERROR", category=ErrorCategory.CONFIG, details=details)


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
]

# Hosted node URLs embed the access key as a path segment.
_URL_KEY_PATTERN = re.compile(r"(https?://[^/\s]+/)[a-zA-Z0-9]{24,}")


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove credentials from error messages before logging them."""
    sanitized = _URL_KEY_PATTERN.sub(lambda m: m.group(1) + replacement, message)
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def classify_exception(exc: Exception) -> tuple[str, ErrorCategory]:
    """Classify an exception and return (error_code, category)."""
    if isinstance(exc, EthRpcMcpError):
        return exc.code, exc.category

    if isinstance(exc, (asyncio.TimeoutError, httpx.TimeoutException)):
        return "TIMEOUT", ErrorCategory.TIMEOUT

    if isinstance(exc, (ConnectionError, httpx.TransportError)):
        return "CONNECTION_ERROR", ErrorCategory.TRANSPORT

    if isinstance(exc, json.JSONDecodeError):
        return "JSON_PARSE_ERROR", ErrorCategory.DECODE

    if isinstance(exc, (ValueError, TypeError, KeyError)):
        return "INVALID_VALUE", ErrorCategory.DECODE

    return "INTERNAL_ERROR", ErrorCategory.FATAL


def tool_error_handler(default_message: str = "Operation failed") -> Callable[[F], F]:
    """
    Decorator that keeps tool invocations from raising.

    The wrapped coroutine must return a list of text blocks; any exception is
    logged and replaced by a single block describing the failure.

    Usage:
        @tool_error_handler("Tool invocation failed")
        async def invoke(self, name: str, arguments: dict) -> list[str]:
            ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> list[str]:
            try:
                return await func(*args, **kwargs)
            except EthRpcMcpError as e:
                logger.warning(f"Tool error: {e.code} - {sanitize_error_message(e.message)}")
                return [f"Error: {e.message}"]
            except Exception as e:
                code, _ = classify_exception(e)
                logger.exception(f"Unexpected error [{code}]: {sanitize_error_message(str(e))}")
                return [f"Error: {default_message}: {sanitize_error_message(str(e))}"]

        return wrapper  # type: ignore[return-value]

    return decorator
