"""Configuration schema using Pydantic.

The single read-only settings object for the server: which node to talk to,
how to identify ourselves, and where logs go. Persisted to
~/.ethrpc-mcp/config.json, overridable via ETHRPC_MCP_* environment variables.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RPC_URL = "https://docs-demo.quiknode.pro"
DEFAULT_USER_AGENT = "ethrpc-mcp/1.0"


class Config(BaseSettings):
    """Root configuration for ethrpc-mcp."""

    rpc_url: str = DEFAULT_RPC_URL  # JSON-RPC gateway of the node, one per process
    user_agent: str = DEFAULT_USER_AGENT
    server_name: str = "ethrpc"
    server_version: str = "1.0.0"
    request_timeout_seconds: float | None = Field(default=None, gt=0)  # None keeps the httpx default
    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: bool = False  # also write ~/.ethrpc-mcp/logs/<command>.log

    @field_validator("rpc_url")
    @classmethod
    def _check_rpc_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("rpc_url must be an http(s) URL")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    model_config = SettingsConfigDict(
        env_prefix="ETHRPC_MCP_",
        frozen=True,
        extra="ignore",
    )
