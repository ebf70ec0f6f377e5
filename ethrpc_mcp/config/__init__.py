"""Configuration module for ethrpc-mcp."""

from ethrpc_mcp.config.loader import load_config, get_config_path, save_config
from ethrpc_mcp.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path", "save_config"]
