"""Configuration loading utilities."""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ethrpc_mcp.config.schema import Config
from ethrpc_mcp.utils.exceptions import ConfigError


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".ethrpc-mcp" / "config.json"


def get_log_dir() -> Path:
    """Get the directory used for rotating log files."""
    return Path.home() / ".ethrpc-mcp" / "logs"


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file or fall back to defaults.

    File keys may be camelCase (``rpcUrl``) or snake_case (``rpc_url``).
    ETHRPC_MCP_* environment variables take precedence over values in the
    file, which take precedence over built-in defaults.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object.

    Raises:
        ConfigError: If the file exists but is not a valid configuration.
    """
    path = config_path or get_config_path()

    if not path.exists():
        return Config()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Failed to load config from {path}: {e}. "
            "Fix the file or remove it to use defaults.",
            path=str(path),
        ) from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a JSON object: {path}", path=str(path))

    data = convert_keys(data)
    allowed = set(Config.model_fields) - env_overrides()
    try:
        return Config(**{k: v for k, v in data.items() if k in allowed})
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}", path=str(path)) from e


def env_overrides() -> set[str]:
    """Config fields currently set through ETHRPC_MCP_* environment variables."""
    prefix = Config.model_config.get("env_prefix", "").upper()
    present = {key.upper() for key in os.environ}
    return {name for name in Config.model_fields if f"{prefix}{name.upper()}" in present}


def save_config(config: Config, config_path: Path | None = None) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = convert_to_camel(config.model_dump())

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def convert_keys(data: Any) -> Any:
    """Convert camelCase keys to snake_case for Pydantic."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def convert_to_camel(data: Any) -> Any:
    """Convert snake_case keys to camelCase."""
    if isinstance(data, dict):
        return {snake_to_camel(k): convert_to_camel(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_to_camel(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.lower())
    return "".join(result)


def snake_to_camel(name: str) -> str:
    """Convert snake_case to camelCase."""
    components = name.split("_")
    return components[0] + "".join(x.title() for x in components[1:])
