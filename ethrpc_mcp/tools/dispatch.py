"""Generic tool dispatch: validate, send, normalize, render."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from loguru import logger

from ethrpc_mcp.decoding.normalizer import normalize
from ethrpc_mcp.formatting.formatter import render, render_unknown_tool, render_validation_error
from ethrpc_mcp.rpc.transport import RpcTransport
from ethrpc_mcp.tools.catalog import METHOD_SPECS
from ethrpc_mcp.tools.method_spec import MethodSpec
from ethrpc_mcp.utils.exceptions import ValidationError, tool_error_handler
from ethrpc_mcp.validation.fields import check_arguments


class ToolDispatcher:
    """
    Runs any catalogued tool through one code path.

    Every invocation returns text blocks; validation, RPC and transport
    failures are rendered, never raised.
    """

    def __init__(self, transport: RpcTransport, specs: Optional[Mapping[str, MethodSpec]] = None):
        self.transport = transport
        self._specs = specs if specs is not None else METHOD_SPECS

    def get(self, name: str) -> MethodSpec | None:
        """Get a tool's metadata by name."""
        return self._specs.get(name)

    @property
    def specs(self) -> list[MethodSpec]:
        return list(self._specs.values())

    @property
    def tool_names(self) -> list[str]:
        return list(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, name: str) -> bool:
        return name in self._specs

    @tool_error_handler("Tool invocation failed")
    async def invoke(self, name: str, arguments: Optional[dict[str, Any]] = None) -> list[str]:
        """
        Execute a tool by name.

        Args:
            name: Tool name, e.g. ``get-balance``
            arguments: Caller arguments as received from the MCP host

        Returns:
            Text blocks for the tool result
        """
        spec = self._specs.get(name)
        if spec is None:
            logger.warning(f"Unknown tool requested: {name}")
            return [render_unknown_tool(name)]

        try:
            params, values = check_arguments(spec.params, arguments)
        except ValidationError as e:
            logger.info(f"Rejected {name} arguments: {e.message}")
            return [render_validation_error(spec, e)]

        outcome = await self.transport.send(spec.rpc_method, params, spec.request_id)
        return render(spec, normalize(outcome, spec), values)
