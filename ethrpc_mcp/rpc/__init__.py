"""JSON-RPC transport: one request per call, tri-state outcome."""

from ethrpc_mcp.rpc.outcome import Outcome, RpcFailure, RpcOk, TransportFailure
from ethrpc_mcp.rpc.transport import RpcTransport

__all__ = ["Outcome", "RpcOk", "RpcFailure", "TransportFailure", "RpcTransport"]
