"""Result envelope for a single JSON-RPC round trip."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class RpcOk:
    """The node answered with a ``result`` member (which may be null)."""

    result: Any


@dataclass(frozen=True, slots=True)
class RpcFailure:
    """The node answered with an ``error`` member."""

    code: int | None
    message: str
    data: Any = None


@dataclass(frozen=True, slots=True)
class TransportFailure:
    """No usable JSON-RPC reply: network error, non-2xx status or malformed body."""

    reason: str
    status_code: int | None = None


Outcome = Union[RpcOk, RpcFailure, TransportFailure]


def build_request(method: str, params: list[Any], request_id: int = 1) -> dict[str, Any]:
    """Build a JSON-RPC 2.0 request envelope."""
    return {"jsonrpc": "2.0", "method": method, "params": list(params), "id": request_id}


def parse_reply(body: Any) -> Outcome:
    """Map a decoded JSON reply body onto an outcome.

    Exactly one of ``result``/``error`` is expected; a body with neither is a
    transport failure since it is not a JSON-RPC reply at all.
    """
    if not isinstance(body, dict):
        return TransportFailure(f"Unexpected JSON-RPC reply type: {type(body).__name__}")

    if "error" in body and body["error"] is not None:
        err = body["error"]
        if isinstance(err, dict):
            code = err.get("code")
            message = err.get("message")
            return RpcFailure(
                code=code if isinstance(code, int) and not isinstance(code, bool) else None,
                message=message if isinstance(message, str) and message else "Unknown error",
                data=err.get("data"),
            )
        return RpcFailure(code=None, message=str(err) or "Unknown error")

    if "result" in body:
        return RpcOk(body["result"])

    return TransportFailure("JSON-RPC reply contained neither result nor error")
