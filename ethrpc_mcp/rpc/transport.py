"""
JSON-RPC transport

Issues exactly one JSON-RPC 2.0 POST per call against the configured node and
folds every possible reply into an Outcome. Nothing here retries.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
from loguru import logger

from ethrpc_mcp.config.schema import Config
from ethrpc_mcp.rpc.outcome import Outcome, TransportFailure, build_request, parse_reply
from ethrpc_mcp.utils.exceptions import sanitize_error_message


class RpcTransport:
    """Send JSON-RPC requests to a single Ethereum node endpoint."""

    def __init__(
        self,
        config: Config,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the transport.

        Args:
            config: Immutable server configuration (URL, user agent, timeout)
            transport: Optional httpx transport, used by tests to stub the node
        """
        self.rpc_url = config.rpc_url
        self.user_agent = config.user_agent
        self.timeout = config.request_timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            kwargs: dict[str, Any] = {
                "headers": {
                    "Content-Type": "application/json",
                    "User-Agent": self.user_agent,
                },
            }
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            if self._transport is not None:
                kwargs["transport"] = self._transport
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    async def close(self) -> None:
        """Close HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def send(self, method: str, params: list[Any], request_id: int = 1) -> Outcome:
        """
        Send one JSON-RPC request and wait for its reply.

        Args:
            method: JSON-RPC method name, e.g. ``eth_getBalance``
            params: Positional parameters, already validated
            request_id: Correlation id echoed by the node

        Returns:
            RpcOk, RpcFailure or TransportFailure; never raises for I/O problems
        """
        client = self._get_client()
        payload = build_request(method, params, request_id)
        logger.debug(f"RPC -> {method} id={request_id}")

        try:
            resp = await client.post(self.rpc_url, json=payload)
        except httpx.TimeoutException as e:
            logger.warning(f"RPC {method} timed out: {sanitize_error_message(str(e))}")
            return TransportFailure(f"Request timed out: {sanitize_error_message(str(e)) or type(e).__name__}")
        except httpx.HTTPError as e:
            logger.warning(f"RPC {method} network error: {sanitize_error_message(str(e))}")
            return TransportFailure(f"Network error: {sanitize_error_message(str(e)) or type(e).__name__}")

        if not resp.is_success:
            logger.warning(f"RPC {method} HTTP error status {resp.status_code}")
            return TransportFailure(f"HTTP error! status: {resp.status_code}", status_code=resp.status_code)

        try:
            body = resp.json()
        except ValueError as e:
            logger.warning(f"RPC {method} returned a non-JSON body")
            return TransportFailure(f"Invalid JSON in response body: {e}", status_code=resp.status_code)

        if isinstance(body, dict) and body.get("id") != request_id:
            logger.debug(f"RPC {method} reply id {body.get('id')!r} does not match request id {request_id}")

        outcome = parse_reply(body)
        if isinstance(outcome, TransportFailure):
            logger.warning(f"RPC {method}: {outcome.reason}")
        return outcome
