"""Tests for ethrpc_mcp.rpc.transport and ethrpc_mcp.rpc.outcome."""

import json

import httpx
import pytest

from ethrpc_mcp.config.schema import Config
from ethrpc_mcp.rpc.outcome import RpcFailure, RpcOk, TransportFailure, build_request, parse_reply
from ethrpc_mcp.rpc.transport import RpcTransport


def _transport(handler) -> RpcTransport:
    return RpcTransport(Config(rpc_url="https://node.example"), transport=httpx.MockTransport(handler))


def test_build_request_envelope() -> None:
    assert build_request("eth_blockNumber", [], 67) == {
        "jsonrpc": "2.0",
        "method": "eth_blockNumber",
        "params": [],
        "id": 67,
    }


def test_parse_reply_shapes() -> None:
    assert parse_reply({"jsonrpc": "2.0", "id": 1, "result": None}) == RpcOk(None)
    assert parse_reply({"id": 1, "error": {"code": -32000, "message": "boom", "data": "0x01"}}) == RpcFailure(
        -32000, "boom", "0x01"
    )
    assert parse_reply({"id": 1, "error": {"code": "x"}}) == RpcFailure(None, "Unknown error")
    assert parse_reply({"id": 1, "error": "plain"}) == RpcFailure(None, "plain")
    assert isinstance(parse_reply({"id": 1}), TransportFailure)
    assert isinstance(parse_reply([1, 2]), TransportFailure)


@pytest.mark.asyncio
async def test_send_posts_one_jsonrpc_request() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x10"})

    transport = _transport(handler)
    outcome = await transport.send("eth_getBalance", ["0xabc", "latest"])
    await transport.close()

    assert outcome == RpcOk("0x10")
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url.host == "node.example"
    assert request.headers["content-type"] == "application/json"
    assert request.headers["user-agent"] == "ethrpc-mcp/1.0"
    assert json.loads(request.content) == {
        "jsonrpc": "2.0",
        "method": "eth_getBalance",
        "params": ["0xabc", "latest"],
        "id": 1,
    }


@pytest.mark.asyncio
async def test_send_rpc_error() -> None:
    transport = _transport(
        lambda request: httpx.Response(200, json={"id": 1, "error": {"code": 3, "message": "execution reverted"}})
    )
    assert await transport.send("eth_call", []) == RpcFailure(3, "execution reverted")


@pytest.mark.asyncio
async def test_send_http_error_status() -> None:
    transport = _transport(lambda request: httpx.Response(500, text="oops"))
    assert await transport.send("eth_blockNumber", []) == TransportFailure("HTTP error! status: 500", 500)


@pytest.mark.asyncio
async def test_send_non_json_body() -> None:
    transport = _transport(lambda request: httpx.Response(200, text="<html>"))
    outcome = await transport.send("eth_blockNumber", [])
    assert isinstance(outcome, TransportFailure)
    assert outcome.reason.startswith("Invalid JSON in response body")


@pytest.mark.asyncio
async def test_send_reply_without_result_or_error() -> None:
    transport = _transport(lambda request: httpx.Response(200, json={"jsonrpc": "2.0", "id": 1}))
    outcome = await transport.send("eth_blockNumber", [])
    assert outcome == TransportFailure("JSON-RPC reply contained neither result nor error")


@pytest.mark.asyncio
async def test_send_network_error_is_not_raised() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    outcome = await _transport(handler).send("eth_blockNumber", [])
    assert outcome == TransportFailure("Network error: connection refused")


@pytest.mark.asyncio
async def test_send_timeout_is_not_raised() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    outcome = await _transport(handler).send("eth_blockNumber", [])
    assert isinstance(outcome, TransportFailure)
    assert outcome.reason.startswith("Request timed out")


@pytest.mark.asyncio
async def test_mismatched_reply_id_is_tolerated() -> None:
    transport = _transport(lambda request: httpx.Response(200, json={"id": 99, "result": "0x1"}))
    assert await transport.send("eth_newBlockFilter", [], request_id=67) == RpcOk("0x1")


@pytest.mark.asyncio
async def test_client_reused_and_closed() -> None:
    transport = _transport(lambda request: httpx.Response(200, json={"id": 1, "result": "0x1"}))
    await transport.send("eth_chainId", [])
    client = transport._client
    await transport.send("eth_chainId", [])
    assert transport._client is client
    await transport.close()
    assert transport._client is None


def test_timeout_only_set_when_configured() -> None:
    default = RpcTransport(Config())._get_client()
    custom = RpcTransport(Config(request_timeout_seconds=2.5))._get_client()
    assert custom.timeout.read == 2.5
    assert default.timeout.read == httpx.Timeout(5.0).read
