"""Smoke tests against a real node (opt-in: ETHRPC_MCP_LIVE=1)."""

import pytest

from ethrpc_mcp.config.schema import Config
from ethrpc_mcp.rpc.transport import RpcTransport
from ethrpc_mcp.tools.dispatch import ToolDispatcher


@pytest.mark.live_node
@pytest.mark.asyncio
async def test_block_number_and_chain_id() -> None:
    transport = RpcTransport(Config())
    dispatcher = ToolDispatcher(transport)
    try:
        block = await dispatcher.invoke("get-block-number", {})
        chain = await dispatcher.invoke("get-chain-id", {})
    finally:
        await transport.close()
    assert block[0].startswith("Latest block number: ")
    assert chain[0].startswith("Chain ID: ")
