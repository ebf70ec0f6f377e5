"""Pytest hooks and fixtures."""

import os
from typing import Any

import pytest

from ethrpc_mcp.rpc.outcome import Outcome, RpcOk


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "live_node: talks to a real JSON-RPC endpoint (set ETHRPC_MCP_LIVE=1 to run)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip live_node tests unless explicitly enabled."""
    if os.environ.get("ETHRPC_MCP_LIVE") == "1":
        return
    skip = pytest.mark.skip(reason="Live node tests disabled (set ETHRPC_MCP_LIVE=1)")
    for item in items:
        if "live_node" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the real home directory and ETHRPC_MCP_* settings."""
    for key in list(os.environ):
        if key.startswith("ETHRPC_MCP_") and key != "ETHRPC_MCP_LIVE":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))


class FakeTransport:
    """Stands in for RpcTransport: records calls, replays queued outcomes."""

    def __init__(self, *outcomes: Outcome):
        self.outcomes = list(outcomes)
        self.calls: list[tuple[str, list[Any], int]] = []
        self.closed = False

    async def send(self, method: str, params: list[Any], request_id: int = 1) -> Outcome:
        self.calls.append((method, params, request_id))
        if not self.outcomes:
            return RpcOk(None)
        return self.outcomes.pop(0)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_transport():
    return FakeTransport
