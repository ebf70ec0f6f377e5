"""Tests for ethrpc_mcp.cli.shared.logging_utils."""

from pathlib import Path

from loguru import logger

from ethrpc_mcp.cli.shared import logging_utils


def test_rotating_log_file_is_created_once(tmp_path: Path) -> None:
    logging_utils.configure_logging("DEBUG")
    first = logging_utils.ensure_rotating_log_file("serve", level="DEBUG")
    second = logging_utils.ensure_rotating_log_file("serve", level="DEBUG")
    assert first == second == tmp_path / ".ethrpc-mcp" / "logs" / "serve.log"
    assert list(logging_utils._SINK_IDS) == ["serve"]

    logger.info("hello from test")
    logger.complete()
    assert "hello from test" in first.read_text(encoding="utf-8")
    logging_utils.configure_logging("INFO")
