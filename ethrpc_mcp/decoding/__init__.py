"""Decoding of untyped node results into rendering-ready views."""

from ethrpc_mcp.decoding.hexcodec import (
    bytes_preview,
    decode_word,
    extract_revert_hex,
    format_eth,
    format_gwei,
    format_int,
    parse_quantity,
)
from ethrpc_mcp.decoding.normalizer import normalize, normalize_rpc_error

__all__ = [
    "bytes_preview",
    "decode_word",
    "extract_revert_hex",
    "format_eth",
    "format_gwei",
    "format_int",
    "normalize",
    "normalize_rpc_error",
    "parse_quantity",
]
