"""
Hex payload primitives.

Ethereum nodes return untyped hex strings: quantities, 32-byte words, hashes
and opaque byte strings all look alike. These helpers parse and render them
without a schema. Integer renderings are exact; the ETH/Gwei renderings go
through float division and are display approximations only.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from ethrpc_mcp.utils.exceptions import DecodeError

WEI_PER_ETH = 1e18
WEI_PER_GWEI = 1e9
ETH_FRACTION_DIGITS = 8
GWEI_FRACTION_DIGITS = 2

WORD_HEX_CHARS = 64
ADDRESS_HEX_CHARS = 40
PREVIEW_BYTES = 64
ELLIPSIS = "..."

_HEX_BODY = re.compile(r"^[0-9a-fA-F]*$")
_REVERT_PATTERN = re.compile(r"reverted:\s*(0x[0-9a-fA-F]+)")


def strip_0x(value: str) -> str:
    return value[2:] if value[:2] in ("0x", "0X") else value


def is_hex(value: Any) -> bool:
    """True for a ``0x``-prefixed string containing only hex digits (possibly none)."""
    return isinstance(value, str) and value[:2] in ("0x", "0X") and bool(_HEX_BODY.match(value[2:]))


def parse_quantity(value: Any) -> int:
    """
    Parse a hex quantity into an unsigned integer of arbitrary width.

    Missing or zero-length values (None, "", "0x") are 0. JSON integers from
    non-conforming nodes are accepted as-is.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise DecodeError(f"Expected hex quantity, got boolean {value!r}", value)
    if isinstance(value, int):
        if value < 0:
            raise DecodeError(f"Quantity must be non-negative, got {value}", value)
        return value
    if isinstance(value, str):
        text = value.strip()
        if text in ("", "0x", "0X"):
            return 0
        if is_hex(text):
            return int(text[2:], 16)
    raise DecodeError(f"Expected hex quantity, got {value!r}", value)


def parse_optional_quantity(value: Any) -> int | None:
    """Like parse_quantity but keeps an absent field absent."""
    if value is None:
        return None
    return parse_quantity(value)


def quantity_hex(value: Any) -> str:
    """The hex form to show next to a decoded quantity."""
    if isinstance(value, str) and is_hex(value.strip()) and len(value.strip()) > 2:
        return value.strip()
    return hex(parse_quantity(value))


def _format_decimal(amount: float, fraction_digits: int) -> str:
    text = f"{amount:,.{fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_eth(wei: int) -> str:
    """Wei → ETH with thousands separators and at most 8 fraction digits."""
    return f"{_format_decimal(wei / WEI_PER_ETH, ETH_FRACTION_DIGITS)} ETH"


def format_gwei(wei: int) -> str:
    """Wei → Gwei with thousands separators and at most 2 fraction digits."""
    return f"{_format_decimal(wei / WEI_PER_GWEI, GWEI_FRACTION_DIGITS)} Gwei"


def format_int(value: int) -> str:
    """Exact integer with thousands separators."""
    return f"{value:,}"


def byte_length(value: str) -> int:
    return len(strip_0x(value)) // 2


@dataclass(frozen=True, slots=True)
class WordDecoding:
    """Interpretations of one 32-byte word, in precedence order."""

    address: str | None
    uint: int
    boolean: bool


def is_word(value: Any) -> bool:
    return is_hex(value) and len(strip_0x(value)) == WORD_HEX_CHARS


def is_address_word(value: str) -> bool:
    """Upper 12 bytes of the word are zero."""
    body = strip_0x(value)
    return len(body) == WORD_HEX_CHARS and set(body[: WORD_HEX_CHARS - ADDRESS_HEX_CHARS]) <= {"0"}


def word_to_address(value: str) -> str:
    return "0x" + strip_0x(value)[-ADDRESS_HEX_CHARS:]


def decode_bool_word(value: Any) -> bool:
    """Only a word equal to exactly 1 is true; every other value, including 2, is false."""
    return parse_quantity(value) == 1


def decode_word(value: str) -> WordDecoding:
    """
    Interpret a single 32-byte word.

    Checks run address first, then uint256, then bool, and every check that
    applies is reported. An all-zero-upper-bytes word therefore reads as both
    an address and a number.
    """
    if not is_word(value):
        raise DecodeError(f"Expected a 32-byte hex word, got {value!r}", value)
    return WordDecoding(
        address=word_to_address(value) if is_address_word(value) else None,
        uint=parse_quantity(value),
        boolean=decode_bool_word(value),
    )


def bytes_preview(value: str) -> tuple[str, bool]:
    """First 64 bytes of a hex byte string, plus whether anything was cut."""
    body = strip_0x(value)
    limit = PREVIEW_BYTES * 2
    if len(body) <= limit:
        return "0x" + body, False
    return "0x" + body[:limit] + ELLIPSIS, True


def extract_revert_hex(message: str) -> str | None:
    """Pull the ``reverted: 0x…`` payload out of a node error message, if any."""
    match = _REVERT_PATTERN.search(message or "")
    return match.group(1) if match else None
