"""
Text rendering for tool results.

Everything here is a pure function of its inputs: the same normalized value,
method metadata and arguments always produce the same text. Each returned
string becomes one MCP text content block.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from ethrpc_mcp.decoding.hexcodec import format_eth, format_gwei, format_int
from ethrpc_mcp.decoding.models import (
    AddressValue,
    BooleanValue,
    BytesValue,
    ErrorView,
    FeeHistoryView,
    LogArrayValue,
    LogView,
    Normalized,
    NotFound,
    ProofView,
    QuantityValue,
    RawValue,
    ReceiptView,
    SyncStatusView,
    TransactionView,
)
from ethrpc_mcp.tools.method_spec import MethodSpec, QuantityUnit
from ethrpc_mcp.utils.exceptions import ValidationError
from ethrpc_mcp.validation.fields import OMIT, OptionalField, flatten_params

NOT_AVAILABLE = "N/A"
PENDING = "Pending"
CONTRACT_CREATION = "Contract Creation"
EMPTY_BYTES = "0x (empty)"


class _TemplateContext(dict):
    """Placeholders with no value render as an empty string."""

    def __missing__(self, key: str) -> str:
        return ""


def template_context(spec: MethodSpec, arguments: Optional[dict[str, Any]]) -> _TemplateContext:
    """Validated argument values for templates, with declared defaults filled in."""
    args = arguments if isinstance(arguments, dict) else {}
    ctx = _TemplateContext()
    for param in flatten_params(spec.params):
        value = args.get(param.name)
        if value is None and isinstance(param.validator, OptionalField) and param.validator.default is not OMIT:
            value = param.validator.default
        ctx[param.name] = "" if value is None else value
    return ctx


def _fill(text: str, ctx: _TemplateContext, **extra: Any) -> str:
    values = _TemplateContext(ctx)
    values.update(extra)
    return text.format_map(values)


def _or(value: Any, placeholder: str = NOT_AVAILABLE) -> str:
    return placeholder if value is None else str(value)


def _int_or(value: Optional[int], placeholder: str = NOT_AVAILABLE) -> str:
    return placeholder if value is None else format_int(value)


def _with_wei(value: int, fmt: Callable[[int], str]) -> str:
    return f"{fmt(value)} ({format_int(value)} wei)"


def _gwei_or(value: Optional[int]) -> str:
    return NOT_AVAILABLE if value is None else _with_wei(value, format_gwei)


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def render_quantity(value: QuantityValue, unit: QuantityUnit) -> str:
    if unit is QuantityUnit.ETH:
        return _with_wei(value.value, format_eth)
    if unit is QuantityUnit.GWEI:
        return _with_wei(value.value, format_gwei)
    if unit is QuantityUnit.HASHRATE:
        return f"{format_int(value.value)} hashes/second (hex: {value.raw})"
    return f"{format_int(value.value)} (hex: {value.raw})"


def render_bytes(value: BytesValue) -> str:
    """Empty marker, word interpretations, or a labelled lossy preview."""
    if value.empty:
        return EMPTY_BYTES
    if value.word is not None:
        lines = [f"Raw: {value.raw}"]
        if value.word.address is not None:
            lines.append(f"As address: {value.word.address}")
        lines.append(f"As uint256: {value.word.uint}")
        lines.append(f"As bool: {'true' if value.word.boolean else 'false'}")
        return "\n".join(lines)
    if value.truncated:
        return f"Raw bytes ({value.length} bytes, preview of first 64 bytes): {value.preview}"
    return f"Raw bytes ({value.length} bytes): {value.preview}"


# ---------------------------------------------------------------------------
# Structured results
# ---------------------------------------------------------------------------


def render_transaction(tx: TransactionView) -> str:
    lines = [
        f"Hash: {_or(tx.hash)}",
        f"Block Number: {_int_or(tx.block_number, PENDING)}",
        f"Block Hash: {_or(tx.block_hash, PENDING)}",
        f"Position in Block: {_or(tx.transaction_index, PENDING)}",
        f"From: {_or(tx.sender)}",
        f"To: {_or(tx.to, CONTRACT_CREATION)}",
        f"Value: {_with_wei(tx.value, format_eth)}",
        f"Gas: {_int_or(tx.gas)}",
        f"Gas Price: {_gwei_or(tx.gas_price)}",
        f"Max Fee Per Gas: {_gwei_or(tx.max_fee_per_gas)}",
        f"Max Priority Fee Per Gas: {_gwei_or(tx.max_priority_fee_per_gas)}",
        f"Nonce: {_or(tx.nonce)}",
        f"Type: {_or(tx.tx_type)}",
        f"Input Data: {tx.input}",
    ]
    return "\n".join(lines)


def _receipt_status(status: Optional[int]) -> str:
    if status is None:
        return NOT_AVAILABLE
    return "Success" if status == 1 else "Failed"


def render_receipt(rc: ReceiptView) -> str:
    lines = [
        f"Transaction Hash: {_or(rc.transaction_hash)}",
        f"Block Number: {_int_or(rc.block_number, PENDING)}",
        f"Block Hash: {_or(rc.block_hash, PENDING)}",
        f"Position in Block: {_or(rc.transaction_index, PENDING)}",
        f"From: {_or(rc.sender)}",
        f"To: {_or(rc.to, CONTRACT_CREATION)}",
        f"Contract Address: {_or(rc.contract_address)}",
        f"Status: {_receipt_status(rc.status)}",
        f"Gas Used: {_int_or(rc.gas_used)}",
        f"Cumulative Gas Used: {_int_or(rc.cumulative_gas_used)}",
        f"Effective Gas Price: {_gwei_or(rc.effective_gas_price)}",
        f"Type: {_or(rc.tx_type)}",
        f"Logs: {rc.log_count}",
    ]
    return "\n".join(lines)


def render_proof(proof: ProofView) -> str:
    lines = [
        f"Address: {_or(proof.address)}",
        f"Balance: {_with_wei(proof.balance, format_eth)}",
        f"Nonce: {proof.nonce}",
        f"Code Hash: {_or(proof.code_hash)}",
        f"Storage Hash: {_or(proof.storage_hash)}",
        f"Account Proof Nodes: {proof.account_proof_length}",
        f"Storage Proofs: {len(proof.storage_proofs)}",
    ]
    for entry in proof.storage_proofs:
        lines.append(f"  Key {entry.key}: value {format_int(entry.value)} ({entry.proof_length} proof nodes)")
    return "\n".join(lines)


def render_fee_history(history: FeeHistoryView) -> str:
    blocks = len(history.gas_used_ratio)
    lines = [
        f"Oldest Block: {format_int(history.oldest_block)}",
        f"Blocks: {blocks}",
    ]
    for i, ratio in enumerate(history.gas_used_ratio):
        base_fee = history.base_fee_per_gas[i] if i < len(history.base_fee_per_gas) else None
        line = f"Block {format_int(history.oldest_block + i)}: Base Fee {_gwei_or(base_fee)}, Gas Used {ratio * 100:.2f}%"
        if history.reward is not None and i < len(history.reward):
            rewards = "; ".join(_with_wei(r, format_gwei) for r in history.reward[i]) or NOT_AVAILABLE
            line += f", Priority Fees {rewards}"
        lines.append(line)
    if len(history.base_fee_per_gas) > blocks:
        lines.append(f"Next Block Base Fee: {_gwei_or(history.base_fee_per_gas[blocks])}")
    return "\n".join(lines)


def render_sync_status(status: SyncStatusView) -> str:
    lines = [
        "Sync in progress:",
        f"Starting Block: {_int_or(status.starting_block)}",
        f"Current Block: {_int_or(status.current_block)}",
        f"Highest Block: {_int_or(status.highest_block)}",
    ]
    if status.current_block is not None and status.highest_block is not None:
        lines.append(f"Remaining Blocks: {format_int(max(status.highest_block - status.current_block, 0))}")
    return "\n".join(lines)


def render_log(entry: LogView | str, label: str, position: int) -> str:
    header = f"{label} {position}:"
    if isinstance(entry, str):
        return f"{header}\nHash: {entry}"
    if entry.block_number is None:
        block = PENDING
    else:
        block = f"{format_int(entry.block_number)} ({hex(entry.block_number)})"
    lines = [
        header,
        f"Address: {_or(entry.address)}",
        f"Block: {block}",
        f"Transaction Hash: {_or(entry.transaction_hash, PENDING)}",
        f"Log Index: {_or(entry.log_index)}",
        f"Topics: {', '.join(entry.topics) if entry.topics else '(none)'}",
        f"Data: {entry.data}",
        f"Removed: {'true' if entry.removed else 'false'}",
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


def render_error(spec: MethodSpec, error: ErrorView, arguments: Optional[dict[str, Any]] = None) -> str:
    ctx = template_context(spec, arguments)
    lines = [f"Failed to {_fill(spec.action, ctx)}: {error.message or 'Unknown error'}"]
    if error.kind == "rpc" and error.code is not None:
        lines.append(f"RPC error code: {error.code}")
    if error.revert_hex:
        lines.append(f"Revert reason (hex): {error.revert_hex}")
    if error.revert_data:
        lines.append(f"Revert data: {error.revert_data}")
    return "\n".join(lines)


def render_validation_error(spec: MethodSpec, error: ValidationError) -> str:
    return f"Invalid input for {spec.tool_name}: {error.message}"


def render_unknown_tool(name: str) -> str:
    return f"Error: Tool '{name}' not found"


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def render(spec: MethodSpec, value: Normalized, arguments: Optional[dict[str, Any]] = None) -> list[str]:
    """
    Render a normalized result as MCP text blocks.

    Args:
        spec: Metadata of the tool that produced the value
        value: Output of ``decoding.normalize``
        arguments: The caller's arguments, used to fill templates

    Returns:
        One string for scalar and object results, one string per element for
        non-empty log arrays
    """
    ctx = template_context(spec, arguments)

    if isinstance(value, ErrorView):
        return [render_error(spec, value, arguments)]
    if isinstance(value, NotFound):
        return [_fill(spec.not_found_text, ctx)]
    if isinstance(value, LogArrayValue):
        if value.empty:
            return [_fill(spec.empty_text, ctx)]
        return [render_log(entry, spec.item_label, i) for i, entry in enumerate(value.entries, start=1)]
    if isinstance(value, BooleanValue):
        return [_fill(spec.true_text if value.value else spec.false_text, ctx)]
    if isinstance(value, SyncStatusView) and not value.syncing:
        return [_fill(spec.false_text, ctx)]

    if isinstance(value, QuantityValue):
        body = render_quantity(value, spec.unit)
    elif isinstance(value, AddressValue):
        body = value.address
    elif isinstance(value, BytesValue):
        body = render_bytes(value)
    elif isinstance(value, TransactionView):
        body = render_transaction(value)
    elif isinstance(value, ReceiptView):
        body = render_receipt(value)
    elif isinstance(value, ProofView):
        body = render_proof(value)
    elif isinstance(value, FeeHistoryView):
        body = render_fee_history(value)
    elif isinstance(value, SyncStatusView):
        body = render_sync_status(value)
    elif isinstance(value, RawValue):
        body = str(value.value)
    else:
        raise TypeError(f"Cannot render {type(value).__name__}")

    return [_fill(spec.template, ctx, value=body)]
