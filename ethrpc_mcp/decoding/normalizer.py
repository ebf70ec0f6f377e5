"""
Response normalization.

Turns a transport Outcome into one of the views in ``decoding.models``. Which
decoder runs is decided by the method's ResponseShape, never by inspecting
the payload type at runtime. Fields inside structured results are decoded one
by one; anything the node left out stays None so the formatter can print a
fixed placeholder for it.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from loguru import logger

from ethrpc_mcp.decoding import hexcodec
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
    StorageProofView,
    SyncStatusView,
    TransactionView,
)
from ethrpc_mcp.rpc.outcome import Outcome, RpcFailure, RpcOk, TransportFailure
from ethrpc_mcp.tools.method_spec import MethodSpec, ResponseShape
from ethrpc_mcp.utils.exceptions import DecodeError


def normalize(outcome: Outcome, spec: MethodSpec) -> Normalized:
    """Decode an outcome according to ``spec.response_shape``."""
    if isinstance(outcome, TransportFailure):
        return ErrorView(
            kind="transport",
            message=outcome.reason or "Unknown error",
            status_code=outcome.status_code,
        )
    if isinstance(outcome, RpcFailure):
        return normalize_rpc_error(outcome, revert_aware=spec.revert_aware)
    if isinstance(outcome, RpcOk):
        decoder = _DECODERS[spec.response_shape]
        return decoder(outcome.result)
    raise TypeError(f"Unsupported outcome: {outcome!r}")


def normalize_rpc_error(failure: RpcFailure, *, revert_aware: bool = False) -> ErrorView:
    """Pass the node's message through, extracting revert payloads when relevant."""
    message = failure.message or "Unknown error"
    revert_hex = None
    revert_data = None
    if revert_aware:
        revert_hex = hexcodec.extract_revert_hex(message)
        data = failure.data
        if hexcodec.is_hex(data) and len(data) > 2 and data != revert_hex:
            revert_data = data
    return ErrorView(
        kind="rpc",
        message=message,
        code=failure.code,
        revert_hex=revert_hex,
        revert_data=revert_data,
    )


def _expect_object(result: Any, shape: str) -> dict[str, Any]:
    if not isinstance(result, dict):
        raise DecodeError(f"Expected a JSON object for {shape}, got {type(result).__name__}", result)
    return result


def _string(obj: dict[str, Any], key: str) -> str | None:
    value = obj.get(key)
    return value if isinstance(value, str) and value else None


def _quantity_list(values: Any, name: str) -> tuple[int, ...]:
    if values is None:
        return ()
    if not isinstance(values, list):
        raise DecodeError(f"Expected a list for {name}", values)
    return tuple(hexcodec.parse_quantity(v) for v in values)


def decode_quantity(result: Any) -> QuantityValue:
    value = hexcodec.parse_quantity(result)
    return QuantityValue(value=value, raw=hexcodec.quantity_hex(result))


def decode_boolean(result: Any) -> BooleanValue:
    if isinstance(result, bool):
        return BooleanValue(result)
    if hexcodec.is_hex(result):
        return BooleanValue(hexcodec.decode_bool_word(result))
    raise DecodeError(f"Expected a boolean, got {result!r}", result)


def decode_address(result: Any) -> AddressValue | NotFound:
    if result is None:
        return NotFound()
    if hexcodec.is_hex(result):
        body = hexcodec.strip_0x(result)
        if len(body) == hexcodec.ADDRESS_HEX_CHARS:
            return AddressValue(result)
        if hexcodec.is_address_word(result):
            return AddressValue(hexcodec.word_to_address(result))
    raise DecodeError(f"Expected an address, got {result!r}", result)


def decode_bytes(result: Any) -> BytesValue:
    if result is None or result == "":
        return BytesValue(raw="0x", length=0)
    if not hexcodec.is_hex(result):
        raise DecodeError(f"Expected hex bytes, got {result!r}", result)
    length = hexcodec.byte_length(result)
    if length == 0:
        return BytesValue(raw="0x", length=0)
    if hexcodec.is_word(result):
        return BytesValue(raw=result, length=length, word=hexcodec.decode_word(result), preview=result)
    preview, truncated = hexcodec.bytes_preview(result)
    return BytesValue(raw=result, length=length, preview=preview, truncated=truncated)


def decode_transaction(result: Any) -> TransactionView | NotFound:
    if result is None:
        return NotFound()
    tx = _expect_object(result, "transaction")
    return TransactionView(
        hash=_string(tx, "hash"),
        block_number=hexcodec.parse_optional_quantity(tx.get("blockNumber")),
        block_hash=_string(tx, "blockHash"),
        transaction_index=hexcodec.parse_optional_quantity(tx.get("transactionIndex")),
        sender=_string(tx, "from"),
        to=_string(tx, "to"),
        value=hexcodec.parse_quantity(tx.get("value")),
        gas=hexcodec.parse_optional_quantity(tx.get("gas")),
        gas_price=hexcodec.parse_optional_quantity(tx.get("gasPrice")),
        max_fee_per_gas=hexcodec.parse_optional_quantity(tx.get("maxFeePerGas")),
        max_priority_fee_per_gas=hexcodec.parse_optional_quantity(tx.get("maxPriorityFeePerGas")),
        nonce=hexcodec.parse_optional_quantity(tx.get("nonce")),
        tx_type=_string(tx, "type"),
        input=_string(tx, "input") or "0x",
    )


def decode_receipt(result: Any) -> ReceiptView | NotFound:
    if result is None:
        return NotFound()
    rc = _expect_object(result, "receipt")
    logs = rc.get("logs")
    return ReceiptView(
        transaction_hash=_string(rc, "transactionHash"),
        block_number=hexcodec.parse_optional_quantity(rc.get("blockNumber")),
        block_hash=_string(rc, "blockHash"),
        transaction_index=hexcodec.parse_optional_quantity(rc.get("transactionIndex")),
        sender=_string(rc, "from"),
        to=_string(rc, "to"),
        contract_address=_string(rc, "contractAddress"),
        status=hexcodec.parse_optional_quantity(rc.get("status")),
        gas_used=hexcodec.parse_optional_quantity(rc.get("gasUsed")),
        cumulative_gas_used=hexcodec.parse_optional_quantity(rc.get("cumulativeGasUsed")),
        effective_gas_price=hexcodec.parse_optional_quantity(rc.get("effectiveGasPrice")),
        tx_type=_string(rc, "type"),
        log_count=len(logs) if isinstance(logs, list) else 0,
    )


def decode_proof(result: Any) -> ProofView | NotFound:
    if result is None:
        return NotFound()
    proof = _expect_object(result, "proof")
    storage = []
    for entry in proof.get("storageProof") or []:
        item = _expect_object(entry, "storage proof")
        storage.append(
            StorageProofView(
                key=str(item.get("key", "")),
                value=hexcodec.parse_quantity(item.get("value")),
                proof_length=len(item.get("proof") or []),
            )
        )
    return ProofView(
        address=_string(proof, "address"),
        balance=hexcodec.parse_quantity(proof.get("balance")),
        nonce=hexcodec.parse_quantity(proof.get("nonce")),
        code_hash=_string(proof, "codeHash"),
        storage_hash=_string(proof, "storageHash"),
        account_proof_length=len(proof.get("accountProof") or []),
        storage_proofs=tuple(storage),
    )


def decode_fee_history(result: Any) -> FeeHistoryView | NotFound:
    if result is None:
        return NotFound()
    history = _expect_object(result, "fee history")
    ratios = history.get("gasUsedRatio") or []
    if not isinstance(ratios, list) or not all(
        isinstance(r, (int, float)) and not isinstance(r, bool) for r in ratios
    ):
        raise DecodeError("Expected a list of numbers for gasUsedRatio", ratios)
    reward = history.get("reward")
    rewards = None
    if isinstance(reward, list):
        rewards = tuple(_quantity_list(row, "reward") for row in reward)
    return FeeHistoryView(
        oldest_block=hexcodec.parse_quantity(history.get("oldestBlock")),
        base_fee_per_gas=_quantity_list(history.get("baseFeePerGas"), "baseFeePerGas"),
        gas_used_ratio=tuple(float(r) for r in ratios),
        reward=rewards,
    )


def decode_sync_status(result: Any) -> SyncStatusView:
    if result is False or result is None:
        return SyncStatusView(syncing=False)
    status = _expect_object(result, "sync status")
    return SyncStatusView(
        syncing=True,
        starting_block=hexcodec.parse_optional_quantity(status.get("startingBlock")),
        current_block=hexcodec.parse_optional_quantity(status.get("currentBlock")),
        highest_block=hexcodec.parse_optional_quantity(status.get("highestBlock")),
    )


def decode_log(entry: Any) -> LogView | str:
    if isinstance(entry, str):
        return entry
    log = _expect_object(entry, "log")
    topics = log.get("topics") or []
    return LogView(
        address=_string(log, "address"),
        block_number=hexcodec.parse_optional_quantity(log.get("blockNumber")),
        transaction_hash=_string(log, "transactionHash"),
        log_index=hexcodec.parse_optional_quantity(log.get("logIndex")),
        topics=tuple(str(t) for t in topics),
        data=_string(log, "data") or "0x",
        removed=bool(log.get("removed", False)),
    )


def decode_log_array(result: Any) -> LogArrayValue:
    if result is None:
        return LogArrayValue()
    if not isinstance(result, list):
        raise DecodeError(f"Expected a JSON array of logs, got {type(result).__name__}", result)
    return LogArrayValue(entries=tuple(decode_log(entry) for entry in result))


def decode_raw(result: Any) -> RawValue | NotFound:
    if result is None:
        return NotFound()
    if isinstance(result, str):
        return RawValue(result)
    logger.debug("Raw result is not a string; rendering as JSON")
    return RawValue(json.dumps(result, indent=2, sort_keys=True))


_DECODERS: dict[ResponseShape, Callable[[Any], Normalized]] = {
    ResponseShape.QUANTITY: decode_quantity,
    ResponseShape.BOOLEAN: decode_boolean,
    ResponseShape.ADDRESS: decode_address,
    ResponseShape.BYTES: decode_bytes,
    ResponseShape.TRANSACTION: decode_transaction,
    ResponseShape.RECEIPT: decode_receipt,
    ResponseShape.PROOF: decode_proof,
    ResponseShape.FEE_HISTORY: decode_fee_history,
    ResponseShape.SYNC_STATUS: decode_sync_status,
    ResponseShape.LOG_ARRAY: decode_log_array,
    ResponseShape.RAW: decode_raw,
}
