"""Normalized, rendering-ready views of node results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Union

from ethrpc_mcp.decoding.hexcodec import WordDecoding


@dataclass(frozen=True)
class QuantityValue:
    value: int
    raw: str


@dataclass(frozen=True)
class BooleanValue:
    value: bool


@dataclass(frozen=True)
class AddressValue:
    address: str


@dataclass(frozen=True)
class BytesValue:
    """An opaque hex byte string with whatever structure could be guessed."""

    raw: str
    length: int
    word: Optional[WordDecoding] = None
    preview: str = ""
    truncated: bool = False

    @property
    def empty(self) -> bool:
        return self.length == 0


@dataclass(frozen=True)
class TransactionView:
    hash: Optional[str]
    block_number: Optional[int]
    block_hash: Optional[str]
    transaction_index: Optional[int]
    sender: Optional[str]
    to: Optional[str]
    value: int
    gas: Optional[int]
    gas_price: Optional[int]
    max_fee_per_gas: Optional[int]
    max_priority_fee_per_gas: Optional[int]
    nonce: Optional[int]
    tx_type: Optional[str]
    input: str


@dataclass(frozen=True)
class ReceiptView:
    transaction_hash: Optional[str]
    block_number: Optional[int]
    block_hash: Optional[str]
    transaction_index: Optional[int]
    sender: Optional[str]
    to: Optional[str]
    contract_address: Optional[str]
    status: Optional[int]
    gas_used: Optional[int]
    cumulative_gas_used: Optional[int]
    effective_gas_price: Optional[int]
    tx_type: Optional[str]
    log_count: int


@dataclass(frozen=True)
class StorageProofView:
    key: str
    value: int
    proof_length: int


@dataclass(frozen=True)
class ProofView:
    address: Optional[str]
    balance: int
    nonce: int
    code_hash: Optional[str]
    storage_hash: Optional[str]
    account_proof_length: int
    storage_proofs: tuple[StorageProofView, ...] = ()


@dataclass(frozen=True)
class FeeHistoryView:
    oldest_block: int
    base_fee_per_gas: tuple[int, ...]
    gas_used_ratio: tuple[float, ...]
    reward: Optional[tuple[tuple[int, ...], ...]] = None


@dataclass(frozen=True)
class SyncStatusView:
    syncing: bool
    starting_block: Optional[int] = None
    current_block: Optional[int] = None
    highest_block: Optional[int] = None


@dataclass(frozen=True)
class LogView:
    address: Optional[str]
    block_number: Optional[int]
    transaction_hash: Optional[str]
    log_index: Optional[int]
    topics: tuple[str, ...]
    data: str
    removed: bool = False


@dataclass(frozen=True)
class LogArrayValue:
    """Logs, or bare block/transaction hashes for non-log filters."""

    entries: tuple[Union[LogView, str], ...] = field(default_factory=tuple)

    @property
    def empty(self) -> bool:
        return not self.entries


@dataclass(frozen=True)
class RawValue:
    value: Any


@dataclass(frozen=True)
class NotFound:
    """The node answered ``null`` for a lookup."""


@dataclass(frozen=True)
class ErrorView:
    kind: Literal["rpc", "transport"]
    message: str
    code: Optional[int] = None
    status_code: Optional[int] = None
    revert_hex: Optional[str] = None
    revert_data: Optional[str] = None


Normalized = Union[
    QuantityValue,
    BooleanValue,
    AddressValue,
    BytesValue,
    TransactionView,
    ReceiptView,
    ProofView,
    FeeHistoryView,
    SyncStatusView,
    LogArrayValue,
    RawValue,
    NotFound,
    ErrorView,
]
