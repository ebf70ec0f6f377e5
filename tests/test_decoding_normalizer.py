"""Tests for ethrpc_mcp.decoding.normalizer."""

import pytest

from ethrpc_mcp.decoding.models import (
    AddressValue,
    BooleanValue,
    BytesValue,
    ErrorView,
    FeeHistoryView,
    LogArrayValue,
    LogView,
    NotFound,
    ProofView,
    QuantityValue,
    RawValue,
    SyncStatusView,
    TransactionView,
)
from ethrpc_mcp.decoding.normalizer import normalize
from ethrpc_mcp.rpc.outcome import RpcFailure, RpcOk, TransportFailure
from ethrpc_mcp.tools.catalog import METHOD_SPECS
from ethrpc_mcp.utils.exceptions import DecodeError

TX_HASH = "0x" + "11" * 32
ADDRESS = "0x" + "ab" * 20


def _spec(name: str):
    return METHOD_SPECS[name]


def test_quantity_zero_and_missing() -> None:
    assert normalize(RpcOk("0x0"), _spec("get-balance")) == QuantityValue(0, "0x0")
    assert normalize(RpcOk(None), _spec("get-balance")) == QuantityValue(0, "0x0")
    assert normalize(RpcOk("0x1b4"), _spec("get-block-number")) == QuantityValue(436, "0x1b4")


def test_boolean_from_json_and_word() -> None:
    assert normalize(RpcOk(True), _spec("uninstall-filter")) == BooleanValue(True)
    assert normalize(RpcOk(False), _spec("submit-proof-of-work")) == BooleanValue(False)
    assert normalize(RpcOk("0x" + "0" * 63 + "1"), _spec("get-mining-status")) == BooleanValue(True)
    with pytest.raises(DecodeError):
        normalize(RpcOk(None), _spec("get-mining-status"))


def test_address_plain_and_word() -> None:
    assert normalize(RpcOk(ADDRESS), _spec("get-coinbase")) == AddressValue(ADDRESS)
    word = "0x" + "0" * 24 + "ab" * 20
    assert normalize(RpcOk(word), _spec("get-coinbase")) == AddressValue(ADDRESS)
    assert normalize(RpcOk(None), _spec("get-coinbase")) == NotFound()


def test_bytes_empty_word_and_blob() -> None:
    spec = _spec("call-contract")
    assert normalize(RpcOk("0x"), spec).empty
    assert normalize(RpcOk(None), spec).empty

    word = normalize(RpcOk("0x" + "0" * 63 + "1"), spec)
    assert isinstance(word, BytesValue)
    assert word.word is not None and word.word.boolean is True

    blob = normalize(RpcOk("0x" + "ab" * 100), spec)
    assert blob.length == 100
    assert blob.truncated is True
    assert blob.word is None


def test_transaction_missing_fields_stay_none() -> None:
    view = normalize(
        RpcOk({"hash": TX_HASH, "from": ADDRESS, "to": None, "value": "0x0", "nonce": "0x0", "gas": "0x0"}),
        _spec("get-transaction"),
    )
    assert isinstance(view, TransactionView)
    assert view.block_number is None
    assert view.to is None
    assert view.value == 0
    assert view.nonce == 0
    assert view.gas == 0
    assert view.gas_price is None
    assert view.input == "0x"


def test_transaction_not_found() -> None:
    assert normalize(RpcOk(None), _spec("get-transaction")) == NotFound()


def test_transaction_rejects_non_object() -> None:
    with pytest.raises(DecodeError):
        normalize(RpcOk("0x1"), _spec("get-transaction"))


def test_proof_counts() -> None:
    view = normalize(
        RpcOk(
            {
                "address": ADDRESS,
                "balance": "0xde0b6b3a7640000",
                "nonce": "0x1",
                "codeHash": TX_HASH,
                "storageHash": TX_HASH,
                "accountProof": ["0x01", "0x02"],
                "storageProof": [{"key": "0x0", "value": "0x5", "proof": ["0x03"]}],
            }
        ),
        _spec("get-proof"),
    )
    assert isinstance(view, ProofView)
    assert view.balance == 10**18
    assert view.account_proof_length == 2
    assert view.storage_proofs[0].value == 5
    assert view.storage_proofs[0].proof_length == 1


def test_fee_history() -> None:
    view = normalize(
        RpcOk(
            {
                "oldestBlock": "0x10",
                "baseFeePerGas": ["0x3b9aca00", "0x77359400"],
                "gasUsedRatio": [0.5],
                "reward": [["0x1", "0x2"]],
            }
        ),
        _spec("get-fee-history"),
    )
    assert view == FeeHistoryView(16, (10**9, 2 * 10**9), (0.5,), ((1, 2),))


def test_sync_status() -> None:
    assert normalize(RpcOk(False), _spec("get-sync-status")) == SyncStatusView(False)
    view = normalize(
        RpcOk({"startingBlock": "0x0", "currentBlock": "0x10", "highestBlock": "0x20"}),
        _spec("get-sync-status"),
    )
    assert view == SyncStatusView(True, 0, 16, 32)


def test_log_array_logs_hashes_and_empty() -> None:
    spec = _spec("get-filter-changes")
    assert normalize(RpcOk([]), spec) == LogArrayValue()
    assert normalize(RpcOk(None), spec).empty

    value = normalize(
        RpcOk([TX_HASH, {"address": ADDRESS, "blockNumber": "0x1", "topics": [TX_HASH], "data": "0x"}]),
        spec,
    )
    assert value.entries[0] == TX_HASH
    log = value.entries[1]
    assert isinstance(log, LogView)
    assert log.block_number == 1
    assert log.topics == (TX_HASH,)


def test_raw_passthrough() -> None:
    assert normalize(RpcOk("Geth/v1.13"), _spec("get-client-version")) == RawValue("Geth/v1.13")
    assert normalize(RpcOk(1), _spec("get-network-id")) == RawValue("1")


def test_rpc_error_revert_extraction_only_when_revert_aware() -> None:
    failure = RpcFailure(3, "execution reverted: 0xdeadbeef", data="0x08c379a0")
    view = normalize(failure, _spec("call-contract"))
    assert view == ErrorView(
        kind="rpc",
        message="execution reverted: 0xdeadbeef",
        code=3,
        revert_hex="0xdeadbeef",
        revert_data="0x08c379a0",
    )
    plain = normalize(failure, _spec("get-balance"))
    assert plain.revert_hex is None
    assert plain.revert_data is None


def test_transport_failure() -> None:
    view = normalize(TransportFailure("HTTP error! status: 500", 500), _spec("get-balance"))
    assert view == ErrorView(kind="transport", message="HTTP error! status: 500", status_code=500)
    assert normalize(TransportFailure(""), _spec("get-balance")).message == "Unknown error"
