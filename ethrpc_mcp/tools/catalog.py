"""
Tool catalog.

One MethodSpec per exposed tool. The table is built once at import and is
read-only; adding a tool means adding an entry here, not writing a handler.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from ethrpc_mcp.tools.method_spec import MethodSpec, QuantityUnit, ResponseShape
from ethrpc_mcp.validation.fields import (
    HEX_OR_EMPTY_PATTERN,
    STATE_BLOCK_TAGS,
    AnyOf,
    ArrayOf,
    BlockSelector,
    FieldValidator,
    HexString,
    NonEmptyString,
    NumberInRange,
    OptionalField,
    Param,
    ParamGroup,
)

UINT256_MAX = 2**256 - 1
FEE_HISTORY_MAX_BLOCKS = 1024
FILTER_REQUEST_ID = 67

BLOCK_HELP = 'Block number (hex) or tag: "latest", "earliest", "pending", "safe", "finalized"'


def _address(name: str = "address", description: str = "Ethereum address (0x followed by 40 hex characters)") -> Param:
    return Param(name, HexString(20), description)


def _hash(name: str, description: str) -> Param:
    return Param(name, HexString(32), description)


def _block(name: str = "blockNumber", description: str = BLOCK_HELP) -> Param:
    return Param(name, OptionalField(BlockSelector(STATE_BLOCK_TAGS), default="latest"), description)


def _quantity() -> FieldValidator:
    validator = AnyOf(HexString(), NumberInRange(0, UINT256_MAX, as_hex=True))
    validator.expected = "hex quantity or non-negative integer"
    return validator


def _topics() -> FieldValidator:
    topic = AnyOf(HexString(32), ArrayOf(HexString(32)), allow_null=True)
    return OptionalField(ArrayOf(topic))


def _filter_fields(address_required: bool) -> ParamGroup:
    address = HexString(20) if address_required else OptionalField(HexString(20))
    return ParamGroup(
        (
            Param("fromBlock", OptionalField(BlockSelector(), default="latest"), 'Start block (e.g. "earliest", "latest", or hex block number)'),
            Param("toBlock", OptionalField(BlockSelector(), default="latest"), 'End block (e.g. "latest", or hex block number)'),
            Param("address", address, "Contract address to get logs from"),
            Param("topics", _topics(), "Ordered topics; each entry may be null, a topic, or a list of alternatives"),
        )
    )


def _call_fields(to_required: bool) -> ParamGroup:
    to = HexString(20) if to_required else OptionalField(HexString(20))
    return ParamGroup(
        (
            Param("to", to, "Contract address to call"),
            Param("from", OptionalField(HexString(20)), "Sender address"),
            Param("data", OptionalField(HexString(pattern=HEX_OR_EMPTY_PATTERN)), "ABI-encoded call data"),
            Param("value", OptionalField(_quantity()), "Value to send, in wei"),
            Param("gas", OptionalField(_quantity()), "Gas limit"),
            Param("gasPrice", OptionalField(_quantity()), "Gas price, in wei"),
        )
    )


_TRANSACTION_INDEX = Param(
    "transactionIndex",
    AnyOf(HexString(), NumberInRange(0, 0xFFFFFFFF, as_hex=True)),
    "Transaction index position in the block (hex string or integer)",
)

_FILTER_ID = Param("filterId", NonEmptyString(), "Filter ID returned by a filter creation tool")


_SPECS: tuple[MethodSpec, ...] = (
    # -- Account state ------------------------------------------------------
    MethodSpec(
        tool_name="get-balance",
        rpc_method="eth_getBalance",
        description="Get the ETH balance of a given account address in wei",
        action="retrieve balance",
        response_shape=ResponseShape.QUANTITY,
        unit=QuantityUnit.ETH,
        params=(_address(), _block()),
        template='ETH balance for {address} at block "{blockNumber}":\n{value}',
    ),
    MethodSpec(
        tool_name="get-transaction-count",
        rpc_method="eth_getTransactionCount",
        description="Get the number of transactions sent from an address (its nonce)",
        action="retrieve transaction count",
        response_shape=ResponseShape.QUANTITY,
        params=(_address(), _block()),
        template='Transaction count for {address} at block "{blockNumber}": {value}',
    ),
    MethodSpec(
        tool_name="get-code",
        rpc_method="eth_getCode",
        description="Get the contract bytecode deployed at an address",
        action="retrieve code",
        response_shape=ResponseShape.BYTES,
        params=(_address(), _block()),
        template='Code at {address} (block "{blockNumber}"):\n{value}',
    ),
    MethodSpec(
        tool_name="get-storage-at",
        rpc_method="eth_getStorageAt",
        description="Get the value of a contract storage slot",
        action="retrieve storage",
        response_shape=ResponseShape.BYTES,
        params=(
            _address(),
            Param("position", _quantity(), "Storage slot index (hex or integer)"),
            _block(),
        ),
        template='Storage slot {position} of {address} (block "{blockNumber}"):\n{value}',
    ),
    MethodSpec(
        tool_name="get-proof",
        rpc_method="eth_getProof",
        description="Get the Merkle proof of an account and, optionally, some of its storage slots",
        action="retrieve proof",
        response_shape=ResponseShape.PROOF,
        params=(
            _address(),
            Param("storageKeys", OptionalField(ArrayOf(HexString(32)), default=[]), "Storage slots to prove (32-byte hex)"),
            _block(),
        ),
        template='Account proof for {address} at block "{blockNumber}":\n{value}',
        not_found_text="No proof returned for {address}.",
    ),
    # -- Chain state --------------------------------------------------------
    MethodSpec(
        tool_name="get-block-number",
        rpc_method="eth_blockNumber",
        description="Get the latest block number",
        action="retrieve latest block",
        response_shape=ResponseShape.QUANTITY,
        template="Latest block number: {value}",
    ),
    MethodSpec(
        tool_name="get-gas-price",
        rpc_method="eth_gasPrice",
        description="Get the latest gas price",
        action="retrieve latest gas price",
        response_shape=ResponseShape.QUANTITY,
        unit=QuantityUnit.GWEI,
        template="Latest gas price: {value}",
    ),
    MethodSpec(
        tool_name="get-max-priority-fee",
        rpc_method="eth_maxPriorityFeePerGas",
        description="Get the suggested max priority fee per gas (EIP-1559 tip)",
        action="retrieve max priority fee",
        response_shape=ResponseShape.QUANTITY,
        unit=QuantityUnit.GWEI,
        template="Suggested max priority fee per gas: {value}",
    ),
    MethodSpec(
        tool_name="get-fee-history",
        rpc_method="eth_feeHistory",
        description="Get base fees, gas usage ratios and priority fee percentiles for a range of blocks",
        action="retrieve fee history",
        response_shape=ResponseShape.FEE_HISTORY,
        params=(
            Param(
                "blockCount",
                NumberInRange(1, FEE_HISTORY_MAX_BLOCKS, as_hex=True),
                f"Number of blocks to include (1-{FEE_HISTORY_MAX_BLOCKS})",
            ),
            _block("newestBlock", "Newest block of the range (hex or tag)"),
            Param(
                "rewardPercentiles",
                OptionalField(ArrayOf(NumberInRange(0, 100, integer=False), increasing=True), default=[]),
                "Increasing percentiles (0-100) of priority fees to sample per block",
            ),
        ),
        template='Fee history for {blockCount} block(s) ending at "{newestBlock}":\n{value}',
        not_found_text="No fee history returned.",
    ),
    MethodSpec(
        tool_name="get-chain-id",
        rpc_method="eth_chainId",
        description="Get the chain ID used for transaction signing",
        action="retrieve chain ID",
        response_shape=ResponseShape.QUANTITY,
        template="Chain ID: {value}",
    ),
    MethodSpec(
        tool_name="get-sync-status",
        rpc_method="eth_syncing",
        description="Get the node's synchronization status",
        action="retrieve sync status",
        response_shape=ResponseShape.SYNC_STATUS,
        false_text="Node is not syncing.",
    ),
    # -- Transactions -------------------------------------------------------
    MethodSpec(
        tool_name="get-transaction",
        rpc_method="eth_getTransactionByHash",
        description="Get transaction details by hash",
        action="fetch transaction",
        response_shape=ResponseShape.TRANSACTION,
        params=(_hash("transactionHash", "Ethereum transaction hash (0x followed by 64 hex characters)"),),
        template="Transaction Details:\n{value}",
        not_found_text="Transaction not found",
    ),
    MethodSpec(
        tool_name="get-transaction-by-block",
        rpc_method="eth_getTransactionByBlockHashAndIndex",
        description="Get transaction by block hash and index",
        action="fetch transaction",
        response_shape=ResponseShape.TRANSACTION,
        params=(
            _hash("blockHash", "Ethereum block hash (0x followed by 64 hex characters)"),
            _TRANSACTION_INDEX,
        ),
        template="Transaction Details:\n{value}",
        not_found_text="Transaction not found at specified block position",
    ),
    MethodSpec(
        tool_name="get-transaction-by-block-number",
        rpc_method="eth_getTransactionByBlockNumberAndIndex",
        description="Get transaction by block number and index",
        action="fetch transaction",
        response_shape=ResponseShape.TRANSACTION,
        params=(
            Param("blockNumber", BlockSelector(STATE_BLOCK_TAGS), BLOCK_HELP),
            _TRANSACTION_INDEX,
        ),
        template="Transaction Details:\n{value}",
        not_found_text="Transaction not found at specified block position",
    ),
    MethodSpec(
        tool_name="get-transaction-receipt",
        rpc_method="eth_getTransactionReceipt",
        description="Get the receipt of a mined transaction",
        action="fetch transaction receipt",
        response_shape=ResponseShape.RECEIPT,
        params=(_hash("transactionHash", "Ethereum transaction hash (0x followed by 64 hex characters)"),),
        template="Transaction Receipt:\n{value}",
        not_found_text="Transaction receipt not found (unknown or still pending)",
    ),
    MethodSpec(
        tool_name="send-raw-transaction",
        rpc_method="eth_sendRawTransaction",
        description="Submit a signed, RLP-encoded transaction to the network",
        action="send raw transaction",
        response_shape=ResponseShape.RAW,
        params=(Param("signedTransaction", HexString(), "Signed transaction data (0x-prefixed hex)"),),
        template="Transaction submitted. Hash: {value}",
    ),
    MethodSpec(
        tool_name="call-contract",
        rpc_method="eth_call",
        description="Execute a read-only contract call without creating a transaction",
        action="call contract",
        response_shape=ResponseShape.BYTES,
        revert_aware=True,
        params=(_call_fields(to_required=True), _block()),
        template='Call result from {to} at block "{blockNumber}":\n{value}',
    ),
    MethodSpec(
        tool_name="estimate-gas",
        rpc_method="eth_estimateGas",
        description="Estimate the gas a transaction would use",
        action="estimate gas",
        response_shape=ResponseShape.QUANTITY,
        revert_aware=True,
        params=(
            _call_fields(to_required=False),
            Param("blockNumber", OptionalField(BlockSelector(STATE_BLOCK_TAGS)), BLOCK_HELP),
        ),
        template="Estimated gas: {value}",
    ),
    # -- Logs and filters ---------------------------------------------------
    MethodSpec(
        tool_name="get-logs",
        rpc_method="eth_getLogs",
        description="Fetch logs for a contract within a given block range",
        action="fetch logs",
        response_shape=ResponseShape.LOG_ARRAY,
        params=(_filter_fields(address_required=True),),
        empty_text="No logs found for address {address} from block {fromBlock} to {toBlock}.",
    ),
    MethodSpec(
        tool_name="get-new-filter",
        rpc_method="eth_newFilter",
        description="Creates a log filter for tracking state changes",
        action="create filter",
        response_shape=ResponseShape.RAW,
        params=(_filter_fields(address_required=True),),
        template="Filter ID: {value}",
    ),
    MethodSpec(
        tool_name="get-new-block-filter",
        rpc_method="eth_newBlockFilter",
        description="Creates a filter to detect new block arrivals.",
        action="create block filter",
        response_shape=ResponseShape.RAW,
        request_id=FILTER_REQUEST_ID,
        template="New block filter created.\nFilter ID: {value}",
    ),
    MethodSpec(
        tool_name="get-new-pending-tran-filter",
        rpc_method="eth_newPendingTransactionFilter",
        description="Creates a filter to detect new pending transactions.",
        action="create new pending transaction filter",
        response_shape=ResponseShape.RAW,
        request_id=FILTER_REQUEST_ID,
        template="New pending transaction filter created.\nFilter ID: {value}",
    ),
    MethodSpec(
        tool_name="get-filter-changes",
        rpc_method="eth_getFilterChanges",
        description="Polls a filter to get new logs, block hashes, or transaction hashes since the last check.",
        action="get filter changes",
        response_shape=ResponseShape.LOG_ARRAY,
        params=(_FILTER_ID,),
        empty_text="No changes found for filter ID {filterId}.",
        item_label="Change",
    ),
    MethodSpec(
        tool_name="get-filter-logs",
        rpc_method="eth_getFilterLogs",
        description="Polls a filter to get all logs matching the filter ID.",
        action="get logs for filter ID {filterId}",
        response_shape=ResponseShape.LOG_ARRAY,
        params=(_FILTER_ID,),
        empty_text="No logs found for filter ID {filterId}.",
    ),
    MethodSpec(
        tool_name="uninstall-filter",
        rpc_method="eth_uninstallFilter",
        description="Uninstalls a filter with the given filter ID.",
        action="uninstall filter ID {filterId}",
        response_shape=ResponseShape.BOOLEAN,
        params=(_FILTER_ID,),
        true_text="Successfully uninstalled filter ID {filterId}.",
        false_text="Failed to uninstall filter ID {filterId}.",
    ),
    # -- Mining and node ----------------------------------------------------
    MethodSpec(
        tool_name="submit-proof-of-work",
        rpc_method="eth_submitWork",
        description="Submits a proof-of-work solution to the network.",
        action="submit PoW solution",
        response_shape=ResponseShape.BOOLEAN,
        params=(
            Param("nonce", HexString(8), "The nonce found during mining (8 bytes)"),
            _hash("hash", "The header's PoW hash"),
            _hash("digest", "The mix digest"),
        ),
        true_text="Successfully submitted PoW solution.",
        false_text="Failed to submit PoW solution. Invalid solution.",
    ),
    MethodSpec(
        tool_name="get-mining-status",
        rpc_method="eth_mining",
        description="Check whether the node is mining",
        action="retrieve mining status",
        response_shape=ResponseShape.BOOLEAN,
        true_text="Node is mining.",
        false_text="Node is not mining.",
    ),
    MethodSpec(
        tool_name="get-hashrate",
        rpc_method="eth_hashrate",
        description="Get the node's mining hashrate",
        action="retrieve hashrate",
        response_shape=ResponseShape.QUANTITY,
        unit=QuantityUnit.HASHRATE,
        template="Hashrate: {value}",
    ),
    MethodSpec(
        tool_name="get-coinbase",
        rpc_method="eth_coinbase",
        description="Get the node's coinbase (mining reward) address",
        action="retrieve coinbase address",
        response_shape=ResponseShape.ADDRESS,
        template="Coinbase address: {value}",
        not_found_text="Node has no coinbase address configured.",
    ),
    MethodSpec(
        tool_name="get-client-version",
        rpc_method="web3_clientVersion",
        description="Fetches the current version of the Ethereum client.",
        action="fetch client version",
        response_shape=ResponseShape.RAW,
        template="Current Ethereum client version: {value}",
    ),
    MethodSpec(
        tool_name="get-sha3-hash",
        rpc_method="web3_sha3",
        description="Generates a Keccak-256 (SHA3) hash of the given hexadecimal data.",
        action="compute SHA3 hash",
        response_shape=ResponseShape.RAW,
        params=(
            Param(
                "data",
                HexString(pattern=HEX_OR_EMPTY_PATTERN),
                "The data in hexadecimal form to convert into a SHA3 hash",
            ),
        ),
        template="SHA3 (Keccak-256) hash of the provided data: {value}",
    ),
    MethodSpec(
        tool_name="get-network-id",
        rpc_method="net_version",
        description="Get the network ID",
        action="retrieve network ID",
        response_shape=ResponseShape.RAW,
        template="Network ID: {value}",
    ),
    MethodSpec(
        tool_name="get-listening-status",
        rpc_method="net_listening",
        description="Check whether the node is listening for network connections",
        action="retrieve listening status",
        response_shape=ResponseShape.BOOLEAN,
        true_text="Node is listening for network connections.",
        false_text="Node is not listening for network connections.",
    ),
    MethodSpec(
        tool_name="get-peer-count",
        rpc_method="net_peerCount",
        description="Get the number of peers connected to the node",
        action="retrieve peer count",
        response_shape=ResponseShape.QUANTITY,
        template="Connected peers: {value}",
    ),
)


def _index(specs: tuple[MethodSpec, ...]) -> Mapping[str, MethodSpec]:
    table: dict[str, MethodSpec] = {}
    for spec in specs:
        if spec.tool_name in table:
            raise ValueError(f"Duplicate tool name: {spec.tool_name}")
        table[spec.tool_name] = spec
    return MappingProxyType(table)


METHOD_SPECS: Mapping[str, MethodSpec] = _index(_SPECS)
