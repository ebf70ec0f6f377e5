"""Tests for ethrpc_mcp.validation.fields."""

import pytest

from ethrpc_mcp.utils.exceptions import ValidationError
from ethrpc_mcp.validation.fields import (
    HEX_OR_EMPTY_PATTERN,
    STATE_BLOCK_TAGS,
    AnyOf,
    ArrayOf,
    BlockSelector,
    HexString,
    NonEmptyString,
    NumberInRange,
    OptionalField,
    Param,
    ParamGroup,
    check_arguments,
    input_schema,
    validate_arguments,
)

ADDRESS = "0x" + "ab" * 20


# ---- primitives ----
def test_hex_string_fixed_length() -> None:
    assert HexString(20).validate(ADDRESS, "address") == ADDRESS
    with pytest.raises(ValidationError) as exc:
        HexString(20).validate("0x1234", "address")
    assert exc.value.field == "address"
    assert "42 characters" in exc.value.message
    assert "'0x1234'" in exc.value.message


def test_hex_string_requires_prefix_and_digits() -> None:
    with pytest.raises(ValidationError):
        HexString().validate("ab" * 20, "data")
    with pytest.raises(ValidationError):
        HexString().validate("0xzz", "data")
    with pytest.raises(ValidationError):
        HexString().validate("0x", "data")
    assert HexString(pattern=HEX_OR_EMPTY_PATTERN).validate("0x", "data") == "0x"


def test_block_selector_tags_and_numbers() -> None:
    selector = BlockSelector()
    assert selector.validate("latest", "block") == "latest"
    assert selector.validate("0x1b4", "block") == "0x1b4"
    assert selector.validate(436, "block") == "0x1b4"
    with pytest.raises(ValidationError):
        selector.validate("safe", "block")
    with pytest.raises(ValidationError):
        selector.validate(-1, "block")
    with pytest.raises(ValidationError):
        selector.validate(True, "block")
    assert BlockSelector(STATE_BLOCK_TAGS).validate("finalized", "block") == "finalized"


def test_number_in_range_bounds_and_coercion() -> None:
    count = NumberInRange(1, 1024, as_hex=True)
    assert count.validate(4, "blockCount") == "0x4"
    assert count.validate("4", "blockCount") == "0x4"
    assert count.validate("0x400", "blockCount") == "0x400"
    for bad in (0, 1025, "many", 2.5, False):
        with pytest.raises(ValidationError):
            count.validate(bad, "blockCount")
    assert NumberInRange(0, 100, integer=False).validate(12.5, "p") == 12.5


def test_array_of_increasing() -> None:
    percentiles = ArrayOf(NumberInRange(0, 100, integer=False), increasing=True)
    assert percentiles.validate([10, 50, 90], "p") == [10, 50, 90]
    with pytest.raises(ValidationError):
        percentiles.validate([50, 10], "p")
    with pytest.raises(ValidationError) as exc:
        ArrayOf(HexString(32)).validate(["0x12"], "topics")
    assert exc.value.field == "topics[0]"


def test_any_of_with_null() -> None:
    topic = AnyOf(HexString(32), ArrayOf(HexString(32)), allow_null=True)
    word = "0x" + "00" * 32
    assert topic.validate(None, "t") is None
    assert topic.validate(word, "t") == word
    assert topic.validate([word, word], "t") == [word, word]
    with pytest.raises(ValidationError):
        topic.validate(42, "t")


def test_non_empty_string() -> None:
    assert NonEmptyString().validate("0x1", "filterId") == "0x1"
    with pytest.raises(ValidationError):
        NonEmptyString().validate("  ", "filterId")


# ---- argument lists ----
def test_validate_arguments_applies_defaults() -> None:
    entries = [Param("address", HexString(20)), Param("blockNumber", OptionalField(BlockSelector(), "latest"))]
    assert validate_arguments(entries, {"address": ADDRESS}) == [ADDRESS, "latest"]
    assert validate_arguments(entries, {"address": ADDRESS, "blockNumber": None}) == [ADDRESS, "latest"]


def test_validate_arguments_missing_required_names_field() -> None:
    entries = [Param("address", HexString(20))]
    with pytest.raises(ValidationError) as exc:
        validate_arguments(entries, {})
    assert exc.value.message.startswith("Missing required parameter 'address'")


def test_validate_arguments_drops_trailing_omitted_only() -> None:
    entries = [
        Param("a", OptionalField(HexString())),
        Param("b", OptionalField(HexString())),
    ]
    assert validate_arguments(entries, {}) == []
    assert validate_arguments(entries, {"b": "0x1"}) == [None, "0x1"]


def test_validate_arguments_rejects_non_object() -> None:
    with pytest.raises(ValidationError):
        validate_arguments([], ["not", "a", "dict"])  # type: ignore[arg-type]


def test_param_group_builds_object_and_omits_unset() -> None:
    group = ParamGroup(
        (
            Param("fromBlock", OptionalField(BlockSelector(), "latest")),
            Param("address", HexString(20)),
            Param("topics", OptionalField(ArrayOf(HexString(32)))),
        )
    )
    assert validate_arguments([group], {"address": ADDRESS, "unknown": 1}) == [
        {"fromBlock": "latest", "address": ADDRESS}
    ]


def test_check_arguments_returns_coerced_values_by_name() -> None:
    group = ParamGroup((Param("to", HexString(20)), Param("value", OptionalField(NumberInRange(0, 2**256, as_hex=True)))))
    entries = [group, Param("blockNumber", OptionalField(BlockSelector(), "latest"))]
    params, values = check_arguments(entries, {"to": ADDRESS, "value": 255, "blockNumber": 16})
    assert params == [{"to": ADDRESS, "value": "0xff"}, "0x10"]
    assert values == {"to": ADDRESS, "value": "0xff", "blockNumber": "0x10"}

    _, values = check_arguments(entries, {"to": ADDRESS})
    assert values == {"to": ADDRESS, "blockNumber": "latest"}


def test_input_schema_flattens_groups() -> None:
    group = ParamGroup((Param("to", HexString(20), "target"), Param("data", OptionalField(HexString()))))
    schema = input_schema([group, Param("blockNumber", OptionalField(BlockSelector(), "latest"))])
    assert schema["type"] == "object"
    assert list(schema["properties"]) == ["to", "data", "blockNumber"]
    assert schema["required"] == ["to"]
    assert schema["properties"]["to"]["description"] == "target"
    assert schema["properties"]["blockNumber"]["default"] == "latest"
