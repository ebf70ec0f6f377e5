"""Tool argument validation."""

from ethrpc_mcp.validation.fields import (
    AnyOf,
    ArrayOf,
    BlockSelector,
    FieldValidator,
    HexString,
    NonEmptyString,
    NumberInRange,
    ObjectOf,
    OptionalField,
    Param,
    ParamGroup,
    check_arguments,
    input_schema,
    validate_arguments,
)

__all__ = [
    "AnyOf",
    "ArrayOf",
    "BlockSelector",
    "FieldValidator",
    "HexString",
    "NonEmptyString",
    "NumberInRange",
    "ObjectOf",
    "OptionalField",
    "Param",
    "ParamGroup",
    "check_arguments",
    "input_schema",
    "validate_arguments",
]
