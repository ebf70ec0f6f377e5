"""
Field validators for tool arguments.

Each validator checks one caller-supplied value, returns the value to put on
the wire, and describes itself as a JSON-schema fragment for the tool's
``inputSchema``. Validators compose: ``OptionalField(ArrayOf(HexString(32)))`` etc.

A tool's parameter list is a sequence of ``Param`` (one argument, one
positional RPC param) and ``ParamGroup`` (several flat arguments folded into
one positional JSON object, e.g. a log filter or call object).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence, Union

from ethrpc_mcp.utils.exceptions import ValidationError


class _Sentinel:
    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name


MISSING: Any = _Sentinel("MISSING")  # argument not supplied by the caller
OMIT: Any = _Sentinel("OMIT")  # optional value with no default; left out of the request

HEX_PATTERN = r"^0x[0-9a-fA-F]+$"
HEX_OR_EMPTY_PATTERN = r"^0x[0-9a-fA-F]*$"
BASE_BLOCK_TAGS: tuple[str, ...] = ("latest", "earliest", "pending")
STATE_BLOCK_TAGS: tuple[str, ...] = ("safe", "finalized")

_HEX_QUANTITY = re.compile(HEX_PATTERN)


def _show(value: Any, limit: int = 48) -> str:
    text = repr(value)
    return text if len(text) <= limit else text[: limit - 3] + "..."


def _fail(field_name: str, expected: str, value: Any) -> ValidationError:
    if value is MISSING:
        return ValidationError(f"Missing required parameter '{field_name}': expected {expected}", field=field_name)
    return ValidationError(
        f"Invalid parameter '{field_name}': expected {expected}, got {_show(value)}",
        field=field_name,
    )


class FieldValidator:
    """Base class for a single-value validator."""

    expected = "a value"

    def validate(self, value: Any, field_name: str) -> Any:
        raise NotImplementedError

    def json_schema(self) -> dict[str, Any]:
        raise NotImplementedError

    @property
    def required(self) -> bool:
        return True


class HexString(FieldValidator):
    """``0x``-prefixed string, optionally of a fixed byte length and/or matching a pattern."""

    def __init__(self, byte_length: int | None = None, pattern: str | None = HEX_PATTERN):
        self.byte_length = byte_length
        self.pattern = re.compile(pattern) if pattern else None
        if byte_length is not None:
            self.expected = (
                f"0x-prefixed hex string of {byte_length} bytes ({2 + 2 * byte_length} characters)"
            )
        elif pattern == HEX_OR_EMPTY_PATTERN:
            self.expected = "0x-prefixed hex string (hex digits only, may be empty)"
        else:
            self.expected = "0x-prefixed hex string"

    def validate(self, value: Any, field_name: str) -> str:
        if not isinstance(value, str) or not value.startswith("0x"):
            raise _fail(field_name, self.expected, value)
        if self.byte_length is not None and len(value) != 2 + 2 * self.byte_length:
            raise _fail(field_name, self.expected, value)
        if self.pattern is not None and not self.pattern.match(value):
            raise _fail(field_name, self.expected, value)
        return value

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "string"}
        if self.pattern is not None:
            schema["pattern"] = self.pattern.pattern
        if self.byte_length is not None:
            schema["minLength"] = schema["maxLength"] = 2 + 2 * self.byte_length
        return schema


class BlockSelector(FieldValidator):
    """Hex block number or a named block tag; non-negative integers become hex."""

    def __init__(self, extra_tags: Iterable[str] = ()):
        self.tags = BASE_BLOCK_TAGS + tuple(t for t in extra_tags if t not in BASE_BLOCK_TAGS)
        self.expected = f"hex block number or one of {', '.join(self.tags)}"

    def validate(self, value: Any, field_name: str) -> str:
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return hex(value)
        if isinstance(value, str):
            if value in self.tags:
                return value
            if _HEX_QUANTITY.match(value):
                return value
        raise _fail(field_name, self.expected, value)

    def json_schema(self) -> dict[str, Any]:
        return {"type": "string"}


class NumberInRange(FieldValidator):
    """Numeric bound check. Integers may also arrive as decimal or 0x strings."""

    def __init__(self, minimum: float, maximum: float, *, integer: bool = True, as_hex: bool = False):
        self.minimum = minimum
        self.maximum = maximum
        self.integer = integer
        self.as_hex = as_hex
        kind = "integer" if integer else "number"
        self.expected = f"{kind} between {minimum} and {maximum}"

    def _coerce(self, value: Any) -> int | float | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if self.integer:
                return int(value) if value.is_integer() else None
            return value
        if isinstance(value, str) and self.integer:
            text = value.strip()
            if _HEX_QUANTITY.match(text):
                return int(text, 16)
            if text.isdigit():
                return int(text, 10)
        return None

    def validate(self, value: Any, field_name: str) -> Any:
        number = self._coerce(value)
        if number is None or not (self.minimum <= number <= self.maximum):
            raise _fail(field_name, self.expected, value)
        if self.as_hex and isinstance(number, int):
            return hex(number)
        return number

    def json_schema(self) -> dict[str, Any]:
        return {
            "type": "integer" if self.integer else "number",
            "minimum": self.minimum,
            "maximum": self.maximum,
        }


class NonEmptyString(FieldValidator):
    """Opaque identifier such as a filter ID."""

    expected = "non-empty string"

    def validate(self, value: Any, field_name: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise _fail(field_name, self.expected, value)
        return value

    def json_schema(self) -> dict[str, Any]:
        return {"type": "string", "minLength": 1}


class ArrayOf(FieldValidator):
    """List whose elements all pass ``element``."""

    def __init__(
        self,
        element: FieldValidator,
        *,
        min_items: int = 0,
        max_items: int | None = None,
        increasing: bool = False,
    ):
        self.element = element
        self.min_items = min_items
        self.max_items = max_items
        self.increasing = increasing
        self.expected = f"array of {element.expected}"
        if increasing:
            self.expected += " in increasing order"

    def validate(self, value: Any, field_name: str) -> list[Any]:
        if not isinstance(value, list):
            raise _fail(field_name, self.expected, value)
        if len(value) < self.min_items or (self.max_items is not None and len(value) > self.max_items):
            bound = f"{self.min_items}..{self.max_items if self.max_items is not None else 'n'} items"
            raise _fail(field_name, f"{self.expected} ({bound})", value)
        out = [self.element.validate(item, f"{field_name}[{i}]") for i, item in enumerate(value)]
        if self.increasing and any(b < a for a, b in zip(out, out[1:])):
            raise _fail(field_name, self.expected, value)
        return out

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "array", "items": self.element.json_schema()}
        if self.min_items:
            schema["minItems"] = self.min_items
        if self.max_items is not None:
            schema["maxItems"] = self.max_items
        return schema


class AnyOf(FieldValidator):
    """First alternative that accepts the value wins."""

    def __init__(self, *alternatives: FieldValidator, allow_null: bool = False):
        self.alternatives = alternatives
        self.allow_null = allow_null
        names = [a.expected for a in alternatives] + (["null"] if allow_null else [])
        self.expected = " or ".join(names)

    def validate(self, value: Any, field_name: str) -> Any:
        if value is None and self.allow_null:
            return None
        for alternative in self.alternatives:
            try:
                return alternative.validate(value, field_name)
            except ValidationError:
                continue
        raise _fail(field_name, self.expected, value)

    def json_schema(self) -> dict[str, Any]:
        options = [a.json_schema() for a in self.alternatives]
        if self.allow_null:
            options.append({"type": "null"})
        return {"anyOf": options}


class OptionalField(FieldValidator):
    """Wrap a validator so the argument may be left out (or null)."""

    def __init__(self, inner: FieldValidator, default: Any = OMIT):
        self.inner = inner
        self.default = default
        self.expected = inner.expected

    @property
    def required(self) -> bool:
        return False

    def validate(self, value: Any, field_name: str) -> Any:
        if value is MISSING or value is None:
            return self.default
        return self.inner.validate(value, field_name)

    def json_schema(self) -> dict[str, Any]:
        schema = dict(self.inner.json_schema())
        if self.default is not OMIT:
            schema["default"] = self.default
        return schema


@dataclass(frozen=True)
class Param:
    """One tool argument mapped to one positional RPC parameter."""

    name: str
    validator: FieldValidator
    description: str = ""

    def schema(self) -> dict[str, Any]:
        schema = dict(self.validator.json_schema())
        if self.description:
            schema["description"] = self.description
        return schema


class ObjectOf(FieldValidator):
    """JSON object whose members are validated field by field, in order."""

    def __init__(self, fields: Sequence[Param]):
        self.fields = tuple(fields)
        self.expected = "object with fields " + ", ".join(f.name for f in self.fields)

    def validate(self, value: Any, field_name: str) -> dict[str, Any]:
        if not isinstance(value, dict):
            raise _fail(field_name, self.expected, value)
        out: dict[str, Any] = {}
        for f in self.fields:
            qualified = f"{field_name}.{f.name}" if field_name else f.name
            checked = f.validator.validate(value.get(f.name, MISSING), qualified)
            if checked is not OMIT:
                out[f.name] = checked
        return out

    def json_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {f.name: f.schema() for f in self.fields},
            "required": [f.name for f in self.fields if f.validator.required],
        }


@dataclass(frozen=True)
class ParamGroup:
    """Several flat tool arguments folded into one positional JSON object."""

    fields: tuple[Param, ...] = field(default_factory=tuple)

    def build(self, arguments: dict[str, Any]) -> dict[str, Any]:
        # Top-level argument names are reported unqualified.
        return ObjectOf(self.fields).validate(arguments, "")


ParamEntry = Union[Param, ParamGroup]


def check_arguments(
    entries: Sequence[ParamEntry], arguments: dict[str, Any] | None
) -> tuple[list[Any], dict[str, Any]]:
    """
    Validate caller arguments.

    Returns the positional RPC parameter list together with the validated
    value of every supplied or defaulted argument, keyed by tool argument
    name. Raises ValidationError on the first failing field. Omitted trailing
    optional parameters are dropped; an omitted parameter followed by a
    supplied one is sent as null.
    """
    args = arguments or {}
    if not isinstance(args, dict):
        raise ValidationError("Invalid arguments: expected an object")

    params: list[Any] = []
    values: dict[str, Any] = {}
    for entry in entries:
        if isinstance(entry, ParamGroup):
            built = entry.build(args)
            params.append(built)
            values.update(built)
        else:
            checked = entry.validator.validate(args.get(entry.name, MISSING), entry.name)
            params.append(checked)
            if checked is not OMIT:
                values[entry.name] = checked

    while params and params[-1] is OMIT:
        params.pop()
    return [None if p is OMIT else p for p in params], values


def validate_arguments(entries: Sequence[ParamEntry], arguments: dict[str, Any] | None) -> list[Any]:
    """Validate caller arguments and build the positional RPC parameter list."""
    params, _ = check_arguments(entries, arguments)
    return params


def flatten_params(entries: Sequence[ParamEntry]) -> list[Param]:
    """Tool-level arguments in declaration order."""
    flat: list[Param] = []
    for entry in entries:
        if isinstance(entry, ParamGroup):
            flat.extend(entry.fields)
        else:
            flat.append(entry)
    return flat


def input_schema(entries: Sequence[ParamEntry]) -> dict[str, Any]:
    """JSON schema for the tool's arguments object."""
    flat = flatten_params(entries)
    return {
        "type": "object",
        "properties": {p.name: p.schema() for p in flat},
        "required": [p.name for p in flat if p.validator.required],
    }
