"""
Conversion between UI strings and call values.

`encode_input_value()` turns a form string into the value handed to a
call-execution library. Integers stay strings so no precision is lost to
floating point. `decode_output_value()` turns a returned value into display
text. Large integers are stringified exactly, and nested structures become
indented JSON with integers as strings.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from abi_lens.analysis.functions import AnalyzedFunction
from abi_lens.analysis.types import TypeCategory, classify_type
from abi_lens.analysis.validation import input_key


@dataclass(frozen=True)
class FormattedOutput:
    name: str
    type: str
    value: str
    raw_value: Any


def _encode_element(element_type: str, item: Any) -> Any:
    if isinstance(item, str):
        return encode_input_value(element_type, item)
    inner = classify_type(element_type).element_type
    # Recurse only as deep as the declared type; deeper lists pass through.
    if isinstance(item, list) and inner is not None:
        return [_encode_element(inner, x) for x in item]
    return item


def encode_input_value(type_str: str, value: str) -> Any:
    info = classify_type(type_str)
    category = info.category

    if category is TypeCategory.BOOL:
        return value.strip().lower() == "true"
    if category in (TypeCategory.UINT, TypeCategory.INT):
        return value.strip()
    if info.is_array:
        s = value.strip()
        if not s:
            return []
        try:
            parsed = json.loads(s)
        except (ValueError, RecursionError):
            parsed = None
        if not isinstance(parsed, list):
            parsed = [v.strip() for v in s.split(",")]
        element_type = info.element_type or info.base
        return [_encode_element(element_type, item) for item in parsed]
    if category is TypeCategory.TUPLE:
        try:
            return json.loads(value)
        except (ValueError, RecursionError):
            return value
    # address, bytes, string and unknown types pass through verbatim.
    return value


def encode_inputs(func: AnalyzedFunction, values: Mapping[str, str]) -> list[Any]:
    """Positional call arguments from a form value map keyed by `input_key()`."""
    return [encode_input_value(p.type, values.get(input_key(p, i), "")) for i, p in enumerate(func.inputs)]


def _jsonable(value: Any) -> Any:
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, str):
        return [_jsonable(v) for v in value]
    if isinstance(value, str):
        return value
    return str(value)


def decode_output_value(type_str: str, value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(_jsonable(value), indent=2)
    return str(value)


def format_outputs(func: AnalyzedFunction, raw_result: Any) -> list[FormattedOutput]:
    """
    Pair a call result with the function's declared outputs.

    A single output receives the whole result. For several outputs the result
    is indexed positionally, then by output name.
    """
    outputs = func.outputs
    if not outputs:
        return []

    if len(outputs) == 1:
        out = outputs[0]
        return [
            FormattedOutput(
                name=out.name or "result",
                type=out.type,
                value=decode_output_value(out.type, raw_result),
                raw_value=raw_result,
            )
        ]

    formatted: list[FormattedOutput] = []
    for i, out in enumerate(outputs):
        val = None
        if isinstance(raw_result, (list, tuple)) and i < len(raw_result):
            val = raw_result[i]
        elif isinstance(raw_result, Mapping):
            val = raw_result.get(i, raw_result.get(out.name))
        formatted.append(
            FormattedOutput(
                name=out.name or f"result{i}",
                type=out.type,
                value=decode_output_value(out.type, val),
                raw_value=val,
            )
        )
    return formatted
