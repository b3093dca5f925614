"""
Deterministic example values for type strings.

Examples are stable across runs (no randomness, no clock) so they can be
used in golden-file tests and as "Fill Examples" form values. Every example
for a supported uintN / bytesN passes `validate_input()` for its own type.
"""

from __future__ import annotations

import json

from abi_lens.analysis.types import TypeCategory, TypeInfo, classify_type
from abi_lens.constants import DUMMY_ADDRESS, EXAMPLE_STRING, ONE_TOKEN_WEI


def _uint_example(bits: int) -> str:
    # Tiered so the example always fits the declared width.
    if bits <= 8:
        return "250"
    if bits <= 32:
        return "1000"
    if bits <= 128:
        return "100000"
    return ONE_TOKEN_WEI


def _base_example(info: TypeInfo) -> object:
    category = info.base_category
    if category is TypeCategory.ADDRESS:
        return DUMMY_ADDRESS
    if category is TypeCategory.BOOL:
        return "true"
    if category is TypeCategory.STRING:
        return EXAMPLE_STRING
    if category is TypeCategory.UINT:
        return _uint_example(info.width or 256)
    if category is TypeCategory.INT:
        return "100"
    if category is TypeCategory.BYTES:
        if info.width is None:
            return "0x00"
        return "0x" + ("00" * info.width)
    if category is TypeCategory.TUPLE:
        # Component-aware examples are built by consumers from `children`.
        return {}
    return ""


def example_value(type_str: str) -> object:
    """Example as a JSON-compatible value: str for scalars, list for arrays, dict for tuples."""
    info = classify_type(type_str)
    value = _base_example(info)
    for _ in range(info.array_depth):
        value = [value]
    return value


def example(type_str: str) -> str:
    """Example as the string a user would type into a form field."""
    value = example_value(type_str)
    if isinstance(value, str):
        return value
    return json.dumps(value)
