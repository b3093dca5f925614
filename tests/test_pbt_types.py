"""Property-based tests for type classification, examples and validation.

Uses Hypothesis to check that classification is total and deterministic and
that every generated example is accepted by the validator for its own type.
"""

from __future__ import annotations

import hypothesis.strategies as st
from hypothesis import given

from abi_lens.analysis.examples import example
from abi_lens.analysis.types import TypeCategory, classify_type
from abi_lens.analysis.validation import validate_input

UINT_TYPES = [f"uint{b}" for b in range(8, 257, 8)]
INT_TYPES = [f"int{b}" for b in range(8, 257, 8)]
BYTES_TYPES = [f"bytes{n}" for n in range(1, 33)]
SCALAR_TYPES = ["address", "bool", "string", "bytes", "uint", "int", *UINT_TYPES, *INT_TYPES, *BYTES_TYPES]


@st.composite
def array_suffix(draw) -> str:
    dims = draw(st.lists(st.one_of(st.none(), st.integers(min_value=1, max_value=9)), max_size=3))
    return "".join("[]" if d is None else f"[{d}]" for d in dims)


@given(st.text())
def test_classification_is_total_and_deterministic(type_str: str) -> None:
    first = classify_type(type_str)
    assert first == classify_type(type_str)
    assert isinstance(first.category, TypeCategory)


@given(st.sampled_from(SCALAR_TYPES), array_suffix())
def test_array_suffix_round_trips(base: str, suffix: str) -> None:
    info = classify_type(base + suffix)
    assert info.base == base
    assert info.array_suffix == suffix
    assert info.array_depth == suffix.count("[")
    assert info.is_array == bool(suffix)
    if suffix:
        assert info.category in (TypeCategory.ARRAY, TypeCategory.FIXED_ARRAY)
        assert info.element_type is not None
        assert classify_type(info.element_type).array_depth == info.array_depth - 1


@given(st.sampled_from(UINT_TYPES + BYTES_TYPES + INT_TYPES + ["address", "bool", "string", "bytes"]))
def test_examples_validate_against_own_type(type_str: str) -> None:
    value = example(type_str)
    assert validate_input(type_str, value).valid, (type_str, value)
    assert example(type_str) == value


@given(st.sampled_from(SCALAR_TYPES), array_suffix())
def test_array_examples_are_accepted(base: str, suffix: str) -> None:
    type_str = base + suffix
    assert validate_input(type_str, example(type_str)).valid


@given(st.text(alphabet="0123456789abcdefABCDEF", min_size=40, max_size=40))
def test_any_hex_address_is_valid(hex_part: str) -> None:
    assert validate_input("address", f"0x{hex_part}").valid


@given(st.text(alphabet="0123456789abcdef", min_size=0, max_size=39))
def test_short_address_is_invalid(hex_part: str) -> None:
    assert not validate_input("address", f"0x{hex_part}").valid


@given(st.integers(min_value=0, max_value=2**256 - 1), st.sampled_from(UINT_TYPES))
def test_non_negative_integers_pass_uint_shape(n: int, type_str: str) -> None:
    assert validate_input(type_str, str(n)).valid


@given(st.integers(min_value=-(2**255), max_value=-1))
def test_negative_integers_fail_uint_shape(n: int) -> None:
    assert not validate_input("uint256", str(n)).valid
    assert validate_input("int256", str(n)).valid


@given(st.integers(min_value=1, max_value=32), st.integers(min_value=0, max_value=40))
def test_fixed_bytes_length_bound(n: int, actual: int) -> None:
    result = validate_input(f"bytes{n}", "0x" + "ab" * actual)
    if actual == 0:
        # "0x" alone is non-empty and within bound.
        assert result.valid
    else:
        assert result.valid == (actual <= n)
