from __future__ import annotations

import json

import pytest

from abi_lens.analysis.examples import example, example_value
from abi_lens.constants import DUMMY_ADDRESS, EXAMPLE_STRING, ONE_TOKEN_WEI


def test_address_example_is_well_formed() -> None:
    assert example("address") == DUMMY_ADDRESS
    assert len(DUMMY_ADDRESS) == 42


@pytest.mark.parametrize(
    "type_str,expected",
    [
        ("uint8", "250"),
        ("uint16", "1000"),
        ("uint32", "1000"),
        ("uint64", "100000"),
        ("uint128", "100000"),
        ("uint160", ONE_TOKEN_WEI),
        ("uint256", ONE_TOKEN_WEI),
        ("uint", ONE_TOKEN_WEI),
        ("int8", "100"),
        ("int256", "100"),
    ],
)
def test_integer_examples(type_str: str, expected: str) -> None:
    assert example(type_str) == expected


def test_uint_examples_fit_declared_width() -> None:
    for bits in range(8, 257, 8):
        assert int(example(f"uint{bits}")) < 2**bits


def test_bytes_examples() -> None:
    assert example("bytes") == "0x00"
    assert example("bytes4") == "0x00000000"
    assert example("bytes32") == "0x" + "00" * 32


def test_scalar_examples() -> None:
    assert example("bool") == "true"
    assert example("string") == EXAMPLE_STRING
    assert example("tuple") == "{}"


def test_unknown_type_has_empty_example() -> None:
    assert example("fixed128x18") == ""


def test_array_examples_wrap_once_per_level() -> None:
    assert example_value("address[]") == [DUMMY_ADDRESS]
    assert example_value("uint256[][2]") == [[ONE_TOKEN_WEI]]
    assert json.loads(example("address[]")) == [DUMMY_ADDRESS]
    assert example("tuple[]") == "[{}]"


def test_examples_are_stable() -> None:
    for t in ("address", "uint8[]", "bytes32", "tuple[2]", "bool"):
        assert example(t) == example(t)
