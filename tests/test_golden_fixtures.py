"""Golden fixture regression tests for analysis output.

Each manifest under fixtures/ is analyzed and checked against the expected
canonical signatures and category counts, and its serialized form is run
through the schema validator. This catches accidental renames/removals in
the output shape as well as signature regressions.
"""

from __future__ import annotations

import json
from typing import Any

import pytest
from conftest import FIXTURES_DIR, load_fixture

from abi_lens.analysis.engine import analyze_interface
from abi_lens.analysis.functions import generate_example_inputs
from abi_lens.analysis.validation import validate_all_inputs
from abi_lens.schema import validate_analysis_json

EXPECTED = load_fixture("expected_signatures.json")


@pytest.mark.parametrize("fixture_name", sorted(EXPECTED))
def test_golden_signatures(fixture_name: str) -> None:
    expected = EXPECTED[fixture_name]
    analysis = analyze_interface((FIXTURES_DIR / fixture_name).read_text())

    assert [f.canonical_signature for f in analysis.functions] == expected["functions"]
    assert [e.canonical_signature for e in analysis.events] == expected["events"]
    counts = expected["counts"]
    assert analysis.read_count == counts["read"]
    assert analysis.write_count == counts["write"]
    assert analysis.payable_count == counts["payable"]
    assert analysis.event_count == counts["events"]


@pytest.mark.parametrize("fixture_name", sorted(EXPECTED))
def test_golden_output_matches_schema(fixture_name: str) -> None:
    data = analyze_interface(load_fixture(fixture_name)).to_dict()
    validate_analysis_json(data)
    # Must survive a JSON round trip unchanged (no enums or bytes leak through).
    assert json.loads(json.dumps(data)) == data


def test_golden_example_inputs_are_valid() -> None:
    analysis = analyze_interface(load_fixture("erc20.json"))
    for func in analysis.functions:
        assert validate_all_inputs(func, generate_example_inputs(func)) == {}, func.name


def _nested_children(data: dict[str, Any]) -> list[str]:
    return [c["name"] for c in data["children"] or []]


def test_golden_router_structure() -> None:
    data = analyze_interface(load_fixture("router.json")).to_dict()
    fulfill = next(f for f in data["functions"] if f["name"] == "fulfillOrders")
    orders = fulfill["inputs"][0]
    assert orders["category"] == "array"
    assert orders["widget_kind"] == "array"
    assert _nested_children(orders) == ["parameters", "signature"]
    parameters = orders["children"][0]
    assert _nested_children(parameters) == ["offerer", "offer", "salt"]
    assert _nested_children(parameters["children"][1]) == ["itemType", "token", "amount"]
    assert parameters["children"][1]["children"][0]["internal_type"] == "enum ItemType"
