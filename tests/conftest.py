"""
Shared pytest fixtures for abi-lens tests.

Manifests are kept small and hand-written so that expected signatures and
counts can be read straight off the fixture.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> Any:
    return json.loads((FIXTURES_DIR / name).read_text())


def nested_tuple(depth: int) -> dict[str, Any]:
    """A parameter whose tuple components nest `depth` levels below the root."""
    param: dict[str, Any] = {"name": "leaf", "type": "uint256"}
    for i in range(depth):
        param = {"name": f"t{i}", "type": "tuple", "components": [param]}
    return param


@pytest.fixture
def erc20_manifest() -> list[dict[str, Any]]:
    return load_fixture("erc20.json")


@pytest.fixture
def router_artifact() -> dict[str, Any]:
    return load_fixture("router.json")


@pytest.fixture
def transfer_descriptor() -> dict[str, Any]:
    return {
        "type": "function",
        "name": "transfer",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    }


@pytest.fixture
def order_descriptor() -> dict[str, Any]:
    """Write function taking a single struct plus a struct array."""
    order_components = [
        {"name": "maker", "type": "address"},
        {"name": "amount", "type": "uint256"},
    ]
    return {
        "type": "function",
        "name": "submit",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "order", "type": "tuple", "components": order_components},
            {"name": "batch", "type": "tuple[]", "components": order_components},
        ],
        "outputs": [],
    }
