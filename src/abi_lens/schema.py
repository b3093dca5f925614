"""Schema types and validators.

This module provides TypedDict definitions for raw manifest entries and for
the serialized analysis output, plus a validator for the latter so that
accidental renames/removals break tests instead of downstream renderers.
"""

from __future__ import annotations

from typing import Any, TypedDict

# Manifest input


class RawParameter(TypedDict, total=False):
    name: str
    type: str
    internalType: str
    indexed: bool
    components: list[RawParameter]


class RawDescriptor(TypedDict, total=False):
    type: str  # function | event | constructor | fallback | receive | error
    name: str
    stateMutability: str
    inputs: list[RawParameter]
    outputs: list[RawParameter]
    anonymous: bool
    # Legacy (pre-0.4.16) mutability flags
    constant: bool
    payable: bool


# Analysis output (AnalyzedInterface.to_dict())


class ValidationRuleJson(TypedDict):
    kind: str
    message: str
    bound: int | str | None


class ParameterInfoJson(TypedDict):
    name: str
    type: str
    category: str
    widget_kind: str
    placeholder: str
    validation_rules: list[ValidationRuleJson]
    example: str
    internal_type: str | None
    indexed: bool | None
    children: list[ParameterInfoJson] | None
    description: str | None


class AnalyzedFunctionJson(TypedDict):
    name: str
    canonical_signature: str
    display_signature: str
    state_mutability: str
    inputs: list[ParameterInfoJson]
    outputs: list[ParameterInfoJson]
    is_read_only: bool
    requires_value: bool
    category: str
    complexity: str
    cost_estimate: dict[str, Any]


class AnalyzedInterfaceJson(TypedDict):
    functions: list[AnalyzedFunctionJson]
    events: list[dict[str, Any]]
    constructor_inputs: list[ParameterInfoJson] | None
    status: str
    error: str | None
    read_count: int
    write_count: int
    payable_count: int
    event_count: int


_PARAMETER_FIELDS: dict[str, type | tuple[type, ...]] = {
    "name": str,
    "type": str,
    "category": str,
    "widget_kind": str,
    "placeholder": str,
    "validation_rules": list,
    "example": str,
}

_FUNCTION_FIELDS: dict[str, type | tuple[type, ...]] = {
    "name": str,
    "canonical_signature": str,
    "state_mutability": str,
    "inputs": list,
    "outputs": list,
    "is_read_only": bool,
    "requires_value": bool,
    "category": str,
    "complexity": str,
    "cost_estimate": dict,
}


def _require(obj: dict[str, Any], fields: dict[str, type | tuple[type, ...]], where: str) -> None:
    for name, expected_type in fields.items():
        if name not in obj:
            raise ValueError(f"{where}: missing required field '{name}'")
        if not isinstance(obj[name], expected_type):
            raise ValueError(f"{where}.{name}: expected {expected_type}, got {type(obj[name]).__name__}")


def _validate_parameter_json(param: Any, where: str) -> None:
    if not isinstance(param, dict):
        raise ValueError(f"{where}: must be a dict")
    _require(param, _PARAMETER_FIELDS, where)
    for j, rule in enumerate(param["validation_rules"]):
        if not isinstance(rule, dict) or "kind" not in rule or "message" not in rule:
            raise ValueError(f"{where}.validation_rules[{j}]: must have 'kind' and 'message'")
    children = param.get("children")
    if children is not None:
        if not isinstance(children, list):
            raise ValueError(f"{where}.children: must be a list or null")
        for k, child in enumerate(children):
            _validate_parameter_json(child, f"{where}.children[{k}]")


def validate_analysis_json(data: dict[str, Any]) -> None:
    """Validate serialized analysis output.

    Raises ValueError with descriptive message if validation fails.
    Additive fields are allowed.
    """
    required_fields: dict[str, type | tuple[type, ...]] = {
        "functions": list,
        "events": list,
        "status": str,
        "read_count": int,
        "write_count": int,
        "payable_count": int,
        "event_count": int,
    }
    _require(data, required_fields, "analysis")

    functions = data["functions"]
    for i, fn in enumerate(functions):
        where = f"functions[{i}]"
        if not isinstance(fn, dict):
            raise ValueError(f"{where}: must be a dict")
        _require(fn, _FUNCTION_FIELDS, where)
        if fn["category"] not in ("read", "write", "payable"):
            raise ValueError(f"{where}.category: unexpected value {fn['category']!r}")
        for j, p in enumerate(fn["inputs"]):
            _validate_parameter_json(p, f"{where}.inputs[{j}]")
        for j, p in enumerate(fn["outputs"]):
            _validate_parameter_json(p, f"{where}.outputs[{j}]")

    for i, ev in enumerate(data["events"]):
        where = f"events[{i}]"
        if not isinstance(ev, dict):
            raise ValueError(f"{where}: must be a dict")
        _require(ev, {"name": str, "canonical_signature": str, "parameters": list}, where)
        for j, p in enumerate(ev["parameters"]):
            _validate_parameter_json(p, f"{where}.parameters[{j}]")

    ctor = data.get("constructor_inputs")
    if ctor is not None:
        if not isinstance(ctor, list):
            raise ValueError("constructor_inputs: must be a list or null")
        for j, p in enumerate(ctor):
            _validate_parameter_json(p, f"constructor_inputs[{j}]")

    total = data["read_count"] + data["write_count"] + data["payable_count"]
    if total != len(functions):
        raise ValueError(f"category counts sum to {total}, expected {len(functions)}")
