"""
Validation rules and their evaluation.

Rules are plain data (kind + bound + message) so any UI layer can render or
re-implement them. Evaluation is ordered and short-circuits per field: only
the first failing rule's message is reported.

Two entry points:
- `validate_input(type, value)`: ad-hoc single-field check.
- `validate_all_inputs(func, values)`: batch check against the rule sets
  already attached to an analyzed function's inputs. Returns an error map
  in which absence of a key means the field is valid.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from abi_lens.analysis.types import TypeCategory, classify_type, split_array_suffix


class RuleKind(str, Enum):
    REQUIRED = "required"
    ADDRESS_SHAPE = "address_shape"
    UINT_SHAPE = "uint_shape"
    INT_SHAPE = "int_shape"
    BYTES_SHAPE = "bytes_shape"
    MAX_LENGTH = "max_length"
    PATTERN = "pattern"


# Unanchored; matched against the whole value.
ADDRESS_PATTERN = r"0x[a-fA-F0-9]{40}"
UINT_PATTERN = r"[0-9]+"
INT_PATTERN = r"-?[0-9]+"
BYTES_PATTERN = r"0x.*"
BOOL_PATTERN = r"(?i:true|false)"

TOO_DEEP_MESSAGE = "Value is nested too deeply"

_SHAPE_KINDS = frozenset({RuleKind.ADDRESS_SHAPE, RuleKind.UINT_SHAPE, RuleKind.INT_SHAPE, RuleKind.BYTES_SHAPE})


@dataclass(frozen=True)
class ValidationRule:
    kind: RuleKind
    message: str
    bound: int | str | None = None


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: str | None = None


class _Param(Protocol):
    name: str
    type: str
    validation_rules: list[ValidationRule]
    children: list[Any] | None


class _HasInputs(Protocol):
    inputs: list[Any]


def input_key(param: Any, index: int) -> str:
    """Value-map key for a parameter: its name, or `arg{index}` when unnamed."""
    name = getattr(param, "name", None)
    if name is None and isinstance(param, Mapping):
        name = param.get("name")
    return name if name else f"arg{index}"


def build_validation_rules(type_str: str, name: str = "") -> list[ValidationRule]:
    """
    Build the ordered rule set for one parameter.

    Order: required (skipped for bool), category shape check, then max-length
    for fixed-size bytes. Arrays and tuples only get `required`; their
    contents are checked against the analyzed children.
    """
    info = classify_type(type_str)
    label = name or "Value"
    rules: list[ValidationRule] = []

    if info.category is not TypeCategory.BOOL:
        rules.append(ValidationRule(kind=RuleKind.REQUIRED, message=f"{label} is required"))

    category = info.category
    if category is TypeCategory.ADDRESS:
        rules.append(
            ValidationRule(
                kind=RuleKind.ADDRESS_SHAPE,
                bound=ADDRESS_PATTERN,
                message="Invalid address format (expected 0x followed by 40 hex characters)",
            )
        )
    elif category is TypeCategory.UINT:
        rules.append(
            ValidationRule(kind=RuleKind.UINT_SHAPE, bound=UINT_PATTERN, message="Must be a non-negative integer")
        )
    elif category is TypeCategory.INT:
        rules.append(ValidationRule(kind=RuleKind.INT_SHAPE, bound=INT_PATTERN, message="Must be an integer"))
    elif category is TypeCategory.BYTES:
        rules.append(
            ValidationRule(kind=RuleKind.BYTES_SHAPE, bound=BYTES_PATTERN, message="Must be a hex value starting with 0x")
        )
        if info.width is not None:
            n = info.width
            rules.append(
                ValidationRule(
                    kind=RuleKind.MAX_LENGTH,
                    bound=2 + 2 * n,
                    message=f"Must be {n} bytes (0x followed by {2 * n} hex characters)",
                )
            )

    return rules


def evaluate_rule(rule: ValidationRule, value: str) -> bool:
    """True if `value` satisfies `rule`. Shape and pattern rules pass on empty values."""
    if rule.kind is RuleKind.REQUIRED:
        return bool(value.strip())
    if rule.kind is RuleKind.MAX_LENGTH:
        return not isinstance(rule.bound, int) or len(value) <= rule.bound
    if rule.kind in _SHAPE_KINDS or rule.kind is RuleKind.PATTERN:
        if value == "" or not isinstance(rule.bound, str):
            return True
        return re.fullmatch(rule.bound, value, re.DOTALL) is not None
    return True


def first_failure(rules: Sequence[ValidationRule], value: str) -> str | None:
    for rule in rules:
        if not evaluate_rule(rule, value):
            return rule.message
    return None


def _check_array_literal(value: str) -> str | None:
    try:
        parsed = json.loads(value)
    except RecursionError:
        return TOO_DEEP_MESSAGE
    except ValueError:
        # Not JSON: treated as a comma-separated list or a single bare value.
        return None
    if isinstance(parsed, dict):
        return "Must be a JSON array (e.g. [value1, value2])"
    return None


def validate_input(type_str: str, value: str) -> ValidationResult:
    """Validate a literal value against the rules for `type_str`."""
    info = classify_type(type_str)
    rules = build_validation_rules(type_str)
    if info.category is TypeCategory.BOOL:
        rules.append(ValidationRule(kind=RuleKind.PATTERN, bound=BOOL_PATTERN, message="Must be true or false"))

    error = first_failure(rules, value)
    if error is None and info.is_array and value.strip():
        error = _check_array_literal(value.strip())
    if error is not None:
        return ValidationResult(valid=False, error=error)
    return ValidationResult(valid=True)


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def _validate_tuple_value(children: Sequence[_Param], value: Any) -> str | None:
    if isinstance(value, list):
        if len(value) != len(children):
            return f"Expected {len(children)} components, got {len(value)}"
        pairs = list(zip(children, value))
    elif isinstance(value, dict):
        pairs = [(child, value.get(input_key(child, i))) for i, child in enumerate(children)]
    else:
        return "Must be a JSON array or object matching the tuple components"

    for i, (child, child_value) in enumerate(pairs):
        err = validate_parameter(child, _stringify(child_value))
        if err is not None:
            return f"{input_key(child, i)}: {err}"
    return None


def _validate_structured(param: _Param, value: str) -> str | None:
    try:
        parsed = json.loads(value)
    except RecursionError:
        return TOO_DEEP_MESSAGE
    except ValueError:
        return "Must be valid JSON"

    info = classify_type(param.type)
    children = param.children or []
    if not info.is_array:
        return _validate_tuple_value(children, parsed)

    split = split_array_suffix(param.type.strip())
    dims = split[1] if split is not None else [None] * info.array_depth

    # Walk down through every array dimension, outermost first, to the tuple values.
    level: list[tuple[str, Any]] = [("", parsed)]
    for dim in reversed(dims):
        next_level: list[tuple[str, Any]] = []
        for path, item in level:
            prefix = f"{path}: " if path else ""
            if not isinstance(item, list):
                return f"{prefix}Must be a JSON array"
            if dim is not None and len(item) != dim:
                return f"{prefix}Expected {dim} elements, got {len(item)}"
            next_level.extend((f"{path}[{idx}]", elem) for idx, elem in enumerate(item))
        level = next_level

    for path, item in level:
        err = _validate_tuple_value(children, item)
        if err is not None:
            return f"{path}.{err}"
    return None


def validate_parameter(param: _Param, value: str) -> str | None:
    """First failing message for `value` against an analyzed parameter, or None."""
    error = first_failure(param.validation_rules, value)
    if error is not None:
        return error
    if param.children is not None and value.strip():
        try:
            return _validate_structured(param, value.strip())
        except RecursionError:
            return TOO_DEEP_MESSAGE
    return None


def validate_all_inputs(func: _HasInputs, values: Mapping[str, str]) -> dict[str, str]:
    """
    Validate every input of an analyzed function.

    Missing values default to "". Keys follow `input_key()`. Only failing
    fields appear in the result.
    """
    errors: dict[str, str] = {}
    for i, param in enumerate(func.inputs):
        key = input_key(param, i)
        error = validate_parameter(param, values.get(key, ""))
        if error is not None:
            errors[key] = error
    return errors
