"""
Function and event analysis.

Composes parameter analysis and canonical signatures into per-descriptor
metadata: read/write/payable category, complexity tier and a rough cost
estimate.

The cost estimate is a flat heuristic (baseline + per-input increment +
array penalty). It is NOT derived from any execution cost model and must
only be shown as an approximate hint.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from abi_lens.analysis.params import ParameterInfo, analyze_parameters
from abi_lens.analysis.signature import display_signature, signature_of
from abi_lens.analysis.types import ARRAY_CATEGORIES, TypeCategory
from abi_lens.analysis.validation import input_key
from abi_lens.config import DEFAULT_CONFIG, AnalyzerConfig
from abi_lens.constants import COMPLEX_INPUT_COUNT, DEFAULT_STATE_MUTABILITY, MEDIUM_INPUT_COUNT, NO_COST_LABEL


class FunctionCategory(str, Enum):
    READ = "read"
    WRITE = "write"
    PAYABLE = "payable"


class Complexity(str, Enum):
    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"


@dataclass(frozen=True)
class CostEstimate:
    """Rough cost hint. `units` is 0 for read functions."""

    units: int
    label: str
    is_rough: bool = True

    @property
    def is_free(self) -> bool:
        return self.units == 0


@dataclass(frozen=True)
class AnalyzedFunction:
    name: str
    canonical_signature: str
    display_signature: str
    state_mutability: str
    inputs: list[ParameterInfo]
    outputs: list[ParameterInfo]
    is_read_only: bool
    requires_value: bool
    category: FunctionCategory
    complexity: Complexity
    cost_estimate: CostEstimate


@dataclass(frozen=True)
class AnalyzedEvent:
    name: str
    canonical_signature: str
    display_signature: str
    parameters: list[ParameterInfo]
    anonymous: bool = False


def resolve_state_mutability(descriptor: Mapping[str, Any]) -> str:
    """
    `stateMutability`, falling back to the legacy `constant` / `payable`
    flags of pre-0.4.16 manifests, then to `nonpayable`.
    """
    mutability = descriptor.get("stateMutability")
    if isinstance(mutability, str) and mutability:
        return mutability
    if descriptor.get("constant") is True:
        return "view"
    if descriptor.get("payable") is True:
        return "payable"
    return DEFAULT_STATE_MUTABILITY


def category_for(state_mutability: str) -> FunctionCategory:
    if state_mutability in ("view", "pure"):
        return FunctionCategory.READ
    if state_mutability == "payable":
        return FunctionCategory.PAYABLE
    return FunctionCategory.WRITE


def _has_array_input(inputs: list[ParameterInfo]) -> bool:
    return any(p.category in ARRAY_CATEGORIES for p in inputs)


def complexity_for(inputs: list[ParameterInfo]) -> Complexity:
    if (
        len(inputs) >= COMPLEX_INPUT_COUNT
        or _has_array_input(inputs)
        or any(p.category is TypeCategory.TUPLE for p in inputs)
    ):
        return Complexity.COMPLEX
    if len(inputs) >= MEDIUM_INPUT_COUNT:
        return Complexity.MEDIUM
    return Complexity.SIMPLE


def estimate_cost(
    category: FunctionCategory, inputs: list[ParameterInfo], config: AnalyzerConfig = DEFAULT_CONFIG
) -> CostEstimate:
    if category is FunctionCategory.READ:
        return CostEstimate(units=0, label=NO_COST_LABEL)
    units = config.base_cost + config.per_input_cost * len(inputs)
    if _has_array_input(inputs):
        units += config.array_input_penalty
    return CostEstimate(units=units, label=f"~{units:,} gas")


def analyze_function(descriptor: Mapping[str, Any], *, config: AnalyzerConfig = DEFAULT_CONFIG) -> AnalyzedFunction:
    """
    Analyze a `function` descriptor.

    Raises:
        NestingTooDeepError: propagated from parameter analysis.
    """
    inputs = analyze_parameters(descriptor.get("inputs"), config=config)
    outputs = analyze_parameters(descriptor.get("outputs"), config=config)
    state_mutability = resolve_state_mutability(descriptor)
    category = category_for(state_mutability)

    return AnalyzedFunction(
        name=descriptor.get("name") or "",
        canonical_signature=signature_of(descriptor, config=config),
        display_signature=display_signature(descriptor, config=config),
        state_mutability=state_mutability,
        inputs=inputs,
        outputs=outputs,
        is_read_only=category is FunctionCategory.READ,
        requires_value=category is FunctionCategory.PAYABLE,
        category=category,
        complexity=complexity_for(inputs),
        cost_estimate=estimate_cost(category, inputs, config),
    )


def analyze_event(descriptor: Mapping[str, Any], *, config: AnalyzerConfig = DEFAULT_CONFIG) -> AnalyzedEvent:
    return AnalyzedEvent(
        name=descriptor.get("name") or "",
        canonical_signature=signature_of(descriptor, config=config),
        display_signature=display_signature(descriptor, config=config),
        parameters=analyze_parameters(descriptor.get("inputs"), include_indexed=True, config=config),
        anonymous=descriptor.get("anonymous") is True,
    )


def generate_example_inputs(func: AnalyzedFunction) -> dict[str, str]:
    """Example value for every input, keyed like `validate_all_inputs()` expects."""
    return {input_key(p, i): p.example for i, p in enumerate(func.inputs)}
