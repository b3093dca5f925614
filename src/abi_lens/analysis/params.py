"""
Recursive parameter analysis.

Turns one raw manifest parameter (`{"name", "type", "components", ...}`)
into a `ParameterInfo` carrying everything a form renderer needs: widget
kind, placeholder, validation rules, example value and, for tuple types,
the recursively analyzed children.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from abi_lens.analysis.examples import example
from abi_lens.analysis.types import TypeCategory, TypeInfo, classify_type
from abi_lens.analysis.validation import ValidationRule, build_validation_rules
from abi_lens.config import DEFAULT_CONFIG, AnalyzerConfig
from abi_lens.constants import ONE_TOKEN_WEI
from abi_lens.errors import NestingTooDeepError

logger = logging.getLogger(__name__)


class WidgetKind(str, Enum):
    ADDRESS = "address"
    NUMBER = "number"
    BOOL = "bool"
    BYTES = "bytes"
    ARRAY = "array"
    TUPLE = "tuple"
    TEXT = "text"


@dataclass(frozen=True)
class ParameterInfo:
    name: str
    type: str
    category: TypeCategory
    widget_kind: WidgetKind
    placeholder: str
    validation_rules: list[ValidationRule]
    example: str
    internal_type: str | None = None
    indexed: bool | None = None
    children: list[ParameterInfo] | None = None
    # Filled by documentation collaborators, never by the analyzer.
    description: str | None = None


_WIDGETS = {
    TypeCategory.ADDRESS: WidgetKind.ADDRESS,
    TypeCategory.UINT: WidgetKind.NUMBER,
    TypeCategory.INT: WidgetKind.NUMBER,
    TypeCategory.BOOL: WidgetKind.BOOL,
    TypeCategory.BYTES: WidgetKind.BYTES,
    TypeCategory.ARRAY: WidgetKind.ARRAY,
    TypeCategory.FIXED_ARRAY: WidgetKind.ARRAY,
    TypeCategory.TUPLE: WidgetKind.TUPLE,
}


def widget_kind(info: TypeInfo) -> WidgetKind:
    return _WIDGETS.get(info.category, WidgetKind.TEXT)


def _base_placeholder(info: TypeInfo) -> str:
    category = info.base_category
    if category is TypeCategory.ADDRESS:
        return "0x..."
    if category is TypeCategory.BOOL:
        return "true / false"
    if category is TypeCategory.STRING:
        return "Enter text..."
    if category is TypeCategory.UINT:
        if info.width == 256:
            return f"Amount (e.g., {ONE_TOKEN_WEI})"
        return f"0 - {2 ** (info.width or 256) - 1}"
    if category is TypeCategory.INT:
        return f"Signed integer (int{info.width})"
    if category is TypeCategory.BYTES:
        if info.width is None:
            return "0x..."
        return f"0x... ({info.width} bytes)"
    if category is TypeCategory.TUPLE:
        return "JSON format: [val1, val2, ...]"
    return f"Enter {info.raw}..."


def placeholder(type_str: str) -> str:
    """Placeholder text for a form field; arrays wrap the element placeholder as `[<p>, ...]`."""
    info = classify_type(type_str)
    text = _base_placeholder(info)
    for _ in range(info.array_depth):
        text = f"[{text}, ...]"
    return text


def analyze_parameter(
    param: Mapping[str, Any],
    *,
    include_indexed: bool = False,
    config: AnalyzerConfig = DEFAULT_CONFIG,
    _depth: int = 0,
    _path: str = "",
) -> ParameterInfo:
    """
    Analyze one raw parameter.

    `include_indexed` propagates the `indexed` flag (event parameters only).
    Unnamed parameters keep their empty name.

    Raises:
        NestingTooDeepError: tuple nesting exceeds `config.max_nesting_depth`.
    """
    name = param.get("name") or ""
    type_str = param.get("type") or ""
    path = f"{_path}.{name}" if _path else name
    if _depth > config.max_nesting_depth:
        raise NestingTooDeepError(config.max_nesting_depth, path)

    info = classify_type(type_str)

    children: list[ParameterInfo] | None = None
    components = param.get("components")
    if info.is_tuple and isinstance(components, list):
        children = [
            analyze_parameter(c, config=config, _depth=_depth + 1, _path=path)
            for c in components
            if isinstance(c, Mapping)
        ]
    elif info.is_tuple:
        logger.debug(f"Tuple parameter {path or '<unnamed>'} has no components")

    internal_type = param.get("internalType")
    indexed = None
    if include_indexed:
        indexed = bool(param.get("indexed", False))

    return ParameterInfo(
        name=name,
        type=type_str,
        category=info.category,
        widget_kind=widget_kind(info),
        placeholder=placeholder(type_str),
        validation_rules=build_validation_rules(type_str, name),
        example=example(type_str),
        internal_type=internal_type if isinstance(internal_type, str) else None,
        indexed=indexed,
        children=children,
    )


def analyze_parameters(
    params: Any, *, include_indexed: bool = False, config: AnalyzerConfig = DEFAULT_CONFIG
) -> list[ParameterInfo]:
    if not isinstance(params, list):
        return []
    return [
        analyze_parameter(p, include_indexed=include_indexed, config=config) for p in params if isinstance(p, Mapping)
    ]
