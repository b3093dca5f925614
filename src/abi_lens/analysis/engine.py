"""
Interface analysis orchestrator.

Normalizes a manifest, dispatches each descriptor by kind and aggregates the
results:
  - function    -> analyze_function()
  - event       -> analyze_event()
  - constructor -> parameter analysis of its inputs
  - anything else (fallback, receive, error) is ignored

Functions are sorted read < write < payable, then by name (case-sensitive).
Summary counts are properties over `functions`, never stored separately.

`analyze_interface()` never raises: malformed manifests and nesting-ceiling
breaches degrade to an empty result whose `status` says why.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from abi_lens.analysis.functions import AnalyzedEvent, AnalyzedFunction, analyze_event, analyze_function
from abi_lens.analysis.params import ParameterInfo, analyze_parameters
from abi_lens.config import DEFAULT_CONFIG, AnalyzerConfig
from abi_lens.constants import CATEGORY_SORT_ORDER
from abi_lens.errors import NestingTooDeepError
from abi_lens.manifest import ManifestStatus, parse_manifest
from abi_lens.schema import RawDescriptor

logger = logging.getLogger(__name__)


def _enum_values(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in pairs}


@dataclass(frozen=True)
class AnalyzedInterface:
    functions: list[AnalyzedFunction] = field(default_factory=list)
    events: list[AnalyzedEvent] = field(default_factory=list)
    constructor_inputs: list[ParameterInfo] | None = None
    status: ManifestStatus = ManifestStatus.EMPTY
    error: str | None = None

    def _count(self, category: str) -> int:
        return sum(1 for f in self.functions if f.category.value == category)

    @property
    def read_count(self) -> int:
        return self._count("read")

    @property
    def write_count(self) -> int:
        return self._count("write")

    @property
    def payable_count(self) -> int:
        return self._count("payable")

    @property
    def event_count(self) -> int:
        return len(self.events)

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form, counts included."""
        out = asdict(self, dict_factory=_enum_values)
        out["read_count"] = self.read_count
        out["write_count"] = self.write_count
        out["payable_count"] = self.payable_count
        out["event_count"] = self.event_count
        return out


def sort_functions(functions: list[AnalyzedFunction]) -> list[AnalyzedFunction]:
    return sorted(functions, key=lambda f: (CATEGORY_SORT_ORDER[f.category.value], f.name))


def _dispatch(
    descriptors: list[RawDescriptor], config: AnalyzerConfig
) -> tuple[list[AnalyzedFunction], list[AnalyzedEvent], list[ParameterInfo] | None]:
    functions: list[AnalyzedFunction] = []
    events: list[AnalyzedEvent] = []
    constructor_inputs: list[ParameterInfo] | None = None

    for i, d in enumerate(descriptors):
        # The ABI grammar lets `type` default to "function".
        kind = d.get("type", "function")
        if kind == "function":
            if not d.get("name"):
                logger.debug(f"Skipping unnamed function descriptor at index {i}")
                continue
            functions.append(analyze_function(d, config=config))
        elif kind == "event":
            events.append(analyze_event(d, config=config))
        elif kind == "constructor":
            constructor_inputs = analyze_parameters(d.get("inputs"), config=config)
        else:
            logger.debug(f"Ignoring descriptor of kind {kind!r} at index {i}")

    return functions, events, constructor_inputs


def analyze_interface(manifest: Any, *, config: AnalyzerConfig | None = None) -> AnalyzedInterface:
    """Analyze a whole interface manifest (list, JSON text or artifact object)."""
    config = config or DEFAULT_CONFIG
    parsed = parse_manifest(manifest)
    if not parsed.ok:
        return AnalyzedInterface(status=parsed.status, error=parsed.error)

    try:
        functions, events, constructor_inputs = _dispatch(parsed.descriptors, config)
    except NestingTooDeepError as e:
        logger.warning(e.message)
        return AnalyzedInterface(status=ManifestStatus.TOO_DEEP, error=e.message)

    return AnalyzedInterface(
        functions=sort_functions(functions),
        events=events,
        constructor_inputs=constructor_inputs,
        status=parsed.status,
    )


def group_functions_by_category(analysis: AnalyzedInterface) -> dict[str, list[AnalyzedFunction]]:
    groups: dict[str, list[AnalyzedFunction]] = {"read": [], "write": [], "payable": []}
    for f in analysis.functions:
        groups[f.category.value].append(f)
    return groups


def search_functions(analysis: AnalyzedInterface, query: str) -> list[AnalyzedFunction]:
    """Case-insensitive substring match on function name; keeps sort order."""
    q = query.strip().lower()
    if not q:
        return list(analysis.functions)
    return [f for f in analysis.functions if q in f.name.lower()]
