"""
Canonical and human-readable signatures.

`signature_of()` reproduces the wire-level grammar hashed into selectors and
event topics by an external hashing step: tuples expand into a
parenthesized, comma-joined list of their components' canonical types, with
any array suffix copied verbatim:

    {"type": "tuple[]", "components": [address, uint256]}  ->  "(address,uint256)[]"

No whitespace, no parameter names. Hashing is out of scope here.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from abi_lens.analysis.types import classify_type
from abi_lens.config import DEFAULT_CONFIG, AnalyzerConfig
from abi_lens.errors import NestingTooDeepError


def canonical_type(
    param: Mapping[str, Any],
    *,
    config: AnalyzerConfig = DEFAULT_CONFIG,
    _depth: int = 0,
) -> str:
    """
    Canonical wire type of one parameter.

    Raises:
        NestingTooDeepError: tuple nesting exceeds `config.max_nesting_depth`.
    """
    if _depth > config.max_nesting_depth:
        raise NestingTooDeepError(config.max_nesting_depth, str(param.get("name") or ""))

    type_str = param.get("type") or ""
    components = param.get("components")
    info = classify_type(type_str)
    if info.is_tuple and isinstance(components, list):
        inner = ",".join(
            canonical_type(c, config=config, _depth=_depth + 1) for c in components if isinstance(c, Mapping)
        )
        return f"({inner}){info.array_suffix}"
    return type_str


def _params(descriptor: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    params = descriptor.get(key)
    if not isinstance(params, list):
        return []
    return [p for p in params if isinstance(p, Mapping)]


def signature_of(descriptor: Mapping[str, Any], *, config: AnalyzerConfig = DEFAULT_CONFIG) -> str:
    """`name(type1,type2,...)` over the descriptor's inputs."""
    name = descriptor.get("name") or ""
    types = [canonical_type(p, config=config) for p in _params(descriptor, "inputs")]
    return f"{name}({','.join(types)})"


def _display_param(param: Mapping[str, Any], *, with_indexed: bool, config: AnalyzerConfig) -> str:
    parts = [canonical_type(param, config=config)]
    if with_indexed and param.get("indexed"):
        parts.append("indexed")
    name = param.get("name")
    if name:
        parts.append(str(name))
    return " ".join(parts)


def display_signature(descriptor: Mapping[str, Any], *, config: AnalyzerConfig = DEFAULT_CONFIG) -> str:
    """
    Human-readable declaration for documentation, e.g.

        event Transfer(address indexed from, address indexed to, uint256 value)
        function balanceOf(address account) view returns (uint256)
    """
    kind = descriptor.get("type") or "function"
    is_event = kind == "event"
    name = descriptor.get("name") or ""
    params = ", ".join(
        _display_param(p, with_indexed=is_event, config=config) for p in _params(descriptor, "inputs")
    )

    if kind == "constructor":
        head = f"constructor({params})"
    else:
        head = f"{kind} {name}({params})"

    if is_event:
        return f"{head} anonymous" if descriptor.get("anonymous") else head

    mutability = descriptor.get("stateMutability")
    if isinstance(mutability, str) and mutability != "nonpayable":
        head = f"{head} {mutability}"
    outputs = _params(descriptor, "outputs")
    if outputs:
        rendered = ", ".join(_display_param(p, with_indexed=False, config=config) for p in outputs)
        head = f"{head} returns ({rendered})"
    return head
