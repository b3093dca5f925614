"""
Interface manifest normalization.

Accepts the shapes a manifest shows up in:
  - a list of descriptors
  - its JSON text (str or bytes)
  - a compiler/explorer artifact object with the list under `abi`, where
    `abi` may itself be JSON text (block explorers return it that way)

Malformed input is a soft failure: `parse_manifest()` never raises and
reports why through `ManifestParseResult.status` / `.error`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, cast

from abi_lens.errors import ManifestParseError
from abi_lens.schema import RawDescriptor
from abi_lens.utils import snippet

logger = logging.getLogger(__name__)


class ManifestStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    MALFORMED = "malformed"
    TOO_DEEP = "too_deep"


@dataclass(frozen=True)
class ManifestParseResult:
    descriptors: list[RawDescriptor] = field(default_factory=list)
    status: ManifestStatus = ManifestStatus.EMPTY
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True for usable manifests, including valid-but-empty ones."""
        return self.status in (ManifestStatus.OK, ManifestStatus.EMPTY)


def _loads(text: str | bytes) -> Any:
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ManifestParseError(f"not UTF-8 text ({e.reason})") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"{e.msg} at line {e.lineno} column {e.colno}", snippet(text)) from e
    except RecursionError as e:
        raise ManifestParseError("JSON nesting too deep to parse") from e


def _unwrap(raw: Any) -> list[Any]:
    if isinstance(raw, (str, bytes)):
        raw = _loads(raw)
    if isinstance(raw, Mapping):
        if "abi" not in raw:
            raise ManifestParseError("object has no 'abi' field")
        raw = raw["abi"]
        if isinstance(raw, (str, bytes)):
            raw = _loads(raw)
    if not isinstance(raw, list):
        raise ManifestParseError(f"expected a list of descriptors, got {type(raw).__name__}")
    return raw


_DESCRIPTOR_STR_FIELDS = ("type", "name", "stateMutability")
_DESCRIPTOR_LIST_FIELDS = ("inputs", "outputs")


def _optional(value: Any, expected: type) -> bool:
    return value is None or isinstance(value, expected)


def _parameters_problem(params: list[Any], where: str) -> str | None:
    """First shape problem in a parameter tree, walked iteratively."""
    stack = [(f"{where}[{i}]", p) for i, p in enumerate(params)]
    while stack:
        path, param = stack.pop()
        if not isinstance(param, Mapping):
            return f"{path} is {type(param).__name__}, expected object"
        if not isinstance(param.get("type"), str):
            return f"{path}.type is not a string"
        if not _optional(param.get("name"), str):
            return f"{path}.name is not a string"
        components = param.get("components")
        if not _optional(components, list):
            return f"{path}.components is not a list"
        if components:
            stack.extend((f"{path}.components[{j}]", c) for j, c in enumerate(components))
    return None


def _descriptor_problem(item: Mapping[str, Any]) -> str | None:
    for key in _DESCRIPTOR_STR_FIELDS:
        if not _optional(item.get(key), str):
            return f"{key} is not a string"
    for key in _DESCRIPTOR_LIST_FIELDS:
        params = item.get(key)
        if not _optional(params, list):
            return f"{key} is not a list"
        if params:
            problem = _parameters_problem(params, key)
            if problem is not None:
                return problem
    return None


def load_descriptors(raw: Any) -> list[RawDescriptor]:
    """
    Strict variant of `parse_manifest()`.

    Entries that are not objects, or whose fields do not have the manifest
    types (string name/type/stateMutability, parameter lists of objects with
    a string `type`), are skipped with a debug log.

    Raises:
        ManifestParseError: if `raw` is not a recognizable manifest.
    """
    descriptors: list[RawDescriptor] = []
    for i, item in enumerate(_unwrap(raw)):
        if not isinstance(item, Mapping):
            logger.debug(f"Skipping manifest entry {i}: expected object, got {type(item).__name__}")
            continue
        problem = _descriptor_problem(item)
        if problem is not None:
            logger.debug(f"Skipping manifest entry {i}: {problem}")
            continue
        descriptors.append(cast(RawDescriptor, dict(item)))
    return descriptors


def parse_manifest(raw: Any) -> ManifestParseResult:
    try:
        descriptors = load_descriptors(raw)
    except ManifestParseError as e:
        logger.warning(e.message)
        return ManifestParseResult(status=ManifestStatus.MALFORMED, error=e.message)

    if not descriptors:
        return ManifestParseResult(status=ManifestStatus.EMPTY)
    return ManifestParseResult(descriptors=descriptors, status=ManifestStatus.OK)
