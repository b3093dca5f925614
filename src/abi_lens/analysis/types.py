"""
Type classification for interface-manifest type strings.

Grammar: `base[arraySuffix]*` where base is one of address, bool, string,
uint<N>, int<N>, bytes<N>, bytes, tuple and each suffix is `[]` or `[k]`.

`classify_type()` is the single place that looks at the text of a type
string. Every downstream component (examples, validation rules, widgets,
canonical signatures) dispatches on the returned `TypeInfo` instead of
sniffing prefixes on its own.

Unrecognized bases classify as `TEXT` rather than failing, so novel or
vendor-specific type strings stay usable.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class TypeCategory(str, Enum):
    ADDRESS = "address"
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    BYTES = "bytes"
    STRING = "string"
    ARRAY = "array"
    FIXED_ARRAY = "fixed_array"
    TUPLE = "tuple"
    TEXT = "text"


ARRAY_CATEGORIES = frozenset({TypeCategory.ARRAY, TypeCategory.FIXED_ARRAY})

_SUFFIX_RE = re.compile(r"\[([0-9]{0,32})\]\Z")
_INT_RE = re.compile(r"(u?)int([0-9]{0,3})")
_BYTES_RE = re.compile(r"bytes([0-9]{1,2})")


@dataclass(frozen=True)
class TypeInfo:
    """Classification of one type string.

    For array types `category` is ARRAY/FIXED_ARRAY (from the outermost
    suffix) while `base_category` and `width` describe the element base.
    """

    raw: str
    category: TypeCategory
    base: str
    base_category: TypeCategory
    width: int | None = None
    array_depth: int = 0
    array_suffix: str = ""
    array_length: int | None = None

    @property
    def is_array(self) -> bool:
        return self.category in ARRAY_CATEGORIES

    @property
    def is_tuple(self) -> bool:
        """True for bare `tuple` and any array of tuples."""
        return self.base_category is TypeCategory.TUPLE

    @property
    def is_fixed_bytes(self) -> bool:
        return self.category is TypeCategory.BYTES and self.width is not None

    @property
    def element_type(self) -> str | None:
        """Type string with the outermost array suffix removed."""
        if not self.is_array:
            return None
        s = self.raw.strip()
        m = _SUFFIX_RE.search(s)
        return s[: m.start()] if m else None


def split_array_suffix(type_str: str) -> tuple[str, list[int | None]] | None:
    """
    Split trailing array suffixes off `type_str`.

    Returns (base, dims) with dims in source order (`None` for `[]`), or None
    when a suffix is malformed (e.g. `[0]`).
    """
    base = type_str
    dims: list[int | None] = []
    while base.endswith("]"):
        m = _SUFFIX_RE.search(base)
        if m is None:
            return None
        dim = m.group(1)
        if dim == "":
            dims.insert(0, None)
        else:
            k = int(dim)
            if k <= 0:
                return None
            dims.insert(0, k)
        base = base[: m.start()]
    return base, dims


def _classify_base(base: str) -> tuple[TypeCategory, int | None]:
    if base == "address":
        return TypeCategory.ADDRESS, None
    if base == "bool":
        return TypeCategory.BOOL, None
    if base == "string":
        return TypeCategory.STRING, None
    if base == "tuple":
        return TypeCategory.TUPLE, None
    if base == "bytes":
        return TypeCategory.BYTES, None

    m = _BYTES_RE.fullmatch(base)
    if m:
        n = int(m.group(1))
        if 1 <= n <= 32:
            return TypeCategory.BYTES, n
        return TypeCategory.TEXT, None

    m = _INT_RE.fullmatch(base)
    if m:
        unsigned = m.group(1) == "u"
        bits = int(m.group(2)) if m.group(2) else 256
        if bits % 8 == 0 and 8 <= bits <= 256:
            return (TypeCategory.UINT if unsigned else TypeCategory.INT), bits
        return TypeCategory.TEXT, None

    return TypeCategory.TEXT, None


def classify_type(type_str: str) -> TypeInfo:
    """Classify a raw type string. Total: never raises."""
    raw = type_str if isinstance(type_str, str) else ""
    s = raw.strip()

    split = split_array_suffix(s)
    if split is None:
        logger.debug(f"Malformed array suffix in type {raw!r}, falling back to text")
        return TypeInfo(raw=raw, category=TypeCategory.TEXT, base=s, base_category=TypeCategory.TEXT)

    base, dims = split
    base_category, width = _classify_base(base)
    if base_category is TypeCategory.TEXT:
        logger.debug(f"Unrecognized type {raw!r}, falling back to text")
        # An unknown base poisons the whole type, arrays included.
        return TypeInfo(raw=raw, category=TypeCategory.TEXT, base=base, base_category=TypeCategory.TEXT)

    if not dims:
        return TypeInfo(raw=raw, category=base_category, base=base, base_category=base_category, width=width)

    outer = dims[-1]
    return TypeInfo(
        raw=raw,
        category=TypeCategory.ARRAY if outer is None else TypeCategory.FIXED_ARRAY,
        base=base,
        base_category=base_category,
        width=width,
        array_depth=len(dims),
        array_suffix=s[len(base) :],
        array_length=outer,
    )
