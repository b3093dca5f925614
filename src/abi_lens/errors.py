"""Error types for manifest analysis.

None of these escape `analyze_interface`: the orchestrator converts them into
an empty, still-usable result. They exist so the soft-failure path carries a
reason instead of a bare empty list.
"""

from __future__ import annotations

from typing import Any


class AbiLensError(Exception):
    """Base class for abi-lens errors."""

    def __init__(self, code: str, message: str, data: dict[str, Any] | None = None):
        self.code = code
        self.message = message
        self.data = data or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a JSON-serializable dictionary."""
        return {
            "code": self.code,
            "message": self.message,
            "data": self.data,
        }


class ManifestParseError(AbiLensError):
    """Manifest text could not be parsed, or parsed into the wrong shape."""

    def __init__(self, reason: str, snippet: str | None = None):
        data: dict[str, Any] = {"reason": reason}
        if snippet is not None:
            data["snippet"] = snippet
        super().__init__(
            code="manifest_malformed",
            message=f"Invalid interface manifest: {reason}",
            data=data,
        )


class NestingTooDeepError(AbiLensError):
    """Structured parameter nesting exceeded the configured ceiling."""

    def __init__(self, max_depth: int, path: str):
        super().__init__(
            code="nesting_too_deep",
            message=f"Parameter nesting exceeds {max_depth} levels at {path or '<root>'}",
            data={"maxDepth": max_depth, "path": path},
        )
