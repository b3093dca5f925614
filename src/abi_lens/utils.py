"""Small helpers shared by the CLI and the config layer."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


def read_manifest_text(path: Path) -> str | None:
    """
    Contents of a manifest file on disk.

    Returns None when `path` is not a regular file or cannot be decoded as
    UTF-8; the reason is logged here and the CLI turns None into its
    "Could not read manifest" exit.
    """
    if not path.is_file():
        logger.debug(f"No manifest file at {path}")
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read manifest {path}: {e}")
        return None


def env_int(env: Mapping[str, str], key: str, default: int, *, lo: int = 0, hi: int | None = None) -> int:
    """
    Integer override for one `ABI_LENS_*` setting.

    Unset or blank keeps `default`. Text that is not an integer is ignored
    with a warning. Integers outside `lo..hi` are clamped into range.
    """
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring {key}={raw!r}: not an integer, using {default}")
        return default

    clamped = max(lo, value if hi is None else min(hi, value))
    if clamped != value:
        logger.warning(f"{key}={value} is outside the allowed range, using {clamped}")
    return clamped


def snippet(text: str, max_len: int = 100) -> str:
    """Shorten `text` for inclusion in error payloads."""
    text = text.strip()
    if len(text) <= max_len:
        return text
    return text[:max_len] + "..."
