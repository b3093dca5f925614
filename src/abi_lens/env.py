"""`.env` support for the CLI's `--env-file` flag."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from abi_lens.config import ENV_PREFIX

logger = logging.getLogger(__name__)

_QUOTES = ('"', "'")


def _parse_line(raw: str) -> tuple[str, str] | None:
    line = raw.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export ") :].lstrip()
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        value = value[1:-1]
    return key, value


def load_dotenv(path: Path, *, prefix: str | None = None) -> dict[str, str]:
    """
    Parse `KEY=VALUE` lines (optionally `export`-ed, optionally quoted).

    Blank lines, `#` comments and lines without `=` are skipped. Variables
    are not expanded. With `prefix`, only keys starting with it are kept.
    A missing file yields an empty mapping.
    """
    out: dict[str, str] = {}
    if not path.exists():
        logger.debug(f"No env file at {path}")
        return out

    for lineno, raw in enumerate(path.read_text().splitlines(), start=1):
        parsed = _parse_line(raw)
        if parsed is None:
            if raw.strip() and not raw.strip().startswith("#"):
                logger.debug(f"{path}:{lineno}: ignoring line without KEY=VALUE")
            continue
        key, value = parsed
        if prefix is None or key.startswith(prefix):
            out[key] = value
    return out


def layered_env(env_file: Path | None, base: Mapping[str, str] | None = None) -> dict[str, str]:
    """`base` (default: process environment) with `ABI_LENS_*` values from `env_file` on top."""
    env = dict(os.environ if base is None else base)
    if env_file is not None:
        env.update(load_dotenv(env_file, prefix=ENV_PREFIX))
    return env
