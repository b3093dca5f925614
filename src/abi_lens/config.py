"""Runtime configuration for the analysis pipeline.

Defaults come from `abi_lens.constants`. Environment overrides:
- ABI_LENS_MAX_NESTING_DEPTH: recursion ceiling for structured parameters
- ABI_LENS_BASE_COST: baseline of the rough cost heuristic
- ABI_LENS_PER_INPUT_COST: per-input increment of the cost heuristic
- ABI_LENS_ARRAY_PENALTY: extra increment when any input is an array
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from abi_lens.constants import (
    DEFAULT_ARRAY_INPUT_PENALTY,
    DEFAULT_BASE_COST,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_PER_INPUT_COST,
    MAX_NESTING_DEPTH_LIMIT,
)
from abi_lens.utils import env_int

ENV_PREFIX = "ABI_LENS_"


@dataclass(frozen=True)
class AnalyzerConfig:
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    base_cost: int = DEFAULT_BASE_COST
    per_input_cost: int = DEFAULT_PER_INPUT_COST
    array_input_penalty: int = DEFAULT_ARRAY_INPUT_PENALTY

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> AnalyzerConfig:
        """Build a config from `env` (defaults to `os.environ`), clamping out-of-range values."""
        if env is None:
            env = os.environ
        return cls(
            max_nesting_depth=env_int(
                env, f"{ENV_PREFIX}MAX_NESTING_DEPTH", DEFAULT_MAX_NESTING_DEPTH, lo=1, hi=MAX_NESTING_DEPTH_LIMIT
            ),
            base_cost=env_int(env, f"{ENV_PREFIX}BASE_COST", DEFAULT_BASE_COST),
            per_input_cost=env_int(env, f"{ENV_PREFIX}PER_INPUT_COST", DEFAULT_PER_INPUT_COST),
            array_input_penalty=env_int(env, f"{ENV_PREFIX}ARRAY_PENALTY", DEFAULT_ARRAY_INPUT_PENALTY),
        )


DEFAULT_CONFIG = AnalyzerConfig()
