"""
Centralized constants for abi-lens analysis.

This module provides single-source-of-truth defaults for values used across
the classifier, example synthesizer and function analyzer. Runtime overrides
live in `abi_lens.config` (environment variables prefixed with ABI_LENS_).
"""

from __future__ import annotations

# Placeholder 20-byte address used for examples. Recognizably fake.
DUMMY_ADDRESS = "0x" + ("1" * 40)

# Example string for `string` parameters
EXAMPLE_STRING = "Hello, world"

# 10**18, one whole token in an 18-decimal unit
ONE_TOKEN_WEI = "1000000000000000000"

# Default mutability when a descriptor omits it
DEFAULT_STATE_MUTABILITY = "nonpayable"

# =============================================================================
# Nesting
# =============================================================================

# Structured types cannot self-reference, but a hostile manifest can still
# nest tuples arbitrarily deep.
DEFAULT_MAX_NESTING_DEPTH = 32
MAX_NESTING_DEPTH_LIMIT = 256

# =============================================================================
# Cost heuristic (rough, not a gas model)
# =============================================================================

DEFAULT_BASE_COST = 21_000
DEFAULT_PER_INPUT_COST = 2_000
DEFAULT_ARRAY_INPUT_PENALTY = 10_000
NO_COST_LABEL = "no cost (view/pure)"

# =============================================================================
# Complexity tiers
# =============================================================================

COMPLEX_INPUT_COUNT = 5
MEDIUM_INPUT_COUNT = 3

# Sort order for function categories: read < write < payable
CATEGORY_SORT_ORDER = {"read": 0, "write": 1, "payable": 2}
