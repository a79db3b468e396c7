"""
System-Wide Constants for indexmesh

All limits, separators and key formats centralized here.

Key formats:
- Simple:    "<label> <token>"
- Composite: "<bitmask> <token1>;<token2>;...;<tokenN>"
- Sentinel:  "__NF__"
"""

from typing import Final

# =============================================================================
# KEY FORMAT
# =============================================================================
INDEX_NO_FILTERS: Final[str] = "__NF__"  # key for builds without filters
LABEL_TOKEN_SEPARATOR: Final[str] = " "
COMBINATION_INDEX_SEPARATOR: Final[str] = ";"
WORD_SEPARATOR: Final[str] = " "

# =============================================================================
# LIMITS
# =============================================================================
MAX_INDEXES_SIZE: Final[int] = 512  # keys per build
MAX_COMPOSITE_INDEX_LABELS: Final[int] = 8

# Smallest composite mask with two bits set
MIN_COMPOSITE_MASK: Final[int] = 3

# =============================================================================
# IN BUILDER
# =============================================================================
DEFAULT_IN_BIT_WIDTH: Final[int] = 16
SUPPORTED_IN_BIT_WIDTHS: Final[tuple[int, ...]] = (16, 32, 64)

# =============================================================================
# ENVIRONMENT
# =============================================================================
ENV_PREFIX: Final[str] = "INDEXMESH_"
