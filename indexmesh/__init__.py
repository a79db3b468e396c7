"""
indexmesh: Extra Index Keys for Exact-Match Document Stores

Generates denormalized secondary index keys so that a document store with
only exact-match lookups can answer substring, prefix, suffix, multi-label
and IN queries:

- Tokenizers: bigrams, biunigrams, prefixes, suffixes
- Indexes: keys saved with a document
- Filters: keys a query looks up
- Composite keys: one lookup for conditions on several labels
- InBuilder: bitmask keys for "value IN (...)" queries

License: MIT
"""

__version__ = "1.0.0"

# =============================================================================
# PUBLIC API EXPORTS
# =============================================================================
from indexmesh.core.types import (
    Result,
    Ok,
    Err,
    Bit,
    Timestamp,
)
from indexmesh.core.errors import (
    ErrorCode,
    IndexMeshError,
    ConfigurationError,
    LimitExceededError,
)
from indexmesh.core.config import (
    DEFAULT_CONFIG,
    IndexConfig,
    IndexMeshConfig,
    must_validate_config,
    validate_config,
)
from indexmesh.core.constants import (
    INDEX_NO_FILTERS,
    MAX_COMPOSITE_INDEX_LABELS,
    MAX_INDEXES_SIZE,
)
from indexmesh.tokenize import bigrams, biunigrams, prefixes, suffixes
from indexmesh.index import (
    Filters,
    InBuilder,
    Indexes,
    create_composite_indexes,
)

__all__ = [
    # Version
    "__version__",
    # Result monad
    "Result",
    "Ok",
    "Err",
    # Value types
    "Bit",
    "Timestamp",
    # Errors
    "ErrorCode",
    "IndexMeshError",
    "ConfigurationError",
    "LimitExceededError",
    # Config
    "DEFAULT_CONFIG",
    "IndexConfig",
    "IndexMeshConfig",
    "must_validate_config",
    "validate_config",
    # Limits
    "INDEX_NO_FILTERS",
    "MAX_COMPOSITE_INDEX_LABELS",
    "MAX_INDEXES_SIZE",
    # Tokenizers
    "bigrams",
    "biunigrams",
    "prefixes",
    "suffixes",
    # Builders
    "Filters",
    "InBuilder",
    "Indexes",
    "create_composite_indexes",
]
