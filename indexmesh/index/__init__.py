"""
Index module: document-side and query-side key builders.

- Indexes: keys saved alongside a document
- Filters: keys a query looks up
- create_composite_indexes: multi-label key engine
- InBuilder: bit allocation for IN queries
"""

from indexmesh.index.accumulator import LabelAccumulator
from indexmesh.index.coercion import coerce_tokens
from indexmesh.index.composite import create_composite_indexes
from indexmesh.index.filters import Filters
from indexmesh.index.in_builder import InBuilder
from indexmesh.index.indexes import Indexes

__all__ = [
    "LabelAccumulator",
    "coerce_tokens",
    "create_composite_indexes",
    "Filters",
    "InBuilder",
    "Indexes",
]
