"""
Tokenize module: bigram, unigram, prefix and suffix token sets.
"""

from indexmesh.tokenize.tokens import (
    bigrams,
    biunigrams,
    prefixes,
    suffixes,
    unigrams,
)

__all__ = [
    "bigrams",
    "biunigrams",
    "prefixes",
    "suffixes",
    "unigrams",
]
