"""
Indexes: document-side key builder

A stored document must carry every key any query could probe, so every
label keeps its simple keys and the composite engine emits every mask.
With save_no_filters_index set, every document also carries the
no-filters key, which is what a query without filters looks up.

Usage:
    conf = must_validate_config(IndexConfig(composite_labels=("status", "type")))
    keys = (
        Indexes(conf)
        .add("status", "open")
        .add("type", "bug")
        .add_biunigrams("title", "crash on start")
        .must_build()
    )
"""

from __future__ import annotations

from indexmesh.index.accumulator import LabelAccumulator
from indexmesh.tokenize.tokens import bigrams, biunigrams, prefixes, suffixes


class Indexes(LabelAccumulator):
    """Extra index keys to save alongside a document."""

    __slots__ = ()

    for_filters = False
    always_save_no_filters = True

    def add_bigrams(self, label: str, s: str) -> Indexes:
        return self._add_all(label, bigrams(s))

    def add_biunigrams(self, label: str, s: str) -> Indexes:
        """Add bigrams and unigrams so one-character queries also match."""
        return self._add_all(label, biunigrams(s))

    def add_prefixes(self, label: str, s: str) -> Indexes:
        return self._add_all(label, prefixes(s))

    def add_suffixes(self, label: str, s: str) -> Indexes:
        return self._add_all(label, suffixes(s))
