"""
Filters: query-side key builder

Produces the keys a query looks up. Differences from Indexes:

- Labels covered by the emitted composite key lose their simple keys;
  the composite key alone identifies the matching documents.
- The composite engine runs in filter mode: one mask (the labels that
  carry tokens) and no combination that adds no new (label, token) pair.
- Text helpers add what a single query needs, not every token of the text.

Every key built here is also built by Indexes for a document holding the
same values.
"""

from __future__ import annotations

from typing import Collection

from indexmesh.index.accumulator import LabelAccumulator
from indexmesh.index.composite import filter_mask, is_composite_mask
from indexmesh.tokenize.tokens import bigrams


class Filters(LabelAccumulator):
    """Filter keys for an exact-match query on extra indexes."""

    __slots__ = ()

    for_filters = True

    def add_bigrams(self, label: str, s: str) -> Filters:
        return self.add_biunigrams(label, s)

    def add_biunigrams(self, label: str, s: str) -> Filters:
        """
        Add the tokens matching a substring query.

        A one-character query matches an index unigram; longer queries
        are fully described by their bigrams.
        """
        if len(s) == 1:
            return self._add_all(label, (s,))
        if len(s) > 1:
            return self._add_all(label, bigrams(s))
        return self

    def add_prefix(self, label: str, s: str) -> Filters:
        # the index side already wrote every prefix
        return self._add_all(label, (s,))

    def add_suffix(self, label: str, s: str) -> Filters:
        return self._add_all(label, (s,))

    def _labels_to_exclude(self) -> Collection[str]:
        composite_labels = self._conf.composite_labels
        if len(composite_labels) <= 1:
            return ()
        if not is_composite_mask(filter_mask(composite_labels, self._m)):
            return ()
        return composite_labels
