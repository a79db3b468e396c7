"""
Composite Index Engine

Synthesizes keys that combine tokens of several labels so that a query on
two or more labels is answered by a single exact-match lookup instead of a
zig-zag merge join across per-label keys.

Bit Mapping:
    Bit i of a composite mask identifies labels[i]; tokens are joined in
    label order. For labels ("label1", "label2", "label3"):

        mask  label3 label2 label1   key
        3       0      1      1      "3 a;b"
        5       1      0      1      "5 a;c"
        6       1      1      0      "6 b;c"
        7       1      1      1      "7 a;b;c"

    Stored keys depend on this mapping; it must never change.

Modes:
    - Index: every mask with at least two bits set, full cross-product
      of the participating labels' tokens.
    - Filter: only the mask of labels that carry tokens, keeping a
      combination only when it uses a (label, token) pair no earlier
      combination used.

Complexity: O(2**n * prod(|tokens|)) for n <= MAX_COMPOSITE_INDEX_LABELS
"""

from __future__ import annotations

from typing import Mapping, Sequence

from indexmesh.core import constants as C
from indexmesh.core.errors import ConfigurationError
from indexmesh.core.types import Result, Ok, Err, LabelTokenMap
from indexmesh.observability.logging import StructuredLogger

_logger = StructuredLogger(__name__)


def is_composite_mask(mask: int) -> bool:
    """True when mask has at least two bits set."""
    return mask > 0 and (mask & (mask - 1)) != 0


def filter_mask(labels: Sequence[str], label_tokens: Mapping[str, set[str]]) -> int:
    """Mask of the composite labels that carry at least one token."""
    mask = 0
    for i, label in enumerate(labels):
        if label_tokens.get(label):
            mask |= 1 << i
    return mask


def composite_key(mask: int, tokens: Sequence[str]) -> str:
    return f"{mask}{C.LABEL_TOKEN_SEPARATOR}{C.COMBINATION_INDEX_SEPARATOR.join(tokens)}"


class _MaskExpander:
    """
    Recursive cross-product expansion of one or more masks.

    Walks the labels from bit 0 upward. A label whose bit is unset is
    skipped; a label whose bit is set fans out over its tokens. At the end
    of the walk the accumulated tokens form one key.
    """

    __slots__ = ("_labels", "_label_tokens", "_for_filters", "_used", "indexes")

    def __init__(
        self,
        labels: Sequence[str],
        label_tokens: Mapping[str, set[str]],
        for_filters: bool,
    ) -> None:
        self._labels = tuple(labels)
        self._label_tokens = label_tokens
        self._for_filters = for_filters
        # (label, token) pairs already consumed by the filter expansion
        self._used: LabelTokenMap = {}
        self.indexes: dict[str, bool] = {}

    def expand(
        self,
        mask: int,
        position: int = 0,
        chosen: tuple[str, ...] = (),
        some_new: bool = False,
    ) -> None:
        if position == len(self._labels):
            if self._for_filters and not some_new:
                return
            self.indexes[composite_key(mask, chosen)] = True
            return

        if not mask & (1 << position):
            self.expand(mask, position + 1, chosen, some_new)
            return

        label = self._labels[position]
        used = self._used.setdefault(label, set())
        # sorted so that filter deduplication picks the same combinations every run
        for token in sorted(self._label_tokens.get(label, ())):
            if token not in used:
                used.add(token)
                some_new = True
            self.expand(mask, position + 1, chosen + (token,), some_new)


def create_composite_indexes(
    labels: Sequence[str],
    label_tokens: Mapping[str, set[str]],
    for_filters: bool = False,
) -> Result[dict[str, bool], ConfigurationError]:
    """
    Create composite keys of labels from label_tokens.

    Args:
        labels: Ordered composite label list (bit i <-> labels[i])
        label_tokens: Accumulated label -> token set map
        for_filters: Build the query-side key set instead of the
            document-side one

    Returns:
        Ok[dict]: Composite keys mapped to True
        Err[ConfigurationError]: More than MAX_COMPOSITE_INDEX_LABELS labels
    """
    if len(labels) > C.MAX_COMPOSITE_INDEX_LABELS:
        return Err(ConfigurationError.too_many_composite_labels(
            count=len(labels),
            limit=C.MAX_COMPOSITE_INDEX_LABELS,
        ))

    expander = _MaskExpander(labels, label_tokens, for_filters)

    if for_filters:
        mask = filter_mask(labels, label_tokens)
        # a lone label is queried through its simple key
        if is_composite_mask(mask):
            expander.expand(mask)
    else:
        for mask in range(C.MIN_COMPOSITE_MASK, 1 << len(labels)):
            if is_composite_mask(mask):
                expander.expand(mask)

    _logger.debug(
        "composite indexes created",
        labels=len(labels),
        for_filters=for_filters,
        keys=len(expander.indexes),
    )
    return Ok(expander.indexes)
