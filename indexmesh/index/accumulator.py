"""
Label Accumulator: label -> token set collection and key building

Shared machinery behind Indexes (document side) and Filters (query side):

    1. add(label, *tokens) collects deduplicated, optionally lowercased tokens
    2. build() renders "<label> <token>" keys for non-excluded labels
    3. composite keys from the engine are merged in
    4. the no-filters sentinel is added (Indexes: always, Filters: when
       nothing else was produced)
    5. the total is checked against MAX_INDEXES_SIZE

build() is a pure read of the accumulated map and may be called repeatedly.
Instances are not thread-safe.
"""

from __future__ import annotations

from typing import Any, Collection, Iterable, Mapping, Optional, TypeVar

from indexmesh.core import constants as C
from indexmesh.core.config import DEFAULT_CONFIG, IndexConfig
from indexmesh.core.errors import IndexMeshError, LimitExceededError
from indexmesh.core.types import Result, Ok, Err, LabelTokenMap
from indexmesh.index.coercion import coerce_tokens
from indexmesh.index.composite import create_composite_indexes
from indexmesh.observability.logging import StructuredLogger

_logger = StructuredLogger(__name__)

A = TypeVar("A", bound="LabelAccumulator")


def build_simple_indexes(
    label_tokens: Mapping[str, set[str]],
    labels_to_exclude: Collection[str] = (),
) -> dict[str, bool]:
    """Render "<label> <token>" for every pair whose label is not excluded."""
    exclude = set(labels_to_exclude)
    built: dict[str, bool] = {}
    for label, tokens in label_tokens.items():
        if label in exclude:
            continue
        for token in tokens:
            built[f"{label}{C.LABEL_TOKEN_SEPARATOR}{token}"] = True
    return built


def _log_error(message: str, error: IndexMeshError) -> None:
    _logger.warning(
        message,
        code=error.code.name,
        error_id=error.error_id,
        **error.context,
    )


def check_size(built: dict[str, bool]) -> Result[dict[str, bool], LimitExceededError]:
    """Reject key sets larger than MAX_INDEXES_SIZE."""
    if len(built) > C.MAX_INDEXES_SIZE:
        return Err(LimitExceededError.index_size_exceeded(
            size=len(built),
            limit=C.MAX_INDEXES_SIZE,
        ))
    return Ok(built)


class LabelAccumulator:
    """
    Collects (label, token) pairs and builds the flat key set.

    Subclasses choose which labels lose their simple keys and whether the
    composite engine runs in filter mode.
    """

    __slots__ = ("_m", "_conf")

    # composite engine mode
    for_filters: bool = False
    # write the no-filters sentinel even when other keys exist
    always_save_no_filters: bool = False

    def __init__(self, conf: Optional[IndexConfig] = None) -> None:
        self._m: LabelTokenMap = {}
        self._conf = conf if conf is not None else DEFAULT_CONFIG

    @property
    def config(self) -> IndexConfig:
        return self._conf

    def labels(self) -> list[str]:
        """Labels that received at least one token, in insertion order."""
        return list(self._m)

    def tokens(self, label: str) -> frozenset[str]:
        return frozenset(self._m.get(label, ()))

    def add(self: A, label: str, *tokens: str) -> A:
        """Add tokens under label. Re-adding a token is a no-op."""
        return self._add_all(label, tokens)

    def add_something(self: A, label: str, value: Any) -> A:
        """
        Add a value of any supported shape under label.

        Sequences add one token per element, timestamps add their
        nanoseconds since the Unix epoch, other scalars add str(value).
        """
        return self._add_all(label, coerce_tokens(value))

    def _add_all(self: A, label: str, tokens: Iterable[str]) -> A:
        for token in tokens:
            if not token:
                continue
            if self._conf.ignore_case:
                token = token.lower()
            self._m.setdefault(label, set()).add(token)
        return self

    def _labels_to_exclude(self) -> Collection[str]:
        return ()

    def build(self) -> Result[dict[str, bool], IndexMeshError]:
        """
        Build the key set to save (Indexes) or look up (Filters).

        Returns:
            Ok[dict]: Keys mapped to True
            Err[ConfigurationError]: Composite label list too long
            Err[LimitExceededError]: More than MAX_INDEXES_SIZE keys
        """
        built = build_simple_indexes(self._m, self._labels_to_exclude())

        if len(self._conf.composite_labels) > 1:
            composite = create_composite_indexes(
                self._conf.composite_labels, self._m, for_filters=self.for_filters,
            )
            if composite.is_err():
                _log_error("composite index creation failed", composite.error)
                return composite
            built.update(composite.unwrap())

        if self._conf.save_no_filters_index and (self.always_save_no_filters or not built):
            built[C.INDEX_NO_FILTERS] = True

        result = check_size(built)
        if result.is_err():
            _log_error("index size limit exceeded", result.error)
            return result

        _logger.debug(
            "keys built",
            builder=type(self).__name__,
            labels=len(self._m),
            keys=len(built),
        )
        return result

    def must_build(self) -> dict[str, bool]:
        """Build keys and raise the IndexMeshError on failure."""
        result = self.build()
        if result.is_err():
            raise result.error
        return result.unwrap()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(labels={len(self._m)}, config={self._conf!r})"
