"""
Unit Tests: Indexes (document-side builder)

Tests:
    - Simple keys for every add helper
    - Composite keys merged with simple keys
    - Case folding and idempotent adds
    - No-filters sentinel
    - Size and label limits, must_build raising
"""

from datetime import datetime, timezone

import pytest

from indexmesh.core import constants as C
from indexmesh.core.config import IndexConfig
from indexmesh.core.errors import ConfigurationError, LimitExceededError
from indexmesh.core.types import Timestamp
from indexmesh.index.filters import Filters
from indexmesh.index.indexes import Indexes
from indexmesh.tokenize.tokens import bigrams, biunigrams, prefixes, suffixes

TEXT1 = "abc dあいbCh"
TEXT2 = "abc debch iJあdeN"


def keys_of(label, tokens):
    return {f"{label} {token}": True for token in tokens}


class TestIndexesAdd:
    """Tests for the add helpers."""

    def test_add(self):
        idx = Indexes()
        idx.add("label1", TEXT1, "sample")
        idx.add("label2", TEXT2, "sample")

        assert idx.must_build() == {
            "label1 abc dあいbCh": True,
            "label1 sample": True,
            "label2 abc debch iJあdeN": True,
            "label2 sample": True,
        }

    @pytest.mark.parametrize("method,tokenize", [
        ("add_bigrams", bigrams),
        ("add_biunigrams", biunigrams),
        ("add_prefixes", prefixes),
        ("add_suffixes", suffixes),
    ])
    def test_text_helpers(self, method, tokenize):
        idx = Indexes()
        getattr(idx, method)("label1", TEXT1)
        getattr(idx, method)("label2", TEXT2)

        expected = {**keys_of("label1", tokenize(TEXT1)), **keys_of("label2", tokenize(TEXT2))}
        assert idx.must_build() == expected

    def test_add_something(self):
        now = datetime.now(timezone.utc)
        idx = Indexes()
        idx.add_something("label1", [TEXT1, TEXT2])
        idx.add_something("label2", 123)
        idx.add_something("label3", now)
        idx.add_something("label4", Timestamp(nanos=42))

        assert idx.must_build() == {
            f"label1 {TEXT1}": True,
            f"label1 {TEXT2}": True,
            "label2 123": True,
            f"label3 {Timestamp.from_datetime(now).nanos}": True,
            "label4 42": True,
        }

    def test_add_something_datetime(self):
        """Datetimes become epoch nanoseconds on both builders."""
        created = datetime(2020, 1, 1, tzinfo=timezone.utc)
        expected = {"created 1577836800000000000": True}

        assert Indexes().add_something("created", created).must_build() == expected
        assert Filters().add_something("created", created).must_build() == expected

    def test_add_all(self):
        idx = (
            Indexes()
            .add("label1", TEXT1, "sample")
            .add_bigrams("label2", TEXT1)
            .add_biunigrams("label3", TEXT1)
            .add_prefixes("label4", TEXT1)
            .add_something("label5", [TEXT1, "AbcdeF"])
        )

        expected = {
            f"label1 {TEXT1}": True,
            "label1 sample": True,
            **keys_of("label2", bigrams(TEXT1)),
            **keys_of("label3", biunigrams(TEXT1)),
            **keys_of("label4", prefixes(TEXT1)),
            f"label5 {TEXT1}": True,
            "label5 AbcdeF": True,
        }
        assert idx.must_build() == expected

    def test_add_idempotent(self):
        once = Indexes().add("label1", "a").must_build()
        twice = Indexes().add("label1", "a").add("label1", "a").must_build()
        assert once == twice

    def test_empty_tokens_dropped(self):
        idx = Indexes().add("label1", "", "a")
        assert idx.tokens("label1") == frozenset({"a"})

    def test_accessors(self):
        idx = Indexes().add("label1", "a", "b").add("label2", "c")
        assert idx.labels() == ["label1", "label2"]
        assert idx.tokens("label1") == frozenset({"a", "b"})
        assert idx.tokens("missing") == frozenset()


class TestIndexesConfig:
    """Tests for configuration-driven behavior."""

    def test_composite_labels(self):
        idx = Indexes(IndexConfig(composite_labels=("label1", "label2", "label3")))
        idx.add("label1", "a")
        idx.add("label2", "b")
        idx.add("label3", "c")
        idx.add("label4", "d")

        assert idx.must_build() == {
            "label1 a": True,
            "label2 b": True,
            "label3 c": True,
            "label4 d": True,
            "3 a;b": True,
            "5 a;c": True,
            "6 b;c": True,
            "7 a;b;c": True,
        }

    def test_single_composite_label_ignored(self):
        idx = Indexes(IndexConfig(composite_labels=("label1",))).add("label1", "a")
        assert idx.must_build() == {"label1 a": True}

    def test_ignore_case(self):
        idx = Indexes(IndexConfig(ignore_case=True))
        idx.add("label1", TEXT1, "saMPle")
        idx.add_bigrams("label2", TEXT1)
        idx.add_biunigrams("label3", TEXT1)
        idx.add_prefixes("label4", TEXT1)
        idx.add_something("label5", [TEXT1, "AbcdeF"])

        lowered = TEXT1.lower()
        expected = {
            f"label1 {lowered}": True,
            "label1 sample": True,
            **keys_of("label2", bigrams(lowered)),
            **keys_of("label3", biunigrams(lowered)),
            **keys_of("label4", prefixes(lowered)),
            f"label5 {lowered}": True,
            "label5 abcdef": True,
        }
        assert idx.must_build() == expected

    def test_case_fold_invariant(self):
        conf = IndexConfig(ignore_case=True, composite_labels=("x", "y"))
        built = [
            Indexes(conf).add("x", value).add_biunigrams("y", value).must_build()
            for value in ("HELLO", "hello", "HeLLo")
        ]
        assert built[0] == built[1] == built[2]

    def test_no_filters_sentinel_when_empty(self):
        idx = Indexes(IndexConfig(save_no_filters_index=True))
        assert idx.must_build() == {C.INDEX_NO_FILTERS: True}

    def test_sentinel_alongside_keys(self):
        """Every document carries the sentinel so unfiltered queries find it."""
        idx = Indexes(IndexConfig(save_no_filters_index=True)).add("label1", "a")
        assert idx.must_build() == {"label1 a": True, C.INDEX_NO_FILTERS: True}

    def test_empty_without_sentinel(self):
        assert Indexes().must_build() == {}

    def test_build_is_repeatable(self):
        idx = Indexes(IndexConfig(composite_labels=("x", "y"))).add("x", "1").add("y", "2")
        assert idx.must_build() == idx.must_build()


class TestIndexesLimits:
    """Tests for size and label limits."""

    def test_max_size(self):
        idx = Indexes()
        for i in range(C.MAX_INDEXES_SIZE):
            idx.add(f"label{i}", "abc")

        result = idx.build()
        assert result.is_ok()
        assert len(result.unwrap()) == C.MAX_INDEXES_SIZE

    def test_size_exceeded(self):
        idx = Indexes()
        for i in range(C.MAX_INDEXES_SIZE + 1):
            idx.add(f"label{i}", "abc")

        result = idx.build()
        assert result.is_err()
        assert isinstance(result.error, LimitExceededError)
        assert result.error.context["size"] == C.MAX_INDEXES_SIZE + 1

    def test_size_counts_composite_keys(self):
        # 32 + 230 simple keys fit; the 16 * 16 composite keys push past the limit
        idx = Indexes(IndexConfig(composite_labels=("x", "y")))
        idx.add("x", *[f"x{i}" for i in range(16)])
        idx.add("y", *[f"y{i}" for i in range(16)])
        for i in range(230):
            idx.add(f"label{i}", "v")
        assert idx.build().is_err()

    def test_too_many_composite_labels(self):
        labels = tuple(chr(ord("a") + i) for i in range(C.MAX_COMPOSITE_INDEX_LABELS + 1))
        result = Indexes(IndexConfig(composite_labels=labels)).build()
        assert result.is_err()
        assert isinstance(result.error, ConfigurationError)

    def test_max_composite_labels(self):
        labels = tuple(chr(ord("a") + i) for i in range(C.MAX_COMPOSITE_INDEX_LABELS))
        idx = Indexes(IndexConfig(composite_labels=labels))
        for label in labels:
            idx.add(label, "v")
        assert idx.build().is_ok()

    def test_must_build_raises_limit(self):
        idx = Indexes()
        for i in range(C.MAX_INDEXES_SIZE + 1):
            idx.add(f"label{i}", "abc")
        with pytest.raises(LimitExceededError):
            idx.must_build()

    def test_must_build_raises_configuration(self):
        labels = tuple(chr(ord("a") + i) for i in range(C.MAX_COMPOSITE_INDEX_LABELS + 1))
        with pytest.raises(ConfigurationError):
            Indexes(IndexConfig(composite_labels=labels)).must_build()
