"""
Text Tokenizers for Substring / Prefix / Suffix Keys

Every function splits its input on ASCII space only and returns a
deduplicated set. Python strings iterate by code point, so multi-byte
characters (e.g. "あ") are never split.

    bigrams("ab cd")   -> {"ab", "cd"}
    prefixes("abc")    -> {"a", "ab", "abc"}
    suffixes("abc")    -> {"c", "bc", "abc"}

Complexity: O(sum of len(word)**2) for prefixes/suffixes, O(len(s)) otherwise
"""

from __future__ import annotations

from typing import Iterator

from indexmesh.core.constants import WORD_SEPARATOR


def _words(s: str) -> Iterator[str]:
    """Non-empty words of s; runs of spaces never produce empty words."""
    for word in s.split(WORD_SEPARATOR):
        if word:
            yield word


def bigrams(s: str) -> set[str]:
    """Adjacent code point pairs within each word of s."""
    tokens: set[str] = set()
    for word in _words(s):
        for i in range(len(word) - 1):
            tokens.add(word[i:i + 2])
    return tokens


def unigrams(s: str) -> set[str]:
    """Every non-space code point of s."""
    return {c for c in s if c != WORD_SEPARATOR}


def biunigrams(s: str) -> set[str]:
    """Bigrams and unigrams of s."""
    return bigrams(s) | unigrams(s)


def prefixes(s: str) -> set[str]:
    """Every non-empty prefix of each word of s."""
    tokens: set[str] = set()
    for word in _words(s):
        for end in range(1, len(word) + 1):
            tokens.add(word[:end])
    return tokens


def suffixes(s: str) -> set[str]:
    """Every non-empty suffix of each word of s."""
    # prefixes of the reversed word, reversed back
    tokens: set[str] = set()
    for word in _words(s):
        reversed_word = word[::-1]
        for end in range(1, len(reversed_word) + 1):
            tokens.add(reversed_word[:end][::-1])
    return tokens
