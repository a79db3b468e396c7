"""
Value Coercion: caller values -> index tokens

A closed set of shapes is accepted:

    None                                  -> no tokens
    str                                   -> [value]
    Timestamp / datetime                  -> [nanoseconds since Unix epoch]
    list / tuple / set / frozenset / ndarray -> one token per element
    bool                                  -> ["true"] / ["false"]
    any other scalar (int, float, numpy scalar, ...) -> [str(value)]
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import numpy as np

from indexmesh.core.types import Timestamp

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


def coerce_scalar(value: Any) -> str:
    """Render a single value as one token."""
    if isinstance(value, str):
        return value
    if isinstance(value, Timestamp):
        return str(value.nanos)
    if isinstance(value, datetime):
        return str(Timestamp.from_datetime(value).nanos)
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def coerce_tokens(value: Any) -> list[str]:
    """Render value as zero or more tokens."""
    if value is None:
        return []
    if isinstance(value, np.ndarray):
        return [coerce_scalar(element) for element in value.ravel().tolist()]
    if isinstance(value, _SEQUENCE_TYPES):
        return [coerce_scalar(element) for element in value if element is not None]
    return [coerce_scalar(value)]
