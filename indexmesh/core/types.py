"""
Core Type Definitions for indexmesh

Implements the Result/Either monad used by every fallible build step,
plus the small value types shared across builders.

Design Principles:
- Fallible operations return Result, never raise
- "must_*" convenience calls are the only place an Err turns into an exception
- Value types are immutable
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import (
    Any,
    Final,
    Generic,
    Literal,
    NewType,
    TypeVar,
    Union,
)

# =============================================================================
# TYPE VARIABLES FOR GENERIC CONTAINERS
# =============================================================================
T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


# =============================================================================
# RESULT MONAD
# =============================================================================
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Success variant of Result monad.

    Wraps a built key set, a validated config or any other
    successful computation result.
    """

    value: T

    def is_ok(self) -> Literal[True]:
        return True

    def is_err(self) -> Literal[False]:
        return False

    def unwrap(self) -> T:
        """Extract value. Safe to call after is_ok() check."""
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """
    Failure variant of Result monad.

    Carries the typed error (ConfigurationError, LimitExceededError)
    unchanged to the caller.
    """

    error: E

    def is_ok(self) -> Literal[False]:
        return False

    def is_err(self) -> Literal[True]:
        return True

    def unwrap(self) -> Any:
        """
        Attempting to unwrap an error is a programming error.

        Raises:
            RuntimeError: Always, chained to the error when it is an exception
        """
        cause = self.error if isinstance(self.error, BaseException) else None
        raise RuntimeError(f"Called unwrap() on Err: {self.error}") from cause

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Union type for pattern matching
Result = Union[Ok[T], Err[E]]


# =============================================================================
# KEY TYPES
# =============================================================================
# Power-of-two value handed out by InBuilder.new_bit()
Bit = NewType("Bit", int)

# label -> deduplicated token set
LabelTokenMap = dict[str, set[str]]


# =============================================================================
# TIMESTAMP WITH NANOSECOND PRECISION
# =============================================================================
NANOS_PER_MICRO: Final = 1_000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True, order=True)
class Timestamp:
    """
    Nanoseconds since Unix epoch.

    Time-like index values are rendered as this integer so that
    equal instants always produce the same token regardless of
    timezone or formatting.
    """

    nanos: int

    @classmethod
    def now(cls) -> Timestamp:
        return cls(nanos=time.time_ns())

    @classmethod
    def from_datetime(cls, dt: datetime) -> Timestamp:
        """
        Convert a datetime to Timestamp.

        Naive datetimes are taken as UTC. Integer arithmetic keeps
        microsecond precision exact (no float rounding).
        """
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        delta = dt - _EPOCH
        micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
        return cls(nanos=micros * NANOS_PER_MICRO)

    def __str__(self) -> str:
        return str(self.nanos)

    def __repr__(self) -> str:
        return f"Timestamp({self.nanos}ns)"
