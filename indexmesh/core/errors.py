"""
Error Hierarchy for indexmesh

Only two failure kinds exist, both deterministic for a given
configuration and input:

- ConfigurationError: composite label list is too long
- LimitExceededError: a single build produced too many keys

Each error type includes:
- Unique error code for programmatic handling
- Human-readable message for logging
- Optional cause chain
- Context dict carrying the offending sizes

Usage:
    result = indexes.build()
    match result:
        case Ok(keys):
            save(keys)
        case Err(LimitExceededError() as e):
            log.warning("too many keys", **e.context)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from indexmesh.core.types import Timestamp


# =============================================================================
# ERROR CODE ENUMERATION
# =============================================================================
class ErrorCode(Enum):
    """
    Unique error codes for programmatic error handling.

    Codes are grouped by subsystem:
    - 1xxx: Configuration errors
    - 2xxx: Limit errors
    """

    # Configuration errors (1xxx)
    CONFIG_TOO_MANY_COMPOSITE_LABELS = 1001

    # Limit errors (2xxx)
    LIMIT_INDEX_SIZE_EXCEEDED = 2001


# =============================================================================
# BASE ERROR CLASS
# =============================================================================
@dataclass
class IndexMeshError(Exception):
    """
    Base class for all indexmesh errors.

    Returned inside Err by fallible operations and raised as-is by
    the must_* convenience calls.
    """

    code: ErrorCode
    message: str
    error_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: Timestamp = field(default_factory=Timestamp.now)
    cause: Optional[Exception] = None
    context: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize error to dictionary for structured logging."""
        return {
            "error_id": self.error_id,
            "code": self.code.name,
            "code_value": self.code.value,
            "message": self.message,
            "timestamp_nanos": self.timestamp.nanos,
            "context": self.context,
        }

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message} (id={self.error_id[:8]})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"code={self.code.name}, "
            f"message={self.message!r}, "
            f"error_id={self.error_id!r})"
        )


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================
@dataclass
class ConfigurationError(IndexMeshError):
    """
    Invalid caller configuration.

    Detected by config validation and again by the composite
    engine when validation was skipped.
    """

    @classmethod
    def too_many_composite_labels(
        cls,
        count: int,
        limit: int,
    ) -> ConfigurationError:
        """Composite label list exceeds the supported label count."""
        return cls(
            code=ErrorCode.CONFIG_TOO_MANY_COMPOSITE_LABELS,
            message=f"CompositeIdxLabels size exceeds {limit} (got {count})",
            context={"count": count, "limit": limit},
        )


# =============================================================================
# LIMIT ERRORS
# =============================================================================
@dataclass
class LimitExceededError(IndexMeshError):
    """A build produced more keys than a document may carry."""

    @classmethod
    def index_size_exceeded(
        cls,
        size: int,
        limit: int,
    ) -> LimitExceededError:
        return cls(
            code=ErrorCode.LIMIT_INDEX_SIZE_EXCEEDED,
            message=f"index size exceeds {limit} (got {size})",
            context={"size": size, "limit": limit},
        )
