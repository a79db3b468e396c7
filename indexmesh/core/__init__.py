"""
Core module: Type definitions, error hierarchy, and configuration.

This module provides the foundational abstractions for indexmesh:
- Result/Either monad for fallible builds
- Error hierarchy with pattern matching support
- Configuration management with validation
"""

from indexmesh.core.types import (
    Result,
    Ok,
    Err,
    Bit,
    LabelTokenMap,
    Timestamp,
)
from indexmesh.core.errors import (
    ErrorCode,
    IndexMeshError,
    ConfigurationError,
    LimitExceededError,
)
from indexmesh.core.config import (
    DEFAULT_CONFIG,
    IndexConfig,
    IndexMeshConfig,
    ObservabilityConfig,
    must_validate_config,
    validate_config,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "Bit",
    "LabelTokenMap",
    "Timestamp",
    "ErrorCode",
    "IndexMeshError",
    "ConfigurationError",
    "LimitExceededError",
    "DEFAULT_CONFIG",
    "IndexConfig",
    "IndexMeshConfig",
    "ObservabilityConfig",
    "must_validate_config",
    "validate_config",
]
