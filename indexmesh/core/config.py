"""
Configuration Management for indexmesh

Provides validated configuration with sensible defaults.
Supports environment variable overrides.

Design:
- Immutable after validation
- Fail-fast on invalid configuration
- DEFAULT_CONFIG is a constant, passed wherever no config is supplied
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from indexmesh.core.types import Result, Ok, Err
from indexmesh.core.errors import ConfigurationError
from indexmesh.core import constants as C


@dataclass(frozen=True)
class IndexConfig:
    """
    Extra index configuration shared by Indexes and Filters.

    Attributes:
        composite_labels: Ordered labels combined into composite keys.
            Bit i of a composite mask identifies composite_labels[i].
        ignore_case: Lowercase every token at insertion
        save_no_filters_index: Emit INDEX_NO_FILTERS when a build
            would otherwise be empty
    """

    composite_labels: tuple[str, ...] = ()
    ignore_case: bool = False
    save_no_filters_index: bool = False

    def __post_init__(self) -> None:
        # Accept any sequence but keep the stored value hashable
        if not isinstance(self.composite_labels, tuple):
            object.__setattr__(self, "composite_labels", tuple(self.composite_labels))

    def validate(self) -> Result[IndexConfig, ConfigurationError]:
        """Validate configuration invariants."""
        if len(self.composite_labels) > C.MAX_COMPOSITE_INDEX_LABELS:
            return Err(ConfigurationError.too_many_composite_labels(
                count=len(self.composite_labels),
                limit=C.MAX_COMPOSITE_INDEX_LABELS,
            ))
        return Ok(self)


DEFAULT_CONFIG = IndexConfig()


def validate_config(conf: IndexConfig) -> Result[IndexConfig, ConfigurationError]:
    """Validate conf, returning the same instance on success."""
    return conf.validate()


def must_validate_config(conf: IndexConfig) -> IndexConfig:
    """Validate conf and raise ConfigurationError if it is invalid."""
    result = conf.validate()
    if result.is_err():
        raise result.error
    return result.unwrap()


@dataclass(frozen=True)
class ObservabilityConfig:
    """Logging configuration."""

    log_level: str = "INFO"
    log_json: bool = True


def _env_flag(name: str, default: str = "false") -> bool:
    value = os.getenv(C.ENV_PREFIX + name, default).strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"{C.ENV_PREFIX}{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class IndexMeshConfig:
    """Root configuration."""

    index: IndexConfig = field(default_factory=IndexConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)

    @classmethod
    def from_env(cls) -> Result[IndexMeshConfig, str]:
        """
        Load configuration from environment variables.

        Environment variables are prefixed with INDEXMESH_.
        Example: INDEXMESH_COMPOSITE_LABELS=status,type
        """
        try:
            raw_labels = os.getenv(C.ENV_PREFIX + "COMPOSITE_LABELS", "")
            index = IndexConfig(
                composite_labels=tuple(
                    label.strip() for label in raw_labels.split(",") if label.strip()
                ),
                ignore_case=_env_flag("IGNORE_CASE"),
                save_no_filters_index=_env_flag("SAVE_NO_FILTERS"),
            )

            observability = ObservabilityConfig(
                log_level=os.getenv(C.ENV_PREFIX + "LOG_LEVEL", "INFO").upper(),
                log_json=_env_flag("LOG_JSON", "true"),
            )

            return Ok(cls(index=index, observability=observability))
        except (ValueError, TypeError) as e:
            return Err(f"Configuration error: {e}")

    def validate(self) -> Result[None, str]:
        """Validate configuration invariants."""
        result = self.index.validate()
        if result.is_err():
            return Err(result.error.message)
        if self.observability.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return Err(f"Unknown log level: {self.observability.log_level}")
        return Ok(None)
