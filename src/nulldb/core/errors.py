"""
Structured error types for nulldb.

The null adapter itself never raises for well-formed calls: unknown
tables degrade to empty results and constraint calls are swallowed.
Errors only surface at the boundary glue, where configuration is
resolved, schema files are executed, or the active connection is
switched. That keeps the taxonomy deliberately narrow.

Every error carries:
- **Category:** What kind of error (config, schema, state, internal)
- **Context:** Structured metadata (table, path, config key, adapter)
- **Cause:** Chained underlying exception for root cause analysis

Architecture:
    ::

        ┌───────────────────────────────────────────────────────┐
        │                     NullDBError                        │
        │           (category, context, cause)                   │
        ├───────────────────────────────────────────────────────┤
        │                                                        │
        │  ConfigError        SchemaLoadError   AdapterStateError│
        │  (CONFIG)           (SCHEMA)          (STATE)          │
        │      │                                                 │
        │  MissingConfigError                                    │
        │  InvalidConfigError                                    │
        └───────────────────────────────────────────────────────┘

Examples:
    >>> error = MissingConfigError("project_root")
    >>> error.category
    <ErrorCategory.CONFIG: 'CONFIG'>
    >>> error.with_context(adapter="NullDB").context.adapter
    'NullDB'

Guardrails:
    ❌ DON'T: Raise from a data operation on the adapter
    ✅ DO: Degrade to an empty result and keep recording

    ❌ DON'T: Swallow the original exception from a schema file
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, error-context, nulldb

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification."""

    CONFIG = "CONFIG"             # Missing config, invalid settings
    SCHEMA = "SCHEMA"             # Schema file missing or failed to execute
    STATE = "STATE"               # Operation not valid for the active connection
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Only non-None fields are serialized by ``to_dict()``; anything that
    does not fit a typed field goes into ``metadata``.

    Attributes:
        table: Table name involved, if any
        path: Filesystem path involved (schema file, project root)
        key: Configuration key that was missing or invalid
        adapter: Adapter name of the connection involved
        metadata: Additional key-value pairs
    """

    table: str | None = None
    path: str | None = None
    key: str | None = None
    adapter: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["table", "path", "key", "adapter"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class NullDBError(Exception):
    """
    Base exception for all nulldb errors.

    Subclasses set ``default_category`` so callers can route on the
    category without matching on class names.

    Examples:
        >>> error = NullDBError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["error_type"]
        'NullDBError'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> NullDBError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ConfigError("Bad root").with_context(path="/srv/app")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(NullDBError):
    """Configuration error. The configuration must be fixed by the caller."""

    default_category = ErrorCategory.CONFIG


class MissingConfigError(ConfigError):
    """Required configuration is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(
            message or f"Missing required configuration: {key}",
            context=ErrorContext(key=key),
        )


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(
            message or f"Invalid configuration for {key}: {value!r}",
            context=ErrorContext(key=key),
        )


# =============================================================================
# SCHEMA / STATE ERRORS
# =============================================================================


class SchemaLoadError(NullDBError):
    """A schema file could not be found or raised while executing."""

    default_category = ErrorCategory.SCHEMA

    def __init__(self, path: str, message: str, *, cause: Exception | None = None):
        self.path = path
        super().__init__(message, context=ErrorContext(path=path), cause=cause)


class AdapterStateError(NullDBError):
    """Operation is not valid for the currently active connection."""

    default_category = ErrorCategory.STATE


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "NullDBError",
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigError",
    "SchemaLoadError",
    "AdapterStateError",
]
