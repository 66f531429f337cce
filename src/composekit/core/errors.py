"""
Structured error types for composekit.

Every error the framework raises on its own behalf derives from
``ComposeError`` and carries a category, a structured context and an
optional chained cause. Errors raised by plugged-in handlers and mappers
are never wrapped: they reach the caller exactly as raised.

Manifesto:
    - **Typed hierarchy:** one subclass per failure the framework can detect
    - **Fail fast:** registration conflicts and unknown codes are fatal per call
    - **Rich context:** errors carry registry, chain and router metadata
    - **Error chaining:** prefetch failures keep the original task exception

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                        ComposeError                              │
        │               (category, context, cause)                         │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  RegistryError          DiscoveryError       PrefetchError       │
        │  (REGISTRY)             (DISCOVERY)          (PREFETCH)          │
        │       │                                            │             │
        │  StrategyConflictError                   PrefetchTimeoutError    │
        │  UnknownCodeError                        PrefetchInterruptedError│
        │  StrategyNotFoundError                   PrefetchExecutionError  │
        │                                                                  │
        │  LinkError (CHAIN)                                               │
        └─────────────────────────────────────────────────────────────────┘

Propagation policy:
    - StrategyConflictError: construction/registration fails immediately
    - UnknownCodeError: the lookup call fails
    - PrefetchError: the concurrent router call fails before routing
    - DiscoveryError: caught and logged by the registry, never escalated

Tags:
    error-handling, exception-hierarchy, error-context, composekit

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

import builtins
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification."""

    REGISTRY = "REGISTRY"          # Duplicate code, unknown code, missing strategy
    DISCOVERY = "DISCOVERY"        # Provider discovery failures
    CHAIN = "CHAIN"                # Chain/link misuse
    PREFETCH = "PREFETCH"          # Concurrent prefetch phase
    CONFIG = "CONFIG"              # Invalid settings
    INTERNAL = "INTERNAL"          # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"            # Uncategorized errors


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only fields that are set end up in ``to_dict()``. Anything that does not
    fit a named field goes into ``metadata``.

    Attributes:
        registry: Name of the strategy abstraction the registry serves
        chain: Name of the chain (composite executor) involved
        router: Class name of the router involved
        code: Strategy code involved in a registry operation
        enum_class: Name of the identifier enum a code was validated against
        metadata: Additional key-value pairs
    """

    registry: str | None = None
    chain: str | None = None
    router: str | None = None
    code: int | str | None = None
    enum_class: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["registry", "chain", "router", "code", "enum_class"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ComposeError(Exception):
    """
    Base exception for all composekit errors.

    Subclasses set ``default_category``. Context can be supplied at
    construction or added fluently with ``with_context()``.

    Examples:
        >>> error = ComposeError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> error = RegistryError("bad").with_context(registry="PayStrategy", code=3)
        >>> error.context.code
        3
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ComposeError:
        """
        Add context to this error (fluent API).

        Usage:
            raise RegistryError("Failed").with_context(registry="PayStrategy", code=1)
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
# REGISTRY ERRORS
# =============================================================================


class RegistryError(ComposeError):
    """Strategy registry error."""

    default_category = ErrorCategory.REGISTRY


class StrategyConflictError(RegistryError):
    """A strategy with the same code is already registered."""

    def __init__(self, code: int | str, *, registry: str | None = None):
        self.code = code
        super().__init__(
            f"Duplicate strategy registration, code={code!r}",
            context=ErrorContext(registry=registry, code=code),
        )


class UnknownCodeError(RegistryError, ValueError):
    """No member of the identifier enum carries the requested code."""

    def __init__(self, code: int | str, enum_class: type):
        self.code = code
        self.enum_class = enum_class
        super().__init__(
            f"Unknown code {code!r} in {enum_class.__name__}",
            context=ErrorContext(code=code, enum_class=enum_class.__name__),
        )


class StrategyNotFoundError(RegistryError, LookupError):
    """The identifier is valid but no strategy is registered for it."""

    def __init__(self, code: int | str, *, registry: str | None = None):
        self.code = code
        super().__init__(
            f"No strategy registered for code={code!r}",
            context=ErrorContext(registry=registry, code=code),
        )


# =============================================================================
# DISCOVERY ERRORS
# =============================================================================


class DiscoveryError(ComposeError):
    """Provider discovery failed to produce a candidate."""

    default_category = ErrorCategory.DISCOVERY


# =============================================================================
# CHAIN ERRORS
# =============================================================================


class LinkError(ComposeError):
    """Misuse of a logic link, e.g. delegating past the last link."""

    default_category = ErrorCategory.CHAIN


# =============================================================================
# PREFETCH ERRORS
# =============================================================================


class PrefetchError(ComposeError):
    """The prefetch phase of a concurrent router failed."""

    default_category = ErrorCategory.PREFETCH


class PrefetchTimeoutError(PrefetchError, builtins.TimeoutError):
    """Prefetch tasks did not finish within the timeout."""

    def __init__(self, timeout: float, pending: list[str] | None = None):
        self.timeout = timeout
        self.pending = pending or []
        msg = f"Prefetch timed out after {timeout}s"
        if self.pending:
            msg += f" (pending: {', '.join(self.pending)})"
        super().__init__(msg)


class PrefetchInterruptedError(PrefetchError):
    """A prefetch task was cancelled before it produced a result."""


class PrefetchExecutionError(PrefetchError):
    """A prefetch task raised; the original exception is the cause."""

    def __init__(self, key: str, cause: BaseException):
        self.key = key
        super().__init__(f"Prefetch task '{key}' failed: {cause}", cause=cause)


def categorize_error(error: BaseException) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, ComposeError):
        return error.category
    if isinstance(error, builtins.TimeoutError):
        return ErrorCategory.PREFETCH
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ComposeError",
    "RegistryError",
    "StrategyConflictError",
    "UnknownCodeError",
    "StrategyNotFoundError",
    "DiscoveryError",
    "LinkError",
    "PrefetchError",
    "PrefetchTimeoutError",
    "PrefetchInterruptedError",
    "PrefetchExecutionError",
    "categorize_error",
]
