"""
composekit core - errors, logging and settings shared by every primitive.
"""

from composekit.core.config import ComposeSettings, get_settings, reset_settings
from composekit.core.errors import (
    ComposeError,
    DiscoveryError,
    ErrorCategory,
    ErrorContext,
    LinkError,
    PrefetchError,
    PrefetchExecutionError,
    PrefetchInterruptedError,
    PrefetchTimeoutError,
    RegistryError,
    StrategyConflictError,
    StrategyNotFoundError,
    UnknownCodeError,
    categorize_error,
)
from composekit.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
    unbind_context,
)

__all__ = [
    # Settings
    "ComposeSettings",
    "get_settings",
    "reset_settings",
    # Errors
    "ComposeError",
    "DiscoveryError",
    "ErrorCategory",
    "ErrorContext",
    "LinkError",
    "PrefetchError",
    "PrefetchExecutionError",
    "PrefetchInterruptedError",
    "PrefetchTimeoutError",
    "RegistryError",
    "StrategyConflictError",
    "StrategyNotFoundError",
    "UnknownCodeError",
    "categorize_error",
    # Logging
    "LogContext",
    "bind_context",
    "clear_context",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "unbind_context",
]
