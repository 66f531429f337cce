"""
composekit - in-process composition primitives.

- composekit.link: chain-of-responsibility executor over shared context
- composekit.tree: strategy routing tree with default fallback and prefetch
- composekit.strategy: identifier-keyed strategy registry
- composekit.core: errors, logging, settings
"""

__version__ = "0.1.0"

from composekit.core.errors import (
    ComposeError,
    PrefetchError,
    PrefetchTimeoutError,
    StrategyConflictError,
    StrategyNotFoundError,
    UnknownCodeError,
)
from composekit.link import (
    CONTINUE,
    EXHAUSTED,
    AbstractLogicLink,
    BusinessLinkedList,
    DynamicContext,
    LinkArmory,
    LogicHandler,
    Stop,
    chain,
    proceed,
    stop,
    unwrap,
)
from composekit.strategy import BaseEnum, BaseStrategy, StrategyRegistry, get_by_code
from composekit.tree import (
    DEFAULT,
    AbstractMultiThreadStrategyRouter,
    AbstractStrategyRouter,
    MappedStrategyRouter,
    RegistryStrategyMapper,
    StrategyMapper,
)

__all__ = [
    "__version__",
    # errors
    "ComposeError",
    "PrefetchError",
    "PrefetchTimeoutError",
    "StrategyConflictError",
    "StrategyNotFoundError",
    "UnknownCodeError",
    # link
    "CONTINUE",
    "EXHAUSTED",
    "AbstractLogicLink",
    "BusinessLinkedList",
    "DynamicContext",
    "LinkArmory",
    "LogicHandler",
    "Stop",
    "chain",
    "proceed",
    "stop",
    "unwrap",
    # strategy
    "BaseEnum",
    "BaseStrategy",
    "StrategyRegistry",
    "get_by_code",
    # tree
    "DEFAULT",
    "AbstractMultiThreadStrategyRouter",
    "AbstractStrategyRouter",
    "MappedStrategyRouter",
    "RegistryStrategyMapper",
    "StrategyMapper",
]
