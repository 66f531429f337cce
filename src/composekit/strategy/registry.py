"""Strategy Registry — resolve pluggable implementations by identifier code.

Manifesto:
    Callers should pick an implementation by a stable identifier, not by
    importing a concrete class. The registry merges two sources of
    candidates (a discovery collaborator and an explicit list) into one
    ``code -> strategy`` table built at construction and read afterwards.

ARCHITECTURE
────────────
::

    StrategyRegistry(PayStrategy, extra_strategies=[...], discovery=...)
        1. discovery(PayStrategy) → register_strategy(each)   failures logged
        2. extra_strategies       → register_strategy(each)   failures raised

    register_strategy(s)      insert-if-absent by s.get_strategy_type().code
                              duplicate → StrategyConflictError (entry kept)
    get_strategy(PayType.X)   O(1), None if nothing registered
    get_strategy(1, PayType)  validates code against PayType first (O(1))
                              unknown → UnknownCodeError
    get_all_strategies()      read-only mapping view

Failure policy is asymmetric. Anything that goes wrong while loading from
discovery, including a duplicate code between two discovered providers,
is logged as ``strategy_discovery_failed``; loading stops there and
construction continues with what was registered. A duplicate code in the
explicit list, or an explicit strategy clashing with a discovered one,
raises ``StrategyConflictError``.

Concurrency:
    Construct-then-read. Lookups after construction are safe from any
    thread; later ``register_strategy`` calls must be externally
    synchronized.

Example::

    registry = StrategyRegistry(PayStrategy, [AlipayStrategy(), WechatStrategy()])
    registry.get_strategy(PayType.ALIPAY).execute(order)
    registry.get_strategy(2, PayType).execute(order)

Tags:
    composekit, strategy, registry, discovery, lookup

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from composekit.core.config import ComposeSettings, get_settings
from composekit.core.errors import StrategyConflictError, StrategyNotFoundError
from composekit.core.logging import get_logger
from composekit.strategy.base_enum import Code, get_by_code
from composekit.strategy.discovery import Discovery

T = TypeVar("T", bound=Enum)
S = TypeVar("S")

logger = get_logger(__name__)


class StrategyRegistry(Generic[T, S]):
    """Identifier-keyed table of strategies of one abstraction."""

    def __init__(
        self,
        strategy_class: type[S],
        extra_strategies: Iterable[S] | None = None,
        discovery: Discovery | None = None,
        *,
        settings: ComposeSettings | None = None,
    ):
        self._strategy_class = strategy_class
        self._strategy_map: dict[Code, S] = {}
        settings = settings or get_settings()

        if discovery is not None and settings.discovery_enabled:
            self._load_by_discovery(discovery)
        self.register_strategies(extra_strategies)

        logger.debug(
            "strategy_registry_built",
            registry=self.name,
            registered=len(self._strategy_map),
        )

    @property
    def name(self) -> str:
        return self._strategy_class.__name__

    @property
    def strategy_class(self) -> type[S]:
        return self._strategy_class

    # =========================================================================
    # Registration
    # =========================================================================

    def register_strategy(self, strategy: S) -> None:
        """Register ``strategy`` under its identifier's code.

        Raises:
            ValueError: If ``strategy`` or its strategy type is None
            TypeError: If ``strategy`` does not implement the abstraction
            StrategyConflictError: If the code is already registered
        """
        if strategy is None:
            raise ValueError("strategy must not be None")
        if not isinstance(strategy, self._strategy_class):
            raise TypeError(
                f"Expected {self.name}, got {type(strategy).__name__}"
            )
        strategy_type = strategy.get_strategy_type()
        if strategy_type is None:
            raise ValueError("strategy_type must not be None")

        code = strategy_type.code
        if code in self._strategy_map:
            raise StrategyConflictError(code, registry=self.name)
        self._strategy_map[code] = strategy

        logger.debug(
            "strategy_registered",
            registry=self.name,
            code=code,
            strategy=type(strategy).__name__,
        )

    def register_strategies(self, strategies: Iterable[S] | None) -> None:
        if strategies is None:
            return
        for strategy in strategies:
            self.register_strategy(strategy)

    def _load_by_discovery(self, discovery: Discovery) -> None:
        loaded = 0
        try:
            for strategy in discovery(self._strategy_class):
                self.register_strategy(strategy)
                loaded += 1
        except Exception as e:
            logger.warning(
                "strategy_discovery_failed",
                registry=self.name,
                loaded=loaded,
                error=str(e),
                error_type=type(e).__name__,
            )
            return
        logger.debug("strategy_discovery_loaded", registry=self.name, loaded=loaded)

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_strategy(self, strategy_type: T | Code, enum_class: type[T] | None = None) -> S | None:
        """Look up by enum member, or by raw code when ``enum_class`` is given.

        Raises:
            UnknownCodeError: If ``enum_class`` has no member with that code
            TypeError: If a raw code is passed without ``enum_class``
        """
        if enum_class is not None:
            return self.get_strategy_by_code(strategy_type, enum_class)
        if not isinstance(strategy_type, Enum):
            raise TypeError(
                f"Looking up by raw code {strategy_type!r} requires enum_class"
            )
        return self._strategy_map.get(strategy_type.code)

    def get_strategy_by_code(self, code: Code, enum_class: type[T]) -> S | None:
        """Validate ``code`` against ``enum_class``, then look it up."""
        strategy_type = get_by_code(enum_class, code)
        return self._strategy_map.get(strategy_type.code)

    def require_strategy(self, strategy_type: T | Code, enum_class: type[T] | None = None) -> S:
        """Like :meth:`get_strategy` but raise when nothing is registered.

        Raises:
            StrategyNotFoundError: If the identifier is valid but unregistered
        """
        strategy = self.get_strategy(strategy_type, enum_class)
        if strategy is None:
            code = strategy_type.code if isinstance(strategy_type, Enum) else strategy_type
            raise StrategyNotFoundError(code, registry=self.name)
        return strategy

    def get_all_strategies(self) -> Mapping[Code, S]:
        """Read-only view of ``code -> strategy``."""
        return MappingProxyType(self._strategy_map)

    def __len__(self) -> int:
        return len(self._strategy_map)

    def __contains__(self, key: Any) -> bool:
        code = key.code if isinstance(key, Enum) else key
        return code in self._strategy_map

    def __repr__(self) -> str:
        return f"StrategyRegistry({self.name}, codes={list(self._strategy_map)})"
