"""Mapper that selects handlers from a :class:`StrategyRegistry`.

Lets a router pick its next node by identifier, the same way strategies
are resolved elsewhere::

    registry = StrategyRegistry(PayNode, [AlipayNode(), WechatNode()])
    mapper = RegistryStrategyMapper(registry, key=lambda req, ctx: req.pay_code,
                                    enum_class=PayType)
    router = MappedStrategyRouter(mapper, default_strategy_handler=UnsupportedNode())
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from composekit.strategy.base_enum import Code
from composekit.strategy.registry import StrategyRegistry
from composekit.tree.handler import StrategyHandler, StrategyMapper

T = TypeVar("T")
D = TypeVar("D")
R = TypeVar("R")


class RegistryStrategyMapper(StrategyMapper[T, D, R]):
    """Maps ``key(request, context)`` to the strategy registered for it.

    ``key`` returns an enum member, a raw code (requires ``enum_class``),
    or ``None`` to select nothing. Unknown codes raise
    :class:`~composekit.core.errors.UnknownCodeError`; a valid but
    unregistered identifier selects nothing.
    """

    def __init__(
        self,
        registry: StrategyRegistry[Any, Any],
        key: Callable[[T, D], Enum | Code | None],
        enum_class: type[Enum] | None = None,
    ):
        self.registry = registry
        self.key = key
        self.enum_class = enum_class

    def get(self, request: T, context: D) -> StrategyHandler[T, D, R] | None:
        identifier = self.key(request, context)
        if identifier is None:
            return None
        if isinstance(identifier, Enum):
            return self.registry.get_strategy(identifier)
        if self.enum_class is None:
            raise TypeError(
                f"Mapping raw code {identifier!r} requires enum_class on {type(self).__name__}"
            )
        return self.registry.get_strategy_by_code(identifier, self.enum_class)
