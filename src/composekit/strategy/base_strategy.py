"""Strategy contract: an interchangeable implementation tagged with its identifier."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from composekit.strategy.base_enum import BaseEnum

T = TypeVar("T", bound=BaseEnum)


class BaseStrategy(ABC, Generic[T]):
    """
    Base class for strategies served by a :class:`StrategyRegistry`.

    Subclasses implement ``execute`` and report which identifier they
    serve through ``get_strategy_type``. The identifier's ``code`` is the
    registry key, so two strategies of one abstraction must not share it.
    """

    @abstractmethod
    def execute(self, *params: Any) -> Any: ...

    @abstractmethod
    def get_strategy_type(self) -> T: ...

    def __repr__(self) -> str:
        strategy_type = self.get_strategy_type()
        return f"<{type(self).__name__} code={getattr(strategy_type, 'code', None)!r}>"
