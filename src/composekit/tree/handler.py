"""Strategy handler and mapper contracts for the routing tree."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
D = TypeVar("D")
R = TypeVar("R")


@runtime_checkable
class StrategyHandler(Protocol[T, D, R]):
    """A node of the routing tree: handles a request given its context."""

    def apply(self, request: T, context: D) -> R: ...


class _DefaultStrategyHandler:
    """No-op fallback used when a mapper selects nothing."""

    name = "DEFAULT"

    def apply(self, request: Any, context: Any) -> None:
        return None

    def __repr__(self) -> str:
        return "StrategyHandler.DEFAULT"


DEFAULT: StrategyHandler[Any, Any, None] = _DefaultStrategyHandler()


class StrategyMapper(ABC, Generic[T, D, R]):
    """Selects the next handler for a request."""

    @abstractmethod
    def get(self, request: T, context: D) -> StrategyHandler[T, D, R] | None:
        """Return the handler to dispatch to, or ``None`` to use the default."""
