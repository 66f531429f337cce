"""Handler contract and tagged chain outcomes.

Manifesto:
    A chain handler does one piece of work and says whether the chain
    should go on. Saying so through the return type (``Continue`` vs
    ``Stop(value)``) keeps short-circuiting visible at the call site; the
    context's ``proceed`` flag is kept in sync for handlers that still
    read it.

ARCHITECTURE
────────────
::

    Handler (Protocol)          apply(request, context) -> R
      ├── LogicHandler (ABC)    base class for chain handlers
      │     └── FunctionHandler adapts fn(request, context)
      └── BusinessLinkedList    composite executor (chain.py)

    Outcomes
      ├── CONTINUE              proceed(ctx)        → proceed=True
      ├── Stop(value)           stop(ctx, value)    → proceed=False
      └── EXHAUSTED             chain ran every handler, none stopped

Example::

    class CheckStock(LogicHandler):
        def apply(self, request, context):
            if request.quantity > context.get_value("stock", 0):
                return stop(context, "out-of-stock")
            return proceed(context)

Tags:
    composekit, link, handler, chain-of-responsibility

Doc-Types:
    api-reference
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from composekit.link.context import DynamicContext

T = TypeVar("T")
D = TypeVar("D", bound=DynamicContext)
R = TypeVar("R")


@runtime_checkable
class Handler(Protocol[T, D, R]):
    """Anything that consumes a request and a context and produces a result."""

    def apply(self, request: T, context: D) -> R: ...


# =============================================================================
# Outcomes
# =============================================================================


class Continue:
    """Keep going: the next handler in the chain runs."""

    _instance: Continue | None = None

    def __new__(cls) -> Continue:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CONTINUE"


class Exhausted:
    """Every handler ran and none of them stopped the chain."""

    _instance: Exhausted | None = None

    def __new__(cls) -> Exhausted:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EXHAUSTED"


@dataclass(frozen=True)
class Stop(Generic[R]):
    """Short-circuit the chain with ``value``."""

    value: R = None


CONTINUE = Continue()
EXHAUSTED = Exhausted()

Outcome = Continue | Stop | Exhausted


def proceed(context: DynamicContext) -> Continue:
    """Mark the context to continue and return ``CONTINUE``."""
    context.set_proceed(True)
    return CONTINUE


def stop(context: DynamicContext, value: Any = None) -> Stop:
    """Mark the context to stop and return ``Stop(value)``."""
    context.set_proceed(False)
    return Stop(value)


def unwrap(outcome: Any) -> Any:
    """Business value of an outcome.

    ``Stop.value`` for a stop, ``None`` for ``CONTINUE``/``EXHAUSTED``, and
    anything else is returned unchanged.
    """
    if isinstance(outcome, Stop):
        return outcome.value
    if isinstance(outcome, (Continue, Exhausted)):
        return None
    return outcome


# =============================================================================
# Base classes
# =============================================================================


class LogicHandler(ABC, Generic[T, D, R]):
    """Base class for chain handlers."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def apply(self, request: T, context: D) -> R:
        """Do the work for ``request``; may raise any domain error."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class FunctionHandler(LogicHandler[T, D, R]):
    """Adapt a plain ``fn(request, context)`` into a handler."""

    def __init__(self, fn: Callable[[T, D], R], name: str | None = None):
        self._fn = fn
        self._name = name or getattr(fn, "__name__", type(fn).__name__)

    @property
    def name(self) -> str:
        return self._name

    def apply(self, request: T, context: D) -> R:
        return self._fn(request, context)


def as_handler(obj: Handler | Callable[..., Any]) -> Handler:
    """Return ``obj`` if it already has ``apply``, else wrap it in a FunctionHandler."""
    if isinstance(obj, Handler):
        return obj
    if callable(obj):
        return FunctionHandler(obj)
    raise TypeError(f"Expected a handler or callable, got {type(obj).__name__}")


def handler_name(handler: Any) -> str:
    """Human-readable name for logging."""
    name = getattr(handler, "name", None)
    if isinstance(name, str):
        return name
    return type(handler).__name__
