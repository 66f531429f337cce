"""Composite executor — a linked list of handlers that is itself a handler.

Manifesto:
    Chains are built once and applied many times. The executor walks its
    nodes from ``first``, stops at the first handler that signals stop and
    returns that handler's outcome. Errors are not caught: a failing
    handler aborts the rest of the chain and reaches the caller as raised.

ARCHITECTURE
────────────
::

    LinkArmory("checkout", a, b, c).logic_link
        → BusinessLinkedList(name="checkout")  [a] ⇄ [b] ⇄ [c]

    apply(request, ctx)
        a.apply → CONTINUE
        b.apply → Stop("stopped-at-b")   ──▶ return Stop("stopped-at-b")
        c       (never invoked)

    no handler stopped                   ──▶ return EXHAUSTED

Because ``BusinessLinkedList`` is a handler, a chain can be a member of
another chain (an inner ``Stop`` stops the outer chain too; an inner
``EXHAUSTED`` lets the outer chain continue) or be returned by a router's
mapper.

Example::

    from composekit.link import chain, proceed, stop, DynamicContext

    checkout = chain("checkout", validate, reserve_stock, charge)
    outcome = checkout.apply(order, DynamicContext())

Tags:
    composekit, link, chain-of-responsibility, composite

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from composekit.core.logging import get_logger
from composekit.link.context import DynamicContext
from composekit.link.handler import (
    EXHAUSTED,
    Handler,
    LogicHandler,
    Stop,
    as_handler,
    handler_name,
    unwrap,
)
from composekit.link.node_store import LinkedList

T = TypeVar("T")
D = TypeVar("D", bound=DynamicContext)

logger = get_logger(__name__)


class BusinessLinkedList(LinkedList[Handler], LogicHandler[T, D, Any]):
    """Ordered handlers executed in sequence until one signals stop."""

    def __init__(self, name: str):
        super().__init__(name)

    def apply(self, request: T, context: D) -> Any:
        """Run handlers in order.

        Returns:
            The ``Stop`` outcome of the first handler that stopped (plain
            return values of handlers that cleared ``context.proceed``
            directly are wrapped in ``Stop``), or ``EXHAUSTED``.
        """
        current = self.first
        position = 0
        while current is not None:
            handler = current.item
            outcome = handler.apply(request, context)
            if isinstance(outcome, Stop):
                context.set_proceed(False)
            elif not context.is_proceed():
                outcome = Stop(outcome)
            if isinstance(outcome, Stop):
                logger.debug(
                    "chain_short_circuit",
                    chain=self.name,
                    handler=handler_name(handler),
                    position=position,
                )
                return outcome
            current = current.next
            position += 1

        logger.debug("chain_exhausted", chain=self.name, size=self.size)
        return EXHAUSTED

    def execute(self, request: T, context: D) -> Any:
        """``apply`` and return the business value (``None`` if no handler stopped)."""
        return unwrap(self.apply(request, context))


class LinkArmory:
    """Builds a :class:`BusinessLinkedList` from handlers in order."""

    def __init__(self, link_name: str, *logic_handlers: Handler | Callable[..., Any]):
        self._logic_link: BusinessLinkedList = BusinessLinkedList(link_name)
        for logic_handler in logic_handlers:
            self._logic_link.add(as_handler(logic_handler))
        logger.debug("chain_built", chain=link_name, size=self._logic_link.size)

    @property
    def logic_link(self) -> BusinessLinkedList:
        return self._logic_link


def chain(name: str, *handlers: Handler | Callable[..., Any]) -> BusinessLinkedList:
    """Build a composite executor named ``name`` from ``handlers``.

    Plain callables ``fn(request, context)`` are wrapped in
    :class:`~composekit.link.handler.FunctionHandler`.
    """
    return LinkArmory(name, *handlers).logic_link
