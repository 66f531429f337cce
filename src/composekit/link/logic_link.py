"""Singly-linked logic chain — each link decides whether to delegate onward.

Unlike :class:`~composekit.link.chain.BusinessLinkedList`, where the
executor drives traversal, here each link owns a reference to its
successor and calls ``self._next(...)`` itself when it wants the chain to
continue. Useful when a link needs to post-process the successor's result.

Example::

    class RuleBlacklist(AbstractLogicLink):
        def apply(self, request, context):
            if request.user_id in BLACKLIST:
                return "blocked"
            return self._next(request, context)

    head = RuleBlacklist()
    head.append_next(RuleWeight()).append_next(RuleDefault())
    head.apply(request, DynamicContext())
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from composekit.core.errors import LinkError

T = TypeVar("T")
D = TypeVar("D")
R = TypeVar("R")


class AbstractLogicLink(ABC, Generic[T, D, R]):
    """One link of a hand-wired chain."""

    def __init__(self) -> None:
        self._next_link: AbstractLogicLink[T, D, R] | None = None

    def next(self) -> AbstractLogicLink[T, D, R] | None:
        """The successor link, or ``None`` at the tail."""
        return self._next_link

    def append_next(self, next_link: AbstractLogicLink[T, D, R]) -> AbstractLogicLink[T, D, R]:
        """Set the successor and return it, so calls can be chained."""
        self._next_link = next_link
        return next_link

    @abstractmethod
    def apply(self, request: T, context: D) -> R: ...

    def _next(self, request: T, context: D) -> R:
        if self._next_link is None:
            raise LinkError(f"{type(self).__name__} has no next link to delegate to")
        return self._next_link.apply(request, context)
