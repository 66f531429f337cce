"""Tests for composekit.link.logic_link — hand-wired singly-linked chains."""

import pytest

from composekit.core.errors import LinkError
from composekit.link import AbstractLogicLink, DynamicContext


class BlacklistRule(AbstractLogicLink):
    def apply(self, request, context):
        if request in context.get_value("blacklist", ()):
            return "blocked"
        return self._next(request, context)


class WeightRule(AbstractLogicLink):
    def apply(self, request, context):
        result = self._next(request, context)
        return f"weighted({result})"


class DefaultRule(AbstractLogicLink):
    def apply(self, request, context):
        return f"default:{request}"


class TestAbstractLogicLink:
    def test_new_link_has_no_next(self):
        assert DefaultRule().next() is None

    def test_append_next_returns_successor(self):
        head = BlacklistRule()
        weight = WeightRule()
        assert head.append_next(weight) is weight
        assert head.next() is weight

    def test_fluent_wiring_and_delegation(self):
        head = BlacklistRule()
        head.append_next(WeightRule()).append_next(DefaultRule())
        ctx = DynamicContext(values={"blacklist": {"mallory"}})

        assert head.apply("alice", ctx) == "weighted(default:alice)"

    def test_link_can_short_circuit(self):
        head = BlacklistRule()
        tail = DefaultRule()
        head.append_next(tail)
        ctx = DynamicContext(values={"blacklist": {"mallory"}})

        assert head.apply("mallory", ctx) == "blocked"

    def test_delegating_past_tail_raises(self):
        with pytest.raises(LinkError, match="no next link"):
            BlacklistRule().apply("alice", DynamicContext())
