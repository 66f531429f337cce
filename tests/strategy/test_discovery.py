"""Tests for composekit.strategy.discovery — StaticDiscovery and EntryPointDiscovery."""

from unittest.mock import MagicMock, patch

import pytest

from _support.domain import AlipayStrategy, PayStrategy, WechatStrategy
from composekit.core.errors import DiscoveryError
from composekit.strategy import EntryPointDiscovery, StaticDiscovery, StrategyRegistry


class TestStaticDiscovery:
    def test_instances_are_yielded_as_is(self):
        alipay = AlipayStrategy()
        discovery = StaticDiscovery({PayStrategy: [alipay]})
        assert list(discovery(PayStrategy)) == [alipay]

    def test_factories_are_called(self):
        discovery = StaticDiscovery({PayStrategy: [AlipayStrategy]})
        (instance,) = list(discovery(PayStrategy))
        assert isinstance(instance, AlipayStrategy)

    def test_unknown_abstraction_yields_nothing(self):
        assert list(StaticDiscovery()(PayStrategy)) == []

    def test_register_returns_provider(self):
        discovery = StaticDiscovery()
        assert discovery.register(PayStrategy, WechatStrategy) is WechatStrategy
        assert discovery.providers(PayStrategy) == [WechatStrategy]

    def test_factories_called_on_each_discovery(self):
        discovery = StaticDiscovery({PayStrategy: [AlipayStrategy]})
        (first,) = list(discovery(PayStrategy))
        (second,) = list(discovery(PayStrategy))
        assert first is not second

    def test_failing_factory_raises_discovery_error(self):
        def broken():
            raise RuntimeError("no config")

        discovery = StaticDiscovery({PayStrategy: [broken]})
        with pytest.raises(DiscoveryError) as exc_info:
            list(discovery(PayStrategy))
        assert isinstance(exc_info.value.cause, RuntimeError)


def _entry_point(name, obj=None, error=None):
    ep = MagicMock()
    ep.name = name
    if error is not None:
        ep.load.side_effect = error
    else:
        ep.load.return_value = obj
    return ep


class TestEntryPointDiscovery:
    def test_classes_are_instantiated(self):
        eps = [_entry_point("alipay", AlipayStrategy), _entry_point("wechat", WechatStrategy)]
        with patch("composekit.strategy.discovery.entry_points", return_value=eps) as mock_eps:
            found = list(EntryPointDiscovery("shop.pay")(PayStrategy))

        mock_eps.assert_called_once_with(group="shop.pay")
        assert [type(s) for s in found] == [AlipayStrategy, WechatStrategy]

    def test_instances_are_used_directly(self):
        alipay = AlipayStrategy()
        eps = [_entry_point("alipay", alipay)]
        with patch("composekit.strategy.discovery.entry_points", return_value=eps):
            assert list(EntryPointDiscovery("g")(PayStrategy)) == [alipay]

    def test_foreign_objects_are_skipped(self):
        eps = [_entry_point("other", object), _entry_point("alipay", AlipayStrategy)]
        with patch("composekit.strategy.discovery.entry_points", return_value=eps):
            found = list(EntryPointDiscovery("g")(PayStrategy))
        assert [type(s) for s in found] == [AlipayStrategy]

    def test_load_failure_raises_discovery_error(self):
        eps = [_entry_point("broken", error=ImportError("missing module"))]
        with patch("composekit.strategy.discovery.entry_points", return_value=eps):
            with pytest.raises(DiscoveryError, match="broken"):
                list(EntryPointDiscovery("g")(PayStrategy))

    def test_registry_keeps_partial_results_on_load_failure(self):
        eps = [
            _entry_point("alipay", AlipayStrategy),
            _entry_point("broken", error=ImportError("missing module")),
            _entry_point("wechat", WechatStrategy),
        ]
        with patch("composekit.strategy.discovery.entry_points", return_value=eps):
            registry = StrategyRegistry(PayStrategy, discovery=EntryPointDiscovery("g"))

        assert list(registry.get_all_strategies()) == [1]
