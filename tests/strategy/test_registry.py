"""
Tests for composekit.strategy.registry module.

Tests cover:
- Manual registration and lookup by member / raw code
- Duplicate-code conflicts (fatal for explicit strategies, logged inside discovery)
- Unknown-code validation
- Discovery merging and discovery-failure tolerance
- Read-only view
"""

import pytest
from structlog.testing import capture_logs

from _support.domain import AlipayStrategy, PayStrategy, PayType, WechatStrategy
from composekit.core.config import ComposeSettings
from composekit.core.errors import (
    DiscoveryError,
    StrategyConflictError,
    StrategyNotFoundError,
    UnknownCodeError,
)
from composekit.strategy import StaticDiscovery, StrategyRegistry


class TestManualRegistration:
    """Tests for registration through extra_strategies and register_strategy."""

    def test_lookup_by_member_returns_same_instance(self):
        first = PayStrategy(PayType.ALIPAY)
        second = PayStrategy(PayType.WECHAT)
        registry = StrategyRegistry(PayStrategy, [first, second])

        assert registry.get_strategy(PayType.ALIPAY) is first
        assert registry.get_strategy(PayType.WECHAT) is second

    def test_lookup_by_raw_code(self):
        alipay = AlipayStrategy()
        registry = StrategyRegistry(PayStrategy, [alipay])

        assert registry.get_strategy(1, PayType) is alipay
        assert registry.get_strategy_by_code(1, PayType) is alipay

    def test_valid_but_unregistered_is_none(self):
        registry = StrategyRegistry(PayStrategy, [AlipayStrategy()])
        assert registry.get_strategy(PayType.CARD) is None
        assert registry.get_strategy(3, PayType) is None

    def test_empty_registry(self):
        registry = StrategyRegistry(PayStrategy)
        assert len(registry) == 0
        assert registry.get_all_strategies() == {}

    def test_register_after_construction(self):
        registry = StrategyRegistry(PayStrategy)
        card = PayStrategy(PayType.CARD)
        registry.register_strategy(card)
        assert registry.get_strategy(PayType.CARD) is card

    def test_register_strategies_none_is_noop(self):
        registry = StrategyRegistry(PayStrategy)
        registry.register_strategies(None)
        assert len(registry) == 0

    def test_none_strategy_rejected(self):
        registry = StrategyRegistry(PayStrategy)
        with pytest.raises(ValueError, match="strategy must not be None"):
            registry.register_strategy(None)

    def test_none_strategy_type_rejected(self):
        registry = StrategyRegistry(PayStrategy)
        with pytest.raises(ValueError, match="strategy_type must not be None"):
            registry.register_strategy(PayStrategy(None, label="broken"))

    def test_wrong_abstraction_rejected(self):
        registry = StrategyRegistry(PayStrategy)
        with pytest.raises(TypeError, match="Expected PayStrategy"):
            registry.register_strategy(object())

    def test_contains(self):
        registry = StrategyRegistry(PayStrategy, [AlipayStrategy()])
        assert PayType.ALIPAY in registry
        assert 1 in registry
        assert PayType.WECHAT not in registry


class TestConflicts:
    """Duplicate codes among explicit strategies are fatal and never replace the first entry."""

    def test_duplicate_in_constructor_raises(self):
        with pytest.raises(StrategyConflictError) as exc_info:
            StrategyRegistry(
                PayStrategy,
                [PayStrategy(PayType.ALIPAY), PayStrategy(PayType.ALIPAY, label="other")],
            )
        assert exc_info.value.code == 1
        assert exc_info.value.context.registry == "PayStrategy"

    def test_duplicate_keeps_first(self):
        first = PayStrategy(PayType.ALIPAY, label="first")
        registry = StrategyRegistry(PayStrategy, [first])

        with pytest.raises(StrategyConflictError):
            registry.register_strategy(PayStrategy(PayType.ALIPAY, label="second"))

        assert registry.get_strategy(1, PayType) is first
        assert len(registry) == 1

    def test_same_instance_twice_conflicts(self):
        alipay = AlipayStrategy()
        registry = StrategyRegistry(PayStrategy, [alipay])
        with pytest.raises(StrategyConflictError):
            registry.register_strategy(alipay)


class TestUnknownCode:
    def test_unknown_code_raises(self):
        registry = StrategyRegistry(PayStrategy, [AlipayStrategy()])
        with pytest.raises(UnknownCodeError):
            registry.get_strategy(42, PayType)

    def test_unknown_code_is_value_error(self):
        registry = StrategyRegistry(PayStrategy)
        with pytest.raises(ValueError):
            registry.get_strategy_by_code(42, PayType)

    def test_raw_code_without_enum_class(self):
        registry = StrategyRegistry(PayStrategy, [AlipayStrategy()])
        with pytest.raises(TypeError, match="requires enum_class"):
            registry.get_strategy(1)


class TestRequireStrategy:
    def test_returns_registered(self):
        alipay = AlipayStrategy()
        registry = StrategyRegistry(PayStrategy, [alipay])
        assert registry.require_strategy(PayType.ALIPAY) is alipay
        assert registry.require_strategy(1, PayType) is alipay

    def test_raises_when_unregistered(self):
        registry = StrategyRegistry(PayStrategy)
        with pytest.raises(StrategyNotFoundError) as exc_info:
            registry.require_strategy(PayType.CARD)
        assert exc_info.value.code == 3

    def test_not_found_is_lookup_error(self):
        registry = StrategyRegistry(PayStrategy)
        with pytest.raises(LookupError):
            registry.require_strategy(2, PayType)


class TestReadOnlyView:
    def test_view_cannot_be_mutated(self):
        registry = StrategyRegistry(PayStrategy, [AlipayStrategy()])
        view = registry.get_all_strategies()
        with pytest.raises(TypeError):
            view[2] = WechatStrategy()

    def test_view_reflects_later_registration(self):
        registry = StrategyRegistry(PayStrategy)
        view = registry.get_all_strategies()
        registry.register_strategy(WechatStrategy())
        assert list(view) == [2]

    def test_insertion_order(self):
        registry = StrategyRegistry(
            PayStrategy, [WechatStrategy(), PayStrategy(PayType.CARD), AlipayStrategy()]
        )
        assert list(registry.get_all_strategies()) == [2, 3, 1]


class TestDiscovery:
    """Discovery-sourced candidates are merged before manual ones."""

    def test_discovery_and_manual_are_merged(self):
        discovery = StaticDiscovery({PayStrategy: [AlipayStrategy]})
        wechat = WechatStrategy()

        registry = StrategyRegistry(PayStrategy, [wechat], discovery=discovery)

        assert isinstance(registry.get_strategy(PayType.ALIPAY), AlipayStrategy)
        assert registry.get_strategy(PayType.WECHAT) is wechat
        assert list(registry.get_all_strategies()) == [1, 2]

    def test_discovery_receives_abstraction(self):
        seen = []

        def discovery(abstraction):
            seen.append(abstraction)
            return []

        StrategyRegistry(PayStrategy, discovery=discovery)
        assert seen == [PayStrategy]

    def test_discovery_failure_is_logged_not_raised(self):
        def discovery(abstraction):
            yield AlipayStrategy()
            raise DiscoveryError("provider index unreadable")

        registry = StrategyRegistry(PayStrategy, [WechatStrategy()], discovery=discovery)

        assert PayType.ALIPAY in registry
        assert PayType.WECHAT in registry

    def test_discovery_callable_raising_immediately(self):
        def discovery(abstraction):
            raise RuntimeError("boom")

        registry = StrategyRegistry(PayStrategy, [AlipayStrategy()], discovery=discovery)
        assert len(registry) == 1

    def test_conflict_between_discovery_and_manual_is_fatal(self):
        discovery = StaticDiscovery({PayStrategy: [AlipayStrategy]})
        with pytest.raises(StrategyConflictError):
            StrategyRegistry(PayStrategy, [AlipayStrategy()], discovery=discovery)

    def test_conflict_inside_discovery_is_logged(self):
        discovery = StaticDiscovery({PayStrategy: [AlipayStrategy, AlipayStrategy]})
        wechat = WechatStrategy()

        with capture_logs() as logs:
            registry = StrategyRegistry(PayStrategy, [wechat], discovery=discovery)

        assert list(registry.get_all_strategies()) == [1, 2]
        assert registry.get_strategy(PayType.WECHAT) is wechat
        failures = [e for e in logs if e["event"] == "strategy_discovery_failed"]
        assert len(failures) == 1
        assert failures[0]["error_type"] == "StrategyConflictError"
        assert failures[0]["loaded"] == 1

    def test_conflict_inside_discovery_stops_loading(self):
        discovery = StaticDiscovery(
            {PayStrategy: [AlipayStrategy, AlipayStrategy, WechatStrategy]}
        )
        registry = StrategyRegistry(PayStrategy, discovery=discovery)
        assert list(registry.get_all_strategies()) == [1]

    def test_duplicate_in_manual_list_after_discovery_is_fatal(self):
        discovery = StaticDiscovery({PayStrategy: [WechatStrategy]})
        with pytest.raises(StrategyConflictError):
            StrategyRegistry(
                PayStrategy, [AlipayStrategy(), AlipayStrategy()], discovery=discovery
            )

    def test_discovery_disabled_by_settings(self):
        discovery = StaticDiscovery({PayStrategy: [AlipayStrategy]})
        registry = StrategyRegistry(
            PayStrategy,
            discovery=discovery,
            settings=ComposeSettings(discovery_enabled=False),
        )
        assert len(registry) == 0

    def test_discovery_disabled_by_env(self, monkeypatch):
        monkeypatch.setenv("COMPOSEKIT_DISCOVERY_ENABLED", "false")
        discovery = StaticDiscovery({PayStrategy: [AlipayStrategy]})
        registry = StrategyRegistry(PayStrategy, discovery=discovery)
        assert len(registry) == 0
