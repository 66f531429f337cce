#!/usr/bin/env python3
"""Strategy Registry — Pluggable Implementations Keyed by Code.

================================================================================
HOW LOOKUP WORKS
================================================================================

::

    PayType.ALIPAY (code=1) ──┐
    raw code 1 + PayType  ────┼──▶ registry ──▶ AlipayStrategy
    raw code 99 + PayType ────┴──▶ UnknownCodeError
    PayType.CARD (valid, not registered) ──▶ None

Providers come from a discovery collaborator (entry points in production,
``StaticDiscovery`` here) and from an explicit list. A second provider for
the same code is a ``StrategyConflictError``.


================================================================================
RUN IT
================================================================================

    python examples/03_strategy_registry.py
"""

from enum import unique

from composekit.core.errors import StrategyConflictError, UnknownCodeError
from composekit.strategy import BaseEnum, BaseStrategy, StaticDiscovery, StrategyRegistry


@unique
class PayType(BaseEnum):
    ALIPAY = (1, "Alipay")
    WECHAT = (2, "WeChat Pay")
    CARD = (3, "Bank card")


class PayStrategy(BaseStrategy[PayType]):
    pay_type: PayType

    def execute(self, *params):
        amount = params[0]
        return f"paid {amount} with {self.pay_type.desc}"

    def get_strategy_type(self) -> PayType:
        return self.pay_type


class AlipayStrategy(PayStrategy):
    pay_type = PayType.ALIPAY


class WechatStrategy(PayStrategy):
    pay_type = PayType.WECHAT


def main():
    print("=" * 60)
    print("Strategy Registry")
    print("=" * 60)

    discovery = StaticDiscovery({PayStrategy: [AlipayStrategy]})
    registry = StrategyRegistry(PayStrategy, [WechatStrategy()], discovery=discovery)
    print(f"\n  {registry!r}")

    print("\n[1] Lookup by member and by raw code")
    print(f"  {registry.get_strategy(PayType.WECHAT).execute(10)}")
    print(f"  {registry.get_strategy(1, PayType).execute(20)}")

    print("\n[2] Valid but unregistered")
    print(f"  get_strategy(CARD) -> {registry.get_strategy(PayType.CARD)}")

    print("\n[3] Unknown code")
    try:
        registry.get_strategy(99, PayType)
    except UnknownCodeError as e:
        print(f"  {type(e).__name__}: {e}")

    print("\n[4] Duplicate registration")
    try:
        registry.register_strategy(AlipayStrategy())
    except StrategyConflictError as e:
        print(f"  {type(e).__name__}: {e}  context={e.context.to_dict()}")

    print("\n" + "=" * 60)
    print("[OK] Strategy Registry Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
