#!/usr/bin/env python3
"""Strategy Router — Decision Trees With a Default Fallback.

================================================================================
ROUTER SHAPE
================================================================================

Every node of a routing tree has the same two parts: ``get`` picks the
next handler, ``apply`` does the node's own work and calls ``router``::

    RootNode.apply(request, ctx)
        prefetch {"account", "risk"} concurrently  ─┐ timeout → PrefetchTimeoutError
        router(request, ctx)                        ◀┘
            get() → VipNode         (account.tier == "gold")
            get() → None            → default_strategy_handler


================================================================================
RUN IT
================================================================================

    python examples/02_strategy_router.py
"""

import time

from composekit.core.errors import PrefetchTimeoutError
from composekit.link import DynamicContext
from composekit.tree import AbstractMultiThreadStrategyRouter, AbstractStrategyRouter


class VipNode(AbstractStrategyRouter):
    def get(self, request, context):
        return None

    def apply(self, request, context):
        return f"vip lane for {request}"


class RegularLane:
    def apply(self, request, context):
        return f"regular lane for {request}"


class RootNode(AbstractMultiThreadStrategyRouter):
    prefetch_timeout = 0.5

    def __init__(self, account_latency: float = 0.0):
        self.account_latency = account_latency
        self.vip = VipNode()
        self.default_strategy_handler = RegularLane()

    def load_account(self, user):
        time.sleep(self.account_latency)
        return {"user": user, "tier": "gold" if user.startswith("vip") else "basic"}

    def multi_thread(self, request, context):
        self.prefetch(
            context,
            {
                "account": lambda: self.load_account(request),
                "risk": lambda: 0.1,
            },
        )

    def do_apply(self, request, context):
        return self.router(request, context)

    def get(self, request, context):
        if context.get_value("account")["tier"] == "gold":
            return self.vip
        return None


def main():
    print("=" * 60)
    print("Strategy Router")
    print("=" * 60)

    root = RootNode()

    print("\n[1] Mapped handler")
    print(f"  {root.apply('vip-ann', DynamicContext())}")

    print("\n[2] Default fallback")
    ctx = DynamicContext()
    print(f"  {root.apply('bob', ctx)}  (prefetched: {ctx.keys()})")

    print("\n[3] Prefetch timeout aborts before routing")
    try:
        RootNode(account_latency=2.0).apply("vip-slow", DynamicContext())
    except PrefetchTimeoutError as e:
        print(f"  {type(e).__name__}: {e}")

    print("\n" + "=" * 60)
    print("[OK] Strategy Router Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
