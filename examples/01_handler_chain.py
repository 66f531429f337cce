#!/usr/bin/env python3
"""Handler Chain — Ordered Handlers Sharing One Request Context.

================================================================================
WHY A CHAIN?
================================================================================

Checkout logic tends to grow as one long function::

    def checkout(order):
        if not order.items: ...
        if stock_too_low(order): ...
        if fraud_score(order) > 0.9: ...
        charge(order)

A chain splits each check into a handler. Handlers run in order, share a
``DynamicContext``, and any one of them can stop the chain with a result::

    validate ──▶ reserve_stock ──▶ fraud_check ──▶ charge
                      │
                      └── stop(ctx, "out-of-stock")  (charge never runs)


================================================================================
RUN IT
================================================================================

    python examples/01_handler_chain.py
"""

from composekit.link import (
    EXHAUSTED,
    DynamicContext,
    LogicHandler,
    Stop,
    chain,
    proceed,
    stop,
)


class ReserveStock(LogicHandler):
    def __init__(self, stock: dict[str, int]):
        self.stock = stock

    def apply(self, request, context):
        available = self.stock.get(request["sku"], 0)
        if request["qty"] > available:
            return stop(context, "out-of-stock")
        context.set_value("reserved", request["qty"])
        return proceed(context)


def validate(request, context):
    if request["qty"] <= 0:
        return stop(context, "invalid-quantity")
    return proceed(context)


def charge(request, context):
    return stop(context, f"charged {context.get_value('reserved')} x {request['sku']}")


def main():
    print("=" * 60)
    print("Handler Chain")
    print("=" * 60)

    checkout = chain("checkout", validate, ReserveStock({"apple": 3}), charge)
    print(f"\n  Built {checkout!r} with {len(checkout)} handlers")

    # === 1. Every handler runs, the last one stops with a result ===
    print("\n[1] Happy path")
    outcome = checkout.apply({"sku": "apple", "qty": 2}, DynamicContext())
    print(f"  outcome: {outcome}")

    # === 2. A middle handler short-circuits ===
    print("\n[2] Short-circuit")
    ctx = DynamicContext()
    outcome = checkout.apply({"sku": "apple", "qty": 9}, ctx)
    print(f"  outcome: {outcome}  proceed={ctx.is_proceed()}")

    # === 3. execute() returns the business value only ===
    print("\n[3] execute()")
    print(f"  value: {checkout.execute({'sku': 'pear', 'qty': 1}, DynamicContext())}")

    # === 4. Nothing stops ===
    print("\n[4] Exhausted chain")
    audit = chain("audit", lambda req, ctx: proceed(ctx))
    outcome = audit.apply("anything", DynamicContext())
    print(f"  outcome: {outcome}  exhausted={outcome is EXHAUSTED}")

    # === 5. A chain is a handler, so chains nest ===
    print("\n[5] Nested chains")
    outer = chain("outer", chain("inner", validate), charge)
    ctx = DynamicContext({"reserved": 1})
    outcome = outer.apply({"sku": "apple", "qty": 1}, ctx)
    assert isinstance(outcome, Stop)
    print(f"  outcome: {outcome}")

    print("\n" + "=" * 60)
    print("[OK] Handler Chain Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
