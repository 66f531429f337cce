"""Strategy routers — select a handler through a mapper, fall back to a default.

Manifesto:
    Decision trees are easier to follow when every node has the same
    shape: a mapper that picks the next node and a handler that does the
    work. Routers are both, so a router can be the handler another router
    selects.

ARCHITECTURE
────────────
::

    router(request, ctx)
        Idle → Mapping:      handler = self.get(request, ctx)
             → Dispatching:  handler.apply(...)                 (found)
                             default_strategy_handler.apply(...) (None)
             → Done
        any exception → Failed (propagates, no retry, no fallback)

    AbstractMultiThreadStrategyRouter.apply(request, ctx)
        Prefetching:  multi_thread(request, ctx)   may raise PrefetchError
        then:         do_apply(request, ctx)       usually calls router()

    prefetch(ctx, {"user": load_user, "quota": load_quota}, timeout=2.0)
        ThreadPoolExecutor → wait(FIRST_EXCEPTION, timeout)
        all ok   → results stored in ctx under their keys
        timeout  → PrefetchTimeoutError (also builtin TimeoutError)
        raised   → PrefetchExecutionError (original chained)
        cancel   → PrefetchInterruptedError   (cancel event set, or task raised CancelledError)

Example::

    class RootNode(AbstractMultiThreadStrategyRouter):
        def multi_thread(self, request, ctx):
            self.prefetch(ctx, {"account": lambda: accounts.load(request.user_id)})

        def do_apply(self, request, ctx):
            return self.router(request, ctx)

        def get(self, request, ctx):
            return self.vip_node if ctx.get_value("account").vip else None

Tags:
    composekit, tree, router, strategy, prefetch, concurrency

Doc-Types:
    api-reference
"""

from __future__ import annotations

import threading
import time
from abc import abstractmethod
from collections.abc import Callable, Mapping
from concurrent.futures import FIRST_EXCEPTION, CancelledError, Future, ThreadPoolExecutor, wait
from typing import Any, TypeVar

from composekit.core.config import get_settings
from composekit.core.errors import (
    PrefetchExecutionError,
    PrefetchInterruptedError,
    PrefetchTimeoutError,
)
from composekit.core.logging import get_logger
from composekit.link.handler import handler_name
from composekit.tree.handler import DEFAULT, StrategyHandler, StrategyMapper

T = TypeVar("T")
D = TypeVar("D")
R = TypeVar("R")

logger = get_logger(__name__)

CANCEL_POLL_SECONDS = 0.05


class AbstractStrategyRouter(StrategyMapper[T, D, R]):
    """Mapper + handler with a default fallback.

    Subclasses implement ``get`` (the decision) and ``apply`` (usually
    ``return self.router(request, context)`` plus any node-local work).
    """

    default_strategy_handler: StrategyHandler[T, D, R] = DEFAULT

    @property
    def name(self) -> str:
        return type(self).__name__

    def router(self, request: T, context: D) -> R:
        """Dispatch to the mapped handler, or to the default if none was mapped.

        Errors from the mapper or the selected handler are logged as
        ``route_failed`` and re-raised unchanged.
        """
        logger.debug("route_mapping", router=self.name)
        stage = "mapping"
        try:
            strategy_handler = self.get(request, context)
            fallback = strategy_handler is None
            if fallback:
                strategy_handler = self.default_strategy_handler

            logger.debug(
                "route_dispatch",
                router=self.name,
                handler=handler_name(strategy_handler),
                fallback=fallback,
            )
            stage = "dispatching"
            result = strategy_handler.apply(request, context)
        except Exception as e:
            logger.debug(
                "route_failed",
                router=self.name,
                stage=stage,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        logger.debug("route_done", router=self.name)
        return result

    @abstractmethod
    def apply(self, request: T, context: D) -> R: ...


class MappedStrategyRouter(AbstractStrategyRouter[T, D, R]):
    """Router assembled from a separate mapper object instead of subclassing."""

    def __init__(
        self,
        mapper: StrategyMapper[T, D, R],
        default_strategy_handler: StrategyHandler[T, D, R] | None = None,
    ):
        self.mapper = mapper
        if default_strategy_handler is not None:
            self.default_strategy_handler = default_strategy_handler

    def get(self, request: T, context: D) -> StrategyHandler[T, D, R] | None:
        return self.mapper.get(request, context)

    def apply(self, request: T, context: D) -> R:
        return self.router(request, context)


class AbstractMultiThreadStrategyRouter(AbstractStrategyRouter[T, D, R]):
    """Router that prefetches data concurrently before routing.

    ``prefetch_timeout`` and ``prefetch_max_workers`` override the
    settings defaults for one router class.
    """

    prefetch_timeout: float | None = None
    prefetch_max_workers: int | None = None

    def apply(self, request: T, context: D) -> R:
        self.multi_thread(request, context)
        return self.do_apply(request, context)

    @abstractmethod
    def multi_thread(self, request: T, context: D) -> None:
        """Load data needed for routing; block until done or raise."""

    @abstractmethod
    def do_apply(self, request: T, context: D) -> R:
        """Business step, run only after ``multi_thread`` returned."""

    def prefetch(
        self,
        context: D,
        tasks: Mapping[str, Callable[[], Any]],
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> dict[str, Any]:
        """Run ``tasks`` concurrently and store their results in ``context``.

        Results are written from the calling thread after every task has
        succeeded; tasks never touch the context themselves.

        Args:
            context: Request context receiving ``key -> result``
            tasks: Zero-arg callables keyed by context key
            timeout: Seconds to wait for all tasks
            cancel: Event that abandons the wait once set (checked every
                ``CANCEL_POLL_SECONDS``)

        Returns:
            ``key -> result`` in the order of ``tasks``

        Raises:
            PrefetchTimeoutError: Tasks still pending after ``timeout``
            PrefetchExecutionError: A task raised
            PrefetchInterruptedError: ``cancel`` was set while tasks were
                pending, or a task raised ``CancelledError``
        """
        if not tasks:
            return {}

        settings = get_settings()
        if timeout is None:
            timeout = self.prefetch_timeout
        if timeout is None:
            timeout = settings.prefetch_timeout_seconds
        max_workers = self.prefetch_max_workers
        if max_workers is None:
            max_workers = settings.prefetch_max_workers

        logger.debug("prefetch_started", router=self.name, tasks=list(tasks), timeout=timeout)

        executor = ThreadPoolExecutor(
            max_workers=min(max_workers, len(tasks)),
            thread_name_prefix=f"prefetch-{self.name}",
        )
        try:
            futures = {executor.submit(fn): key for key, fn in tasks.items()}
            done, not_done = _wait_all(futures, timeout, cancel)

            for future in done:
                key = futures[future]
                error = future.exception()
                if error is None:
                    continue
                if isinstance(error, CancelledError):
                    logger.warning("prefetch_interrupted", router=self.name, task=key)
                    raise PrefetchInterruptedError(
                        f"Prefetch task '{key}' was cancelled", cause=error
                    )
                logger.warning(
                    "prefetch_failed",
                    router=self.name,
                    task=key,
                    error=str(error),
                    error_type=type(error).__name__,
                )
                raise PrefetchExecutionError(key, error) from error

            if not_done:
                pending = sorted(futures[f] for f in not_done)
                if cancel is not None and cancel.is_set():
                    logger.warning("prefetch_interrupted", router=self.name, pending=pending)
                    raise PrefetchInterruptedError(
                        f"Prefetch cancelled with tasks pending: {', '.join(pending)}"
                    )
                logger.warning(
                    "prefetch_timeout", router=self.name, timeout=timeout, pending=pending
                )
                raise PrefetchTimeoutError(timeout, pending)

            results = {key: future.result() for future, key in futures.items()}
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        for key, value in results.items():
            context.set_value(key, value)

        logger.debug("prefetch_completed", router=self.name, tasks=list(results))
        return results


def _wait_all(
    futures: Mapping[Future, str],
    timeout: float,
    cancel: threading.Event | None,
) -> tuple[set[Future], set[Future]]:
    """``wait(FIRST_EXCEPTION)`` that also returns early once ``cancel`` is set."""
    if cancel is None:
        return wait(futures, timeout=timeout, return_when=FIRST_EXCEPTION)

    deadline = time.monotonic() + timeout
    while True:
        remaining = max(0.0, deadline - time.monotonic())
        done, not_done = wait(
            futures,
            timeout=min(CANCEL_POLL_SECONDS, remaining),
            return_when=FIRST_EXCEPTION,
        )
        if not not_done or cancel.is_set() or remaining == 0.0:
            return done, not_done
        if any(f.exception() is not None for f in done):
            return done, not_done
