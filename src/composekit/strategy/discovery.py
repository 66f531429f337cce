"""Provider discovery collaborators for :class:`StrategyRegistry`.

A discovery collaborator is any callable ``discovery(abstraction)`` that
returns an iterable of instances implementing ``abstraction``. The
registry does not care how they are found. Two ready-made collaborators:

- ``StaticDiscovery``: an explicit table assembled at startup.
- ``EntryPointDiscovery``: providers advertised by installed distributions
  under an ``importlib.metadata`` entry-point group.

Failures are reported as :class:`~composekit.core.errors.DiscoveryError`;
the registry logs them and keeps whatever was registered so far.

Example::

    discovery = StaticDiscovery()
    discovery.register(PayStrategy, AlipayStrategy)       # factory
    discovery.register(PayStrategy, WechatStrategy())     # instance

    registry = StrategyRegistry(PayStrategy, discovery=discovery)

    # pyproject.toml of a plugin distribution:
    #   [project.entry-points."shop.pay_strategies"]
    #   card = "shop_card.strategy:CardStrategy"
    registry = StrategyRegistry(
        PayStrategy, discovery=EntryPointDiscovery("shop.pay_strategies")
    )
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from importlib.metadata import entry_points
from typing import Any, TypeVar

from composekit.core.errors import DiscoveryError
from composekit.core.logging import get_logger

S = TypeVar("S")

Discovery = Callable[[type], Iterable[Any]]

logger = get_logger(__name__)


class StaticDiscovery:
    """Discovery backed by an explicit ``{abstraction: [providers]}`` table.

    A provider is either an instance of the abstraction or a zero-arg
    factory (usually the implementing class) called on each discovery.
    """

    def __init__(self, table: Mapping[type, Iterable[Any]] | None = None):
        self._table: dict[type, list[Any]] = {
            abstraction: list(providers) for abstraction, providers in (table or {}).items()
        }

    def register(self, abstraction: type, provider: Any) -> Any:
        """Add ``provider`` for ``abstraction``; returns ``provider`` (decorator friendly)."""
        self._table.setdefault(abstraction, []).append(provider)
        return provider

    def providers(self, abstraction: type) -> list[Any]:
        return list(self._table.get(abstraction, []))

    def __call__(self, abstraction: type[S]) -> Iterator[S]:
        for provider in self._table.get(abstraction, []):
            if isinstance(provider, abstraction):
                yield provider
                continue
            try:
                instance = provider()
            except Exception as e:
                raise DiscoveryError(
                    f"Provider {provider!r} for {abstraction.__name__} failed to instantiate",
                    cause=e,
                ) from e
            yield instance


class EntryPointDiscovery:
    """Discovery through an ``importlib.metadata`` entry-point group.

    Each entry point may name a class (instantiated with no arguments) or
    a ready instance. Loaded objects that do not implement the requested
    abstraction are skipped.
    """

    def __init__(self, group: str):
        self.group = group

    def __call__(self, abstraction: type[S]) -> Iterator[S]:
        for ep in entry_points(group=self.group):
            try:
                obj = ep.load()
                instance = obj() if isinstance(obj, type) else obj
            except Exception as e:
                raise DiscoveryError(
                    f"Entry point '{ep.name}' in group '{self.group}' failed to load",
                    cause=e,
                ) from e

            if not isinstance(instance, abstraction):
                logger.debug(
                    "discovery_candidate_skipped",
                    group=self.group,
                    entry_point=ep.name,
                    expected=abstraction.__name__,
                    got=type(instance).__name__,
                )
                continue
            yield instance
