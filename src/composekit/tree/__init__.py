"""
composekit.tree - strategy routing tree.

Public API:
    StrategyHandler, DEFAULT                 handler contract / no-op fallback
    StrategyMapper                           decision contract
    AbstractStrategyRouter                   mapper + handler with fallback
    MappedStrategyRouter                     router from a mapper object
    AbstractMultiThreadStrategyRouter        prefetch, then route
    RegistryStrategyMapper                   mapper backed by a StrategyRegistry
"""

from composekit.tree.handler import DEFAULT, StrategyHandler, StrategyMapper
from composekit.tree.mapper import RegistryStrategyMapper
from composekit.tree.router import (
    AbstractMultiThreadStrategyRouter,
    AbstractStrategyRouter,
    MappedStrategyRouter,
)

__all__ = [
    "AbstractMultiThreadStrategyRouter",
    "AbstractStrategyRouter",
    "DEFAULT",
    "MappedStrategyRouter",
    "RegistryStrategyMapper",
    "StrategyHandler",
    "StrategyMapper",
]
