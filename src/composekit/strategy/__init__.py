"""
composekit.strategy - identifier-keyed strategy registry.

Public API:
    BaseEnum, get_by_code          identifier capability
    IdentifierCapability           structural protocol (code, desc)
    BaseStrategy                   strategy contract
    StrategyRegistry               code -> strategy table
    StaticDiscovery                explicit discovery table
    EntryPointDiscovery            importlib.metadata entry points
"""

from composekit.strategy.base_enum import BaseEnum, Code, IdentifierCapability, get_by_code
from composekit.strategy.base_strategy import BaseStrategy
from composekit.strategy.discovery import Discovery, EntryPointDiscovery, StaticDiscovery
from composekit.strategy.registry import StrategyRegistry

__all__ = [
    "BaseEnum",
    "BaseStrategy",
    "Code",
    "Discovery",
    "EntryPointDiscovery",
    "IdentifierCapability",
    "StaticDiscovery",
    "StrategyRegistry",
    "get_by_code",
]
