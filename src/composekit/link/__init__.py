"""
composekit.link - chain-of-responsibility primitives.

Public API:
    LinkedList, Node           ordered node store
    DynamicContext             per-request key/value bag + proceed flag
    Handler, LogicHandler      handler contract / base class
    FunctionHandler            plain function adapter
    CONTINUE, EXHAUSTED, Stop  tagged outcomes
    proceed(), stop(), unwrap()
    BusinessLinkedList         composite executor
    LinkArmory, chain()        builders
    AbstractLogicLink          hand-wired singly-linked chain
"""

from composekit.link.chain import BusinessLinkedList, LinkArmory, chain
from composekit.link.context import DynamicContext
from composekit.link.handler import (
    CONTINUE,
    EXHAUSTED,
    Continue,
    Exhausted,
    FunctionHandler,
    Handler,
    LogicHandler,
    Outcome,
    Stop,
    as_handler,
    proceed,
    stop,
    unwrap,
)
from composekit.link.logic_link import AbstractLogicLink
from composekit.link.node_store import LinkedList, Node

__all__ = [
    "AbstractLogicLink",
    "BusinessLinkedList",
    "CONTINUE",
    "Continue",
    "DynamicContext",
    "EXHAUSTED",
    "Exhausted",
    "FunctionHandler",
    "Handler",
    "LinkArmory",
    "LinkedList",
    "LogicHandler",
    "Node",
    "Outcome",
    "Stop",
    "as_handler",
    "chain",
    "proceed",
    "stop",
    "unwrap",
]
