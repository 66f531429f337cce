"""Identifier capability — enums whose members carry a stable code and a description.

Example::

    class PayType(BaseEnum):
        ALIPAY = (1, "Alipay")
        WECHAT = (2, "WeChat Pay")

    PayType.ALIPAY.code            # 1
    PayType.ALIPAY.desc            # "Alipay"
    get_by_code(PayType, 2)        # PayType.WECHAT
    get_by_code(PayType, 9)        # raises UnknownCodeError

The member value *is* the code. Plain enums would turn a second member
with the same value into an alias of the first; ``BaseEnum`` subclasses
reject that at class creation time instead.
"""

from __future__ import annotations

from enum import Enum, EnumMeta
from typing import Protocol, TypeVar, runtime_checkable

from composekit.core.errors import UnknownCodeError

Code = int | str


@runtime_checkable
class IdentifierCapability(Protocol):
    """Minimal shape a registry key must have."""

    @property
    def code(self) -> Code: ...

    @property
    def desc(self) -> str: ...


class _UniqueCodeMeta(EnumMeta):
    """Rejects members that share a code (which ``Enum`` would silently alias)."""

    def __new__(mcls, cls, bases, classdict, **kwargs):
        enum_class = super().__new__(mcls, cls, bases, classdict, **kwargs)
        duplicates = [
            (name, member.name)
            for name, member in enum_class.__members__.items()
            if name != member.name
        ]
        if duplicates:
            details = ", ".join(f"{alias} -> {name}" for alias, name in duplicates)
            raise ValueError(f"duplicate codes found in {cls}: {details}")
        return enum_class


class BaseEnum(Enum, metaclass=_UniqueCodeMeta):
    """Enum base whose members are declared as ``(code, desc)`` tuples."""

    def __new__(cls, code: Code, desc: str):
        obj = object.__new__(cls)
        obj._value_ = code
        obj._code = code
        obj._desc = desc
        return obj

    @property
    def code(self) -> Code:
        return self._code

    @property
    def desc(self) -> str:
        return self._desc


E = TypeVar("E", bound=Enum)


def get_by_code(enum_class: type[E], code: Code) -> E:
    """Return the member of ``enum_class`` whose ``code`` equals ``code``.

    ``BaseEnum`` subclasses resolve through the enum's value index; other
    enums exposing ``code`` are scanned.

    Raises:
        UnknownCodeError: If no member has that code
    """
    if issubclass(enum_class, BaseEnum):
        try:
            return enum_class(code)
        except ValueError:
            raise UnknownCodeError(code, enum_class) from None

    for member in enum_class:
        if member.code == code:
            return member
    raise UnknownCodeError(code, enum_class)
