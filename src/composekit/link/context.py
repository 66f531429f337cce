"""Execution context — per-request state threaded through every handler.

A ``DynamicContext`` is created once per logical request and passed by
reference to each handler the request visits. It is not synchronized:
never share one instance between concurrently executing requests.
"""

from __future__ import annotations

from typing import Any


class DynamicContext:
    """
    Untyped key/value bag plus a continue/stop flag.

    ``proceed`` starts ``True``. Chain handlers clear it (usually through
    :func:`composekit.link.handler.stop`) to short-circuit the chain.

    Examples:
        >>> ctx = DynamicContext()
        >>> ctx.set_value("user_id", 42)
        >>> ctx.get_value("user_id")
        42
        >>> ctx.get_value("missing") is None
        True
        >>> ctx.is_proceed()
        True
    """

    def __init__(self, values: dict[str, Any] | None = None):
        self._proceed = True
        self._data_objects: dict[str, Any] = dict(values or {})

    def set_value(self, key: str, value: Any) -> None:
        self._data_objects[key] = value

    def get_value(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default`` if absent."""
        return self._data_objects.get(key, default)

    def is_proceed(self) -> bool:
        return self._proceed

    def set_proceed(self, proceed: bool) -> None:
        self._proceed = proceed

    @property
    def proceed(self) -> bool:
        return self._proceed

    @proceed.setter
    def proceed(self, value: bool) -> None:
        self._proceed = value

    def keys(self) -> list[str]:
        return list(self._data_objects)

    def __contains__(self, key: object) -> bool:
        return key in self._data_objects

    def __repr__(self) -> str:
        return f"DynamicContext(proceed={self._proceed}, keys={sorted(self._data_objects)})"
