"""Read/write cells that bind a tracked key to live storage.

``ChangeTracker.change`` reads the current value from a slot, records the
change, then writes the new value back.  Callers wrap their own storage
(a variable, an object attribute, a dict entry) in one of these cells.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Slot(Protocol):
    """Anything that can be read and written."""

    def get(self) -> Any: ...

    def set(self, value: Any) -> None: ...


class Cell:
    """A slot that owns its value.  Stands in for a plain variable."""

    __slots__ = ("value",)

    def __init__(self, value: Any = None) -> None:
        self.value = value

    def get(self) -> Any:
        return self.value

    def set(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Cell({self.value!r})"


class AttributeSlot:
    """A slot backed by an attribute of a host object.

    A missing attribute reads as ``None``; writing creates it.
    """

    __slots__ = ("_obj", "_name")

    def __init__(self, obj: object, name: str) -> None:
        self._obj = obj
        self._name = name

    def get(self) -> Any:
        return getattr(self._obj, self._name, None)

    def set(self, value: Any) -> None:
        setattr(self._obj, self._name, value)

    def __repr__(self) -> str:
        return f"AttributeSlot({type(self._obj).__name__}.{self._name})"


class ItemSlot:
    """A slot backed by an entry of a mutable mapping.

    A missing entry reads as ``None``; writing creates it.
    """

    __slots__ = ("_mapping", "_key")

    def __init__(self, mapping: MutableMapping[Any, Any], key: Any) -> None:
        self._mapping = mapping
        self._key = key

    def get(self) -> Any:
        return self._mapping.get(self._key)

    def set(self, value: Any) -> None:
        self._mapping[self._key] = value

    def __repr__(self) -> str:
        return f"ItemSlot({self._key!r})"
