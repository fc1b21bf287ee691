"""Tagging of the value shapes that can appear in a history message."""

from __future__ import annotations

import numbers
from datetime import date
from enum import StrEnum

from changekeeper.errors import UnconvertibleValueError


class ValueKind(StrEnum):
    """Kind of a tracked value, as far as history rendering is concerned."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    LIST = "list"
    DATETIME = "datetime"
    STRINGABLE = "stringable"


# Checked in order, after ``__str__``.
STRING_METHODS = ("to_string", "as_string")


def has_own_str(value: object) -> bool:
    """Return True if the value's class overrides ``object.__str__``."""
    return type(value).__str__ is not object.__str__


def string_method(value: object) -> str | None:
    """Name of the first callable string-conversion method on *value*, if any."""
    for name in STRING_METHODS:
        if callable(getattr(value, name, None)):
            return name
    return None


def classify_value(value: object, key: str | None = None) -> ValueKind:
    """Return the ValueKind of *value*.

    Raises:
        UnconvertibleValueError: if *value* is none of the supported kinds.
    """
    if isinstance(value, str):
        return ValueKind.STRING
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, numbers.Number) and not isinstance(value, complex):
        return ValueKind.NUMBER
    if value is None:
        return ValueKind.NULL
    if isinstance(value, (list, tuple)):
        return ValueKind.LIST
    if isinstance(value, date):
        return ValueKind.DATETIME
    if has_own_str(value) or string_method(value) is not None:
        return ValueKind.STRINGABLE
    raise UnconvertibleValueError(value, key)
