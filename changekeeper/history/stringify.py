"""Rendering of tracked values into history message fragments."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from changekeeper.errors import UnconvertibleValueError
from changekeeper.models.config import DEFAULT_DATE_FORMAT, DEFAULT_DATE_KEY, DEFAULT_DATETIME_FORMAT
from changekeeper.models.values import ValueKind, classify_value, has_own_str, string_method


def _quote(text: str) -> str:
    return f'"{text}"'


def _stringable_text(value: Any, key: str | None = None) -> str:
    if has_own_str(value):
        return str(value)
    name = string_method(value)
    if name is None:
        raise UnconvertibleValueError(value, key)
    return str(getattr(value, name)())


def stringify(
    value: Any,
    key: str | None = None,
    *,
    date_key: str = DEFAULT_DATE_KEY,
    date_format: str = DEFAULT_DATE_FORMAT,
    datetime_format: str = DEFAULT_DATETIME_FORMAT,
) -> str:
    """Render *value* for a history message about *key*.

    Strings and stringable objects are double-quoted, numbers are left bare,
    booleans and None become ``TRUE``/``FALSE``/``NULL``.  Numbers use Python's
    ``str()``, so ``1.0`` stays ``1.0``.  List elements are joined with commas
    using plain ``str()`` on each element, without quoting and without the
    literal rules above: ``[True, None, 2.0]`` renders as ``True,None,2.0``.
    Datetimes use *date_format* when *key* equals *date_key*, else
    *datetime_format*; plain dates always use *date_format*.

    Raises:
        UnconvertibleValueError: if *value* is not a supported kind.
    """
    kind = classify_value(value, key)

    if kind is ValueKind.STRING:
        return _quote(value)
    if kind is ValueKind.NUMBER:
        return str(value)
    if kind is ValueKind.BOOLEAN:
        return "TRUE" if value else "FALSE"
    if kind is ValueKind.NULL:
        return "NULL"
    if kind is ValueKind.LIST:
        return ",".join(str(item) for item in value)
    if kind is ValueKind.DATETIME:
        if key == date_key or not isinstance(value, datetime):
            return value.strftime(date_format)
        return value.strftime(datetime_format)
    return _quote(_stringable_text(value, key))
