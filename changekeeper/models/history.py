"""Tagged results returned by history message interceptors."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class InterceptAction(StrEnum):
    """How the formatter treats an intercepted message."""

    REPLACE = "replace"  # use ``message`` verbatim
    PIECES = "pieces"  # join ``pieces`` with single spaces
    DROP = "drop"  # leave the message out of the history


@dataclass(frozen=True)
class InterceptResult:
    """Outcome of a message interceptor call."""

    action: InterceptAction
    message: str = ""
    pieces: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def replace(cls, message: str) -> InterceptResult:
        return cls(action=InterceptAction.REPLACE, message=message)

    @classmethod
    def pieces_of(cls, pieces: Sequence[str]) -> InterceptResult:
        return cls(action=InterceptAction.PIECES, pieces=tuple(pieces))

    @classmethod
    def drop(cls) -> InterceptResult:
        return cls(action=InterceptAction.DROP)


# (key, old, new, pieces, context) -> str | list[str] | InterceptResult | falsy
MessageInterceptor = Callable[[str, Any, Any, list[str], Any], Any]
