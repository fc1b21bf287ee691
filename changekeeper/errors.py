"""Exceptions raised by changekeeper.

All errors are raised synchronously to the immediate caller.  Nothing in the
library retries or recovers from them.
"""

from __future__ import annotations


class ChangeKeeperError(Exception):
    """Base class for every error raised by changekeeper."""


class UnregisteredKeyError(ChangeKeeperError, LookupError):
    """Raised by ``ChangeTracker.change`` when the key has no bound slot."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Key '{key}' is not registered to watch")
        self.key = key


class UnconvertibleValueError(ChangeKeeperError, ValueError):
    """Raised when a value cannot be rendered into a history message."""

    def __init__(self, value: object, key: str | None = None) -> None:
        where = f" for key '{key}'" if key is not None else ""
        super().__init__(f"Cannot convert value of type {type(value).__name__}{where} to string")
        self.value = value
        self.key = key


class InvalidAnalysisOutcomeError(ChangeKeeperError, RuntimeError):
    """Raised if change analysis yields an outcome the tracker cannot apply."""

    def __init__(self, outcome: object) -> None:
        super().__init__(f"Unexpected analysis outcome: {outcome!r}")
        self.outcome = outcome


class InvalidInterceptorResultError(ChangeKeeperError, TypeError):
    """Raised when a message interceptor returns an unsupported shape."""

    def __init__(self, key: str, result: object) -> None:
        super().__init__(
            f"Interceptor returned {type(result).__name__} for key '{key}'; "
            "expected str, list of pieces, InterceptResult or a falsy value"
        )
        self.key = key
        self.result = result
