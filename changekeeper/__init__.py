"""changekeeper: collapse value changes into a minimal audit history.

Exports:
    ChangeTracker     -- Records changes per key and collapses them
                         (a->b + b->c = a->c, a->b + b->a = nothing).
    HistoryFormatter  -- Renders recorded changes as messages such as
                         ``Changed title from "old" to "new"``.
    Cell, AttributeSlot, ItemSlot -- Read/write slots for ``change()``.
    build_tracker     -- Factory wiring a tracker from ChangeKeeperConfig.
"""

from __future__ import annotations

from changekeeper.config import load_config
from changekeeper.errors import (
    ChangeKeeperError,
    InvalidAnalysisOutcomeError,
    InvalidInterceptorResultError,
    UnconvertibleValueError,
    UnregisteredKeyError,
)
from changekeeper.history import HistoryFormatter, stringify
from changekeeper.models import (
    AnalysisOutcome,
    ChangeKeeperConfig,
    ChangeRecord,
    InterceptAction,
    InterceptResult,
    ValueKind,
)
from changekeeper.observability.logging import get_logger, setup_logging
from changekeeper.tracker import AttributeSlot, Cell, ChangeTracker, ItemSlot, Slot, strictly_equal

_log = get_logger("changekeeper")

__version__ = "0.1.0"

__all__ = [
    "AnalysisOutcome",
    "AttributeSlot",
    "Cell",
    "ChangeKeeperConfig",
    "ChangeKeeperError",
    "ChangeRecord",
    "ChangeTracker",
    "HistoryFormatter",
    "InterceptAction",
    "InterceptResult",
    "InvalidAnalysisOutcomeError",
    "InvalidInterceptorResultError",
    "ItemSlot",
    "Slot",
    "UnconvertibleValueError",
    "UnregisteredKeyError",
    "ValueKind",
    "build_tracker",
    "get_logger",
    "setup_logging",
    "stringify",
    "strictly_equal",
]


def build_tracker(
    config: ChangeKeeperConfig | None = None,
    configure_logging: bool = False,
) -> ChangeTracker:
    """Build a ChangeTracker whose formatter follows *config*.

    When *config* is None it is loaded from CHANGEKEEPER_* environment
    variables (see ``changekeeper.config.load_config``).  Logging is left to
    the embedding application unless *configure_logging* is set, in which
    case structlog is set up at ``config.log.level``.
    """
    if config is None:
        config = load_config()
    if configure_logging:
        setup_logging(config.log.level)

    history = config.history
    formatter = HistoryFormatter(
        message_prefixes=history.message_prefixes,
        translations=history.translations,
        date_key=history.date_key,
        date_format=history.date_format,
        datetime_format=history.datetime_format,
    )
    _log.debug(
        "tracker_built",
        translations=formatter.translations,
        message_prefixes=sorted(formatter.message_prefixes),
    )
    return ChangeTracker(formatter=formatter)
