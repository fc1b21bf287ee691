"""Core data structures for changekeeper."""

from changekeeper.models.changes import AnalysisOutcome, ChangeRecord
from changekeeper.models.config import ChangeKeeperConfig, HistoryConfig, LogConfig
from changekeeper.models.history import InterceptAction, InterceptResult, MessageInterceptor
from changekeeper.models.values import ValueKind, classify_value

__all__ = [
    "AnalysisOutcome",
    "ChangeKeeperConfig",
    "ChangeRecord",
    "HistoryConfig",
    "InterceptAction",
    "InterceptResult",
    "LogConfig",
    "MessageInterceptor",
    "ValueKind",
    "classify_value",
]
