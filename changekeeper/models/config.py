"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_DATE_KEY = "date"
DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class HistoryConfig:
    """History message rendering configuration."""

    translations: dict[str, str] = field(default_factory=dict)
    message_prefixes: dict[str, str] = field(default_factory=dict)
    date_key: str = DEFAULT_DATE_KEY
    date_format: str = DEFAULT_DATE_FORMAT
    datetime_format: str = DEFAULT_DATETIME_FORMAT


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class ChangeKeeperConfig:
    """Top-level changekeeper configuration."""

    history: HistoryConfig = field(default_factory=HistoryConfig)
    log: LogConfig = field(default_factory=LogConfig)
