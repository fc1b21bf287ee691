"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from changekeeper.models.config import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_DATE_KEY,
    DEFAULT_DATETIME_FORMAT,
    ChangeKeeperConfig,
    HistoryConfig,
    LogConfig,
)

# env suffix -> translation word
_TRANSLATION_ENV = {
    "TRANSLATION_CHANGED": "Changed",
    "TRANSLATION_FROM": "from",
    "TRANSLATION_TO": "to",
}


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"CHANGEKEEPER_{key}", default)


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _parse_message_prefixes(value: str) -> dict[str, str]:
    """Parse ``key=prefix,key2=prefix2`` into a dict.

    Raises:
        ValueError: if an entry has no ``=`` or an empty key.
    """
    prefixes: dict[str, str] = {}
    for entry in value.split(","):
        if not entry.strip():
            continue
        key, sep, prefix = entry.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid message prefix entry: {entry!r}. Expected key=prefix")
        prefixes[key] = prefix.strip()
    return prefixes


def _load_translations() -> dict[str, str]:
    translations: dict[str, str] = {}
    for env_key, word in _TRANSLATION_ENV.items():
        value = _env(env_key)
        if value:
            translations[word] = value
    return translations


def load_config() -> ChangeKeeperConfig:
    """Load configuration from CHANGEKEEPER_* environment variables."""
    return ChangeKeeperConfig(
        history=HistoryConfig(
            translations=_load_translations(),
            message_prefixes=_parse_message_prefixes(_env("MESSAGE_PREFIXES", "")),
            date_key=_env("DATE_KEY", DEFAULT_DATE_KEY),
            date_format=_env("DATE_FORMAT", DEFAULT_DATE_FORMAT),
            datetime_format=_env("DATETIME_FORMAT", DEFAULT_DATETIME_FORMAT),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )
