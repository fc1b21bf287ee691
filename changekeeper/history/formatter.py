"""HistoryFormatter: turns a change map into human-readable messages.

Each ChangeRecord becomes one message built from pieces::

    <prefix> [<from> <old>] <to> <new>

where the prefix is a per-key override or ``"<Changed> <key>"``.  The words
"Changed", "from" and "to" can be translated.  An optional interceptor may
rewrite the message, replace its pieces or drop it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from changekeeper.errors import InvalidInterceptorResultError
from changekeeper.history.stringify import stringify
from changekeeper.models.changes import ChangeRecord
from changekeeper.models.config import DEFAULT_DATE_FORMAT, DEFAULT_DATE_KEY, DEFAULT_DATETIME_FORMAT
from changekeeper.models.history import InterceptAction, InterceptResult, MessageInterceptor
from changekeeper.observability.logging import get_logger

_log = get_logger("history.formatter")

WORDS = ("Changed", "from", "to")


def _default_translations() -> dict[str, str]:
    return {word: word for word in WORDS}


def normalize_intercept_result(key: str, result: Any) -> InterceptResult:
    """Convert a raw interceptor return value into an InterceptResult.

    ``str`` replaces the message (even when empty), a list or tuple replaces
    its pieces, and any other falsy value such as False or None drops it.

    Raises:
        InvalidInterceptorResultError: for any other truthy value.
    """
    if isinstance(result, InterceptResult):
        return result
    if isinstance(result, str):
        return InterceptResult.replace(result)
    if isinstance(result, (list, tuple)):
        return InterceptResult.pieces_of([str(piece) for piece in result])
    if not result:
        return InterceptResult.drop()
    raise InvalidInterceptorResultError(key, result)


class HistoryFormatter:
    """Renders change records into history messages.

    Args:
        message_prefixes: Per-key replacements for the ``"Changed <key>"`` prefix.
        translations:     Replacements for the words "Changed", "from", "to".
        interceptor:      Optional hook called as
                          ``interceptor(key, old, new, pieces, context)``.
        context:          Passed through to the interceptor untouched.
        date_key:         Key whose datetime values render as dates only.
        date_format:      strftime format for dates.
        datetime_format:  strftime format for datetimes.
    """

    def __init__(
        self,
        message_prefixes: Mapping[str, str] | None = None,
        translations: Mapping[str, str] | None = None,
        interceptor: MessageInterceptor | None = None,
        *,
        context: Any = None,
        date_key: str = DEFAULT_DATE_KEY,
        date_format: str = DEFAULT_DATE_FORMAT,
        datetime_format: str = DEFAULT_DATETIME_FORMAT,
    ) -> None:
        self._translations = _default_translations()
        self._message_prefixes: dict[str, str] = {}
        self._interceptor: MessageInterceptor | None = None
        self._context = context
        self._date_key = date_key
        self._date_format = date_format
        self._datetime_format = datetime_format

        self.set_translations(translations or {})
        self.set_message_prefixes(message_prefixes or {})
        self.set_interceptor(interceptor)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def translations(self) -> dict[str, str]:
        return dict(self._translations)

    @property
    def message_prefixes(self) -> dict[str, str]:
        return dict(self._message_prefixes)

    @property
    def context(self) -> Any:
        return self._context

    def set_translations(self, translations: Mapping[str, str]) -> HistoryFormatter:
        """Merge *translations* over the current ones.

        Only "Changed", "from" and "to" are recognised; other keys are
        ignored.  An empty mapping restores the defaults.
        """
        if not translations:
            self._translations = _default_translations()
            return self

        for word, phrase in translations.items():
            if word in self._translations:
                self._translations[word] = phrase
            else:
                _log.debug("unknown_translation_ignored", word=word)
        return self

    def set_message_prefixes(self, message_prefixes: Mapping[str, str]) -> HistoryFormatter:
        """Replace all per-key message prefixes with *message_prefixes*."""
        self._message_prefixes = dict(message_prefixes)
        return self

    def set_interceptor(self, interceptor: MessageInterceptor | None) -> HistoryFormatter:
        self._interceptor = interceptor
        return self

    def set_context(self, context: Any) -> HistoryFormatter:
        self._context = context
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, changes: Mapping[str, Sequence[ChangeRecord]]) -> list[str]:
        """Render every record of every key, in order, into messages.

        Raises:
            UnconvertibleValueError: if a value cannot be rendered.  No
                partial result is returned.
        """
        history: list[str] = []
        for key, records in changes.items():
            for record in records:
                message = self._render_message(key, record)
                if message is not None:
                    history.append(message)
        return history

    def stringify(self, value: Any, key: str | None = None) -> str:
        """Render a single value using this formatter's date settings."""
        return stringify(
            value,
            key,
            date_key=self._date_key,
            date_format=self._date_format,
            datetime_format=self._datetime_format,
        )

    def _render_message(self, key: str, record: ChangeRecord) -> str | None:
        pieces = [self._message_prefixes.get(key, f"{self._translations['Changed']} {key}")]

        if record.old is not None:
            pieces.append(self._translations["from"])
            pieces.append(self.stringify(record.old, key))

        pieces.append(self._translations["to"])
        pieces.append(self.stringify(record.new, key))

        if self._interceptor is None:
            return " ".join(pieces)

        raw = self._interceptor(key, record.old, record.new, list(pieces), self._context)
        result = normalize_intercept_result(key, raw)

        if result.action == InterceptAction.DROP:
            _log.debug("history_message_dropped", key=key)
            return None
        if result.action == InterceptAction.REPLACE:
            return result.message
        return " ".join(result.pieces)
