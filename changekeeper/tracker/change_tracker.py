"""ChangeTracker: records changes of named values and collapses them.

For each key the tracker keeps a list of ChangeRecord.  A new change to a
key is compared against the existing list:

    a->b then b->a   CANCEL  the key disappears from the change map
    a->b then b->c   MERGE   the last record becomes a->c
    anything else    APPEND  a new independent record is added

Forced changes are always appended.  The change map is rendered into
messages by a HistoryFormatter.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from fractions import Fraction
from typing import Any

from changekeeper.errors import InvalidAnalysisOutcomeError, UnregisteredKeyError
from changekeeper.history.formatter import HistoryFormatter
from changekeeper.models.changes import AnalysisOutcome, ChangeRecord
from changekeeper.observability.logging import get_logger
from changekeeper.tracker.slots import Slot

_log = get_logger("tracker")

_SCALAR_TYPES = (str, bytes, bool, int, float, Decimal, Fraction, date, type(None))


def strictly_equal(a: Any, b: Any) -> bool:
    """Compare two values without implicit type coercion.

    Scalars are equal when they share the exact same type and compare equal,
    so ``1``, ``1.0`` and ``True`` are all different.  Lists and tuples are
    compared element by element.  Other objects are equal only to themselves.
    """
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    if isinstance(a, _SCALAR_TYPES):
        return bool(a == b)
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(strictly_equal(x, y) for x, y in zip(a, b))
    return False


class ChangeTracker:
    """Tracks changes of named values and keeps only their net effect.

    Values are either bound to a Slot with ``register_slot`` and changed with
    ``change``, or reported directly with ``add``.  Mutating methods return
    the tracker so calls can be chained.

    Not thread-safe: confine each instance to one unit of work.
    """

    def __init__(self, formatter: HistoryFormatter | None = None) -> None:
        self._formatter = formatter or HistoryFormatter()
        # key -> chronological change records; never holds an empty list
        self._changes: dict[str, list[ChangeRecord]] = {}
        self._slots: dict[str, Slot] = {}

    # ------------------------------------------------------------------
    # History formatter
    # ------------------------------------------------------------------

    @property
    def formatter(self) -> HistoryFormatter:
        return self._formatter

    def set_formatter(self, formatter: HistoryFormatter) -> ChangeTracker:
        self._formatter = formatter
        return self

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    def register_slot(self, key: str, slot: Slot) -> ChangeTracker:
        """Bind *key* to *slot* so it can be changed with ``change``.

        Registering the same key again replaces the previous binding.
        """
        self._slots[key] = slot
        return self

    def is_registered(self, key: str) -> bool:
        return key in self._slots

    def unregister_slot(self, key: str) -> ChangeTracker:
        """Drop the slot bound to *key*.  Recorded changes are kept."""
        self._slots.pop(key, None)
        return self

    def unregister_all_slots(self) -> ChangeTracker:
        self._slots.clear()
        return self

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def change(self, key: str, new_value: Any, force: bool = False) -> ChangeTracker:
        """Write *new_value* into the slot bound to *key* and record the change.

        Nothing happens when the slot already holds a strictly equal value,
        unless *force* is set.

        Raises:
            UnregisteredKeyError: if no slot is bound to *key*.
        """
        slot = self._slots.get(key)
        if slot is None:
            _log.warning("change_of_unregistered_key", key=key)
            raise UnregisteredKeyError(key)

        old_value = slot.get()
        if force or not strictly_equal(old_value, new_value):
            self._record(key, old_value, new_value, force)
            slot.set(new_value)
        return self

    def add(self, key: str, old_value: Any, new_value: Any, force: bool = False) -> ChangeTracker:
        """Record a change of a value that is not bound to any slot."""
        if force or not strictly_equal(old_value, new_value):
            self._record(key, old_value, new_value, force)
        return self

    def _record(self, key: str, old_value: Any, new_value: Any, force: bool) -> None:
        outcome = AnalysisOutcome.APPEND if force else self._analyse(key, old_value, new_value)

        if outcome is AnalysisOutcome.CANCEL:
            del self._changes[key]
        elif outcome is AnalysisOutcome.MERGE:
            self._changes[key][-1].new = new_value
        elif outcome is AnalysisOutcome.APPEND:
            self._changes.setdefault(key, []).append(ChangeRecord(old=old_value, new=new_value))
        else:
            raise InvalidAnalysisOutcomeError(outcome)

        _log.debug("change_recorded", key=key, outcome=outcome.value, forced=force)

    def _analyse(self, key: str, old_value: Any, new_value: Any) -> AnalysisOutcome:
        records = self._changes.get(key)
        if not records:
            return AnalysisOutcome.APPEND
        if strictly_equal(new_value, records[0].old):
            return AnalysisOutcome.CANCEL
        if strictly_equal(old_value, records[-1].new):
            return AnalysisOutcome.MERGE
        return AnalysisOutcome.APPEND

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_changes(self) -> dict[str, Any]:
        """Return the newest value of every key that has recorded changes."""
        return {key: records[-1].new for key, records in self._changes.items()}

    def get_change_records(self) -> dict[str, list[ChangeRecord]]:
        """Return a copy of the full change map."""
        return {key: [record.copy() for record in records] for key, records in self._changes.items()}

    def get_history(self) -> list[str]:
        """Render all recorded changes as history messages.

        Raises:
            UnconvertibleValueError: if a recorded value cannot be rendered.
        """
        return self._formatter.render(self._changes)

    def has_changes(self, key: str | None = None) -> bool:
        if key is None:
            return bool(self._changes)
        return key in self._changes

    def __contains__(self, key: object) -> bool:
        return key in self._changes

    def __len__(self) -> int:
        return len(self._changes)

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def remove(self, key: str) -> ChangeTracker:
        """Forget all recorded changes of *key*.  Slot binding is kept."""
        self._changes.pop(key, None)
        return self

    def clear(self) -> ChangeTracker:
        """Forget all recorded changes.  Slot bindings are kept."""
        self._changes.clear()
        return self
