"""Tests for ChangeTracker: collapsing, slots, queries and removal."""

from __future__ import annotations

import pytest

from changekeeper.errors import InvalidAnalysisOutcomeError, UnregisteredKeyError
from changekeeper.history.formatter import HistoryFormatter
from changekeeper.models.changes import ChangeRecord
from changekeeper.tracker.change_tracker import ChangeTracker, strictly_equal
from changekeeper.tracker.slots import Cell

# ---------------------------------------------------------------------------
# Strict equality
# ---------------------------------------------------------------------------


class TestStrictlyEqual:
    def test_same_type_scalars_compare_by_value(self) -> None:
        assert strictly_equal("ala", "ala")
        assert strictly_equal(6, 6)
        assert strictly_equal(None, None)

    def test_no_type_coercion(self) -> None:
        """1, 1.0, True and "1" are all different values."""
        assert not strictly_equal(1, 1.0)
        assert not strictly_equal(1, True)
        assert not strictly_equal(1, "1")
        assert not strictly_equal(0, None)
        assert not strictly_equal("", None)

    def test_lists_compare_element_wise(self) -> None:
        assert strictly_equal([1, "a"], [1, "a"])
        assert not strictly_equal([1, "a"], [1.0, "a"])
        assert not strictly_equal([1], (1,))

    def test_objects_compare_by_identity(self) -> None:
        class Box:
            def __init__(self, v: int) -> None:
                self.v = v

            def __eq__(self, other: object) -> bool:
                return isinstance(other, Box) and other.v == self.v

            __hash__ = object.__hash__

        a = Box(1)
        assert strictly_equal(a, a)
        assert not strictly_equal(a, Box(1))


# ---------------------------------------------------------------------------
# Collapsing via add()
# ---------------------------------------------------------------------------


class TestCollapsing:
    def test_first_change_is_appended(self) -> None:
        tracker = ChangeTracker().add("title", "a", "b")
        assert tracker.get_change_records() == {"title": [ChangeRecord(old="a", new="b")]}

    def test_change_back_cancels(self) -> None:
        """a->b then b->a leaves no trace of the key."""
        tracker = ChangeTracker().add("title", "a", "b").add("title", "b", "a")
        assert "title" not in tracker.get_changes()
        assert tracker.get_history() == []
        assert "title" not in tracker

    def test_chained_changes_merge(self) -> None:
        """a->b then b->c nets to a->c."""
        tracker = ChangeTracker().add("title", "a", "b").add("title", "b", "c")
        assert tracker.get_changes() == {"title": "c"}
        assert tracker.get_change_records() == {"title": [ChangeRecord(old="a", new="c")]}

    def test_long_chain_collapses_to_single_record(self) -> None:
        tracker = ChangeTracker()
        values = ["a", "b", "c", "d", "e"]
        for old, new in zip(values, values[1:]):
            tracker.add("k", old, new)
        assert tracker.get_change_records() == {"k": [ChangeRecord(old="a", new="e")]}

    def test_returning_to_start_after_several_steps_cancels(self) -> None:
        tracker = ChangeTracker().add("k", "a", "b").add("k", "b", "c").add("k", "c", "a")
        assert tracker.get_changes() == {}

    def test_unrelated_change_is_appended(self) -> None:
        """A change that neither cancels nor continues the last one is kept apart."""
        tracker = ChangeTracker().add("k", "a", "b").add("k", "x", "y")
        assert tracker.get_change_records() == {
            "k": [ChangeRecord(old="a", new="b"), ChangeRecord(old="x", new="y")]
        }
        assert tracker.get_changes() == {"k": "y"}

    def test_merge_updates_last_record_only(self) -> None:
        tracker = ChangeTracker().add("k", "a", "b").add("k", "x", "y").add("k", "y", "z")
        assert tracker.get_change_records() == {
            "k": [ChangeRecord(old="a", new="b"), ChangeRecord(old="x", new="z")]
        }

    def test_cancel_compares_against_first_record(self) -> None:
        """Going back to the very first old value drops the whole list."""
        tracker = ChangeTracker().add("k", "a", "b").add("k", "x", "y").add("k", "y", "a")
        assert "k" not in tracker.get_change_records()

    def test_equal_values_are_ignored(self) -> None:
        tracker = ChangeTracker().add("k", "a", "a")
        assert tracker.get_changes() == {}

    def test_type_change_is_a_change(self) -> None:
        tracker = ChangeTracker().add("k", 1, 1.0)
        assert tracker.get_change_records() == {"k": [ChangeRecord(old=1, new=1.0)]}

    def test_keys_do_not_interact(self) -> None:
        tracker = ChangeTracker().add("a", 1, 2).add("b", 2, 1)
        assert tracker.get_changes() == {"a": 2, "b": 1}


# ---------------------------------------------------------------------------
# Forced changes
# ---------------------------------------------------------------------------


class TestForce:
    def test_forced_equal_values_are_recorded(self) -> None:
        tracker = ChangeTracker().add("k", "a", "a", force=True)
        assert tracker.get_change_records() == {"k": [ChangeRecord(old="a", new="a")]}

    def test_forced_change_is_never_collapsed(self) -> None:
        tracker = ChangeTracker().add("k", "a", "b").add("k", "b", "a", force=True)
        assert tracker.get_change_records() == {
            "k": [ChangeRecord(old="a", new="b"), ChangeRecord(old="b", new="a")]
        }

    def test_next_unforced_change_follows_first_last_rule(self) -> None:
        tracker = ChangeTracker().add("k", "a", "a", force=True).add("k", "a", "b")
        assert tracker.get_change_records() == {"k": [ChangeRecord(old="a", new="b")]}

    def test_forced_change_through_slot_writes_slot(self) -> None:
        cell = Cell("a")
        tracker = ChangeTracker().register_slot("k", cell).change("k", "a", force=True)
        assert cell.get() == "a"
        assert tracker.get_changes() == {"k": "a"}


# ---------------------------------------------------------------------------
# Slots and change()
# ---------------------------------------------------------------------------


class TestChange:
    def test_change_writes_slot_and_records(self) -> None:
        cell = Cell("ala")
        tracker = ChangeTracker().register_slot("var1", cell).change("var1", "zuzia")
        assert cell.get() == "zuzia"
        assert tracker.get_changes() == {"var1": "zuzia"}

    def test_change_to_same_value_is_noop(self) -> None:
        cell = Cell("ala")
        tracker = ChangeTracker().register_slot("var1", cell).change("var1", "ala")
        assert tracker.get_changes() == {}

    def test_change_unregistered_key_raises(self) -> None:
        tracker = ChangeTracker()
        with pytest.raises(UnregisteredKeyError) as exc_info:
            tracker.change("missing", 1)
        assert exc_info.value.key == "missing"
        assert isinstance(exc_info.value, LookupError)

    def test_reregister_overwrites_binding(self) -> None:
        first, second = Cell(1), Cell(10)
        tracker = ChangeTracker().register_slot("k", first).register_slot("k", second)
        tracker.change("k", 11)
        assert first.get() == 1
        assert second.get() == 11
        assert tracker.get_change_records() == {"k": [ChangeRecord(old=10, new=11)]}

    def test_unregister_keeps_changes(self) -> None:
        tracker = ChangeTracker().register_slot("k", Cell(1)).change("k", 2)
        tracker.unregister_slot("k")
        assert not tracker.is_registered("k")
        assert tracker.get_changes() == {"k": 2}
        with pytest.raises(UnregisteredKeyError):
            tracker.change("k", 3)

    def test_unregister_all_slots(self) -> None:
        tracker = ChangeTracker().register_slot("a", Cell()).register_slot("b", Cell())
        tracker.unregister_all_slots()
        assert not tracker.is_registered("a")
        assert not tracker.is_registered("b")

    def test_unregister_unknown_key_is_noop(self) -> None:
        ChangeTracker().unregister_slot("nope")


# ---------------------------------------------------------------------------
# Queries and removal
# ---------------------------------------------------------------------------


class TestQueriesAndRemoval:
    def test_get_changes_preserves_first_change_order(self) -> None:
        tracker = ChangeTracker().add("z", 1, 2).add("a", 1, 2).add("z", 2, 3)
        assert list(tracker.get_changes()) == ["z", "a"]

    def test_get_change_records_is_a_copy(self) -> None:
        tracker = ChangeTracker().add("k", 1, 2)
        records = tracker.get_change_records()
        records["k"][0].new = 99
        records["k"].append(ChangeRecord(old=0, new=0))
        assert tracker.get_change_records() == {"k": [ChangeRecord(old=1, new=2)]}

    def test_len_and_has_changes(self) -> None:
        tracker = ChangeTracker()
        assert len(tracker) == 0
        assert not tracker.has_changes()
        tracker.add("a", 1, 2).add("b", 1, 2)
        assert len(tracker) == 2
        assert tracker.has_changes()
        assert tracker.has_changes("a")
        assert not tracker.has_changes("c")

    def test_remove_drops_one_key(self) -> None:
        tracker = ChangeTracker().add("a", 1, 2).add("b", 1, 2).remove("a")
        assert tracker.get_changes() == {"b": 2}

    def test_remove_unknown_key_is_noop(self) -> None:
        tracker = ChangeTracker().add("a", 1, 2).remove("zzz")
        assert tracker.get_changes() == {"a": 2}

    def test_clear_keeps_slots(self) -> None:
        cell = Cell(1)
        tracker = ChangeTracker().register_slot("k", cell).change("k", 2).clear()
        assert tracker.get_changes() == {}
        assert tracker.is_registered("k")
        tracker.change("k", 3)
        assert tracker.get_change_records() == {"k": [ChangeRecord(old=2, new=3)]}


# ---------------------------------------------------------------------------
# Formatter wiring and internal errors
# ---------------------------------------------------------------------------


class TestFormatterWiring:
    def test_default_formatter_is_created(self) -> None:
        assert isinstance(ChangeTracker().formatter, HistoryFormatter)

    def test_set_formatter_replaces_it(self) -> None:
        formatter = HistoryFormatter(translations={"Changed": "Zmiana"})
        tracker = ChangeTracker().set_formatter(formatter).add("k", None, 1)
        assert tracker.formatter is formatter
        assert tracker.get_history() == ["Zmiana k to 1"]

    def test_invalid_analysis_outcome_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        tracker = ChangeTracker().add("k", 1, 2)
        monkeypatch.setattr(tracker, "_analyse", lambda key, old, new: "bogus")
        with pytest.raises(InvalidAnalysisOutcomeError) as exc_info:
            tracker.add("k", 5, 6)
        assert exc_info.value.outcome == "bogus"
        assert tracker.get_changes() == {"k": 2}
