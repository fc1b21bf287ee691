"""Change tracking: slot bindings and the collapsing change map.

Submodules:
    slots           -- Read/write cells binding a key to live storage.
    change_tracker  -- ChangeTracker with merge/cancel collapsing.
"""

from changekeeper.tracker.change_tracker import ChangeTracker, strictly_equal
from changekeeper.tracker.slots import AttributeSlot, Cell, ItemSlot, Slot

__all__ = [
    "AttributeSlot",
    "Cell",
    "ChangeTracker",
    "ItemSlot",
    "Slot",
    "strictly_equal",
]
