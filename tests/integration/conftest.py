"""Shared fixtures for changekeeper integration tests.

Provides a tracker wired to realistic slots (plain cells, object attributes
and dict entries) so scenarios can exercise the full record -> collapse ->
render pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from changekeeper.tracker.change_tracker import ChangeTracker
from changekeeper.tracker.slots import AttributeSlot, Cell


@dataclass
class Host:
    """Object whose attributes are tracked through AttributeSlot."""

    prop1: Any = None
    prop2: Any = None


class Label:
    """A value that renders through ``__str__``."""

    def __init__(self, value: str) -> None:
        self.value = value

    def __str__(self) -> str:
        return self.value


@dataclass
class Workspace:
    tracker: ChangeTracker
    var1: Cell
    var2: Cell
    host: Host


@pytest.fixture
def workspace() -> Workspace:
    """Tracker with var1="ala", var2="ola" and host.prop1 registered."""
    var1 = Cell("ala")
    var2 = Cell("ola")
    host = Host()
    tracker = (
        ChangeTracker()
        .register_slot("var1", var1)
        .register_slot("var2", var2)
        .register_slot("prop1", AttributeSlot(host, "prop1"))
    )
    return Workspace(tracker=tracker, var1=var1, var2=var2, host=host)
