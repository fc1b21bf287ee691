"""Change records and the outcomes of change analysis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class AnalysisOutcome(StrEnum):
    """What the tracker does with a newly observed change."""

    APPEND = "append"  # record as a new, independent change
    MERGE = "merge"  # a->b + b->c = a->c
    CANCEL = "cancel"  # a->b + b->a = no change at all


@dataclass
class ChangeRecord:
    """Net change of one tracked key.

    ``old`` is the value before the tracked window began and ``new`` the most
    recent value.  Not frozen: a MERGE rewrites ``new`` in place.
    """

    old: Any
    new: Any

    def copy(self) -> ChangeRecord:
        return ChangeRecord(old=self.old, new=self.new)
